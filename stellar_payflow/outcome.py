"""
Submission outcomes and classified rejection reasons.

A payment attempt ends in exactly one of:
    - ``Confirmed(transaction_id)`` — the gateway accepted the transaction.
    - ``Rejected(reason)`` — the gateway refused it, or could not be reached.
    - ``ProviderDeclined(reason)`` — the wallet refused, or returned an
      envelope that does not belong to the expected network.

Rejection reasons each carry a category and a user-facing remediation
message:
    - DestinationNotFunded → fund or create the destination account.
    - StaleSequenceNumber → refresh the balance and try again.
    - GenericRejection → show the raw result codes.
    - ConnectivityReason → the gateway gave no structured answer; retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from stellar_payflow.config import transaction_url
from stellar_payflow.errors import ErrorCategory

# =========================================================================
# Rejection reasons
# =========================================================================


@dataclass(frozen=True)
class DestinationNotFunded:
    """The destination account does not exist on the ledger."""

    transaction_code: str | None = None
    operation_code: str | None = None

    category = ErrorCategory.DESTINATION_NOT_FUNDED

    @property
    def message(self) -> str:
        return (
            "The destination account does not exist. "
            "Use a funded account or create the account first."
        )


@dataclass(frozen=True)
class StaleSequenceNumber:
    """The sequence number embedded in the transaction was already used."""

    transaction_code: str | None = None
    operation_code: str | None = None

    category = ErrorCategory.STALE_SEQUENCE_NUMBER

    @property
    def message(self) -> str:
        return "Invalid sequence number. Refresh the balance and try again."


@dataclass(frozen=True)
class GenericRejection:
    """Any other structured rejection; the raw codes are shown as-is."""

    transaction_code: str
    operation_code: str | None = None

    category = ErrorCategory.GENERIC_REJECTION

    @property
    def message(self) -> str:
        suffix = f" ({self.operation_code})" if self.operation_code else ""
        return f"The gateway rejected the transaction: {self.transaction_code}{suffix}."


@dataclass(frozen=True)
class ConnectivityReason:
    """No structured rejection was available (transport failure, timeout)."""

    detail: str | None = None

    category = ErrorCategory.CONNECTIVITY_FAILURE

    @property
    def message(self) -> str:
        base = "Could not send the transaction."
        return f"{base} {self.detail}" if self.detail else base


ClassifiedReason = Union[DestinationNotFunded, StaleSequenceNumber, GenericRejection]

RejectionReason = Union[ClassifiedReason, ConnectivityReason]


# =========================================================================
# Outcomes
# =========================================================================


@dataclass(frozen=True)
class Confirmed:
    """The gateway accepted the transaction."""

    transaction_id: str

    @property
    def message(self) -> str:
        return "Transaction sent to the test network."

    @property
    def explorer_url(self) -> str:
        return transaction_url(self.transaction_id)


@dataclass(frozen=True)
class Rejected:
    """The transaction was not applied."""

    reason: RejectionReason

    @property
    def message(self) -> str:
        return self.reason.message


@dataclass(frozen=True)
class ProviderDeclined:
    """The wallet refused or produced an unusable signature."""

    reason: str

    @property
    def message(self) -> str:
        return self.reason


SubmissionOutcome = Union[Confirmed, Rejected, ProviderDeclined]
