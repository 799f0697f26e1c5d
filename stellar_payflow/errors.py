"""
Error taxonomy for the payment flow.

Every failure a component can raise is a ``PaymentFlowError`` carrying an
``ErrorCategory`` and a short user-facing ``message``. Session actions
catch these at the action boundary and turn them into a single status
line; nothing here is fatal to the process.

Classified gateway rejections (DestinationNotFunded, StaleSequenceNumber,
GenericRejection) are values in ``outcome.py``, not exceptions: they are
expected results of a submission, not control flow.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCategory(StrEnum):
    """User-visible failure categories."""

    CONNECTIVITY_FAILURE = "CONNECTIVITY_FAILURE"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    GATEWAY_REJECTED = "GATEWAY_REJECTED"
    PROVIDER_DECLINED = "PROVIDER_DECLINED"
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
    DESTINATION_NOT_FUNDED = "DESTINATION_NOT_FUNDED"
    STALE_SEQUENCE_NUMBER = "STALE_SEQUENCE_NUMBER"
    GENERIC_REJECTION = "GENERIC_REJECTION"
    INVALID_INPUT = "INVALID_INPUT"
    NOT_CONNECTED = "NOT_CONNECTED"
    INVALID_STATE = "INVALID_STATE"
    BUSY = "BUSY"


class PaymentFlowError(Exception):
    """Base exception for payment flow failures."""

    category: ErrorCategory = ErrorCategory.CONNECTIVITY_FAILURE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConnectivityError(PaymentFlowError):
    """The gateway could not be reached or returned no structured answer."""

    category = ErrorCategory.CONNECTIVITY_FAILURE


class AccountNotFoundError(PaymentFlowError):
    """The address has no presence on the ledger (unfunded account)."""

    category = ErrorCategory.ACCOUNT_NOT_FOUND

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(
            "Account not found on the test network. "
            "Fund it with Friendbot and try again."
        )


class GatewayRejectedError(PaymentFlowError):
    """The gateway answered a read with a structured error body.

    The raw problem document is kept so the classifier can interpret it.
    """

    category = ErrorCategory.GATEWAY_REJECTED

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        problem: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.problem = problem or {}
        super().__init__(message)


class ProviderDeclinedError(PaymentFlowError):
    """The user or the wallet refused or cancelled the request."""

    category = ErrorCategory.PROVIDER_DECLINED


class NetworkMismatchError(ProviderDeclinedError):
    """An envelope does not belong to the expected network passphrase."""


class ProviderUnavailableError(PaymentFlowError):
    """The wallet provider is missing, unknown or misconfigured."""

    category = ErrorCategory.PROVIDER_UNAVAILABLE


class InvalidPaymentIntentError(PaymentFlowError, ValueError):
    """Destination or amount failed validation."""

    category = ErrorCategory.INVALID_INPUT


class NotConnectedError(PaymentFlowError):
    """An action needs a connected wallet and there is none."""

    category = ErrorCategory.NOT_CONNECTED

    def __init__(self, message: str = "Connect a wallet first.") -> None:
        super().__init__(message)


class SessionStateError(PaymentFlowError):
    """An action is not valid from the current session status."""

    category = ErrorCategory.INVALID_STATE


class ActionInProgressError(PaymentFlowError):
    """Another action is still in flight for this session."""

    category = ErrorCategory.BUSY

    def __init__(self, requested: str, active: str) -> None:
        self.requested = requested
        self.active = active
        super().__init__(
            f"Cannot {requested} while {active} is still in progress."
        )
