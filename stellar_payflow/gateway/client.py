"""
Ledger gateway protocol — the network boundary.

Defines the interface the payment flow depends on, not a concrete
implementation. Business logic never sees HTTP.

Concrete implementations:
    - HorizonGateway (real, over an HttpTransport)
    - FakeGateway (tests)

The protocol has exactly two methods:
    - load_account(address) → AccountSnapshot
    - submit_transaction(signed_xdr) → SubmitResult

``load_account`` raises for failures (the caller cannot continue without
a snapshot). ``submit_transaction`` captures "expected" rejections in the
result object; only transport-level failures raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from stellar_payflow.models import AccountSnapshot


@dataclass(frozen=True)
class SubmitResult:
    """Result of submitting a signed envelope.

    Attributes:
        accepted: Whether the ledger applied the transaction.
        transaction_id: Transaction hash. Present on acceptance.
        status_code: HTTP status of the gateway answer.
        problem: Raw problem document on rejection (empty on success).
            Passed as-is to the error classifier.
        detail: Human-readable detail for diagnostics.
    """

    accepted: bool
    transaction_id: str | None = None
    status_code: int | None = None
    problem: dict[str, Any] = field(default_factory=dict)
    detail: str | None = None


@runtime_checkable
class LedgerGateway(Protocol):
    """Interface for ledger reads and transaction submission."""

    async def load_account(self, address: str) -> AccountSnapshot:
        """Fetch the current state of an account.

        Raises:
            AccountNotFoundError: The account does not exist.
            GatewayRejectedError: Any other structured error answer.
            Exception: Transport failures propagate unchanged.
        """
        ...

    async def submit_transaction(self, signed_xdr: str) -> SubmitResult:
        """Submit a signed envelope (base64 XDR).

        Returns:
            SubmitResult. Never raises for gateway rejections; those are
            captured in the result. Transport failures propagate.
        """
        ...
