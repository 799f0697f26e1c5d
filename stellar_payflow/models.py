"""
Data model for the payment flow.

Frozen dataclasses for everything that crosses a component boundary
(snapshots, intents, envelopes) and one mutable ``SessionState`` record
owned by the session manager.

Invariants:
    - An AccountSnapshot is fetched fresh before every build. Sequence
      numbers are single-use; a snapshot is never reused after a
      submission attempt.
    - A PaymentIntent always has a non-empty destination and a positive
      native amount with at most 7 fractional digits.
    - Envelopes are transient: built, signed, submitted, dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import StrEnum

from stellar_payflow.errors import InvalidPaymentIntentError
from stellar_payflow.outcome import SubmissionOutcome

NATIVE_ASSET = "native"

# Stellar amounts are int64 stroops: 7 fractional digits.
_MAX_AMOUNT_DECIMALS = 7


# =========================================================================
# Ledger state
# =========================================================================


@dataclass(frozen=True)
class Balance:
    """One balance line of an account.

    Attributes:
        asset: "native", "CODE:ISSUER" or "liquidity_pool:<id>".
        amount: Decimal string as reported by the gateway.
    """

    asset: str
    amount: str


@dataclass(frozen=True)
class AccountSnapshot:
    """Account state at the time of a gateway read.

    Attributes:
        address: Account id (G-address).
        sequence: Current sequence number. The next transaction uses
            sequence + 1.
        balances: Balance lines in gateway order.
    """

    address: str
    sequence: int
    balances: tuple[Balance, ...] = ()

    def native_balance(self) -> str:
        """Native balance, or "0" when no native line is present."""
        for balance in self.balances:
            if balance.asset == NATIVE_ASSET:
                return balance.amount
        return "0"


# =========================================================================
# Payment intent
# =========================================================================


def _validate_amount(amount: str) -> None:
    try:
        value = Decimal(amount)
    except InvalidOperation:
        raise InvalidPaymentIntentError(f"Amount is not a number: {amount!r}") from None
    if not value.is_finite() or value <= 0:
        raise InvalidPaymentIntentError("Amount must be greater than zero.")
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and -exponent > _MAX_AMOUNT_DECIMALS:
        raise InvalidPaymentIntentError(
            f"Amount supports at most {_MAX_AMOUNT_DECIMALS} decimal places."
        )


@dataclass(frozen=True)
class PaymentIntent:
    """A user-supplied native payment.

    Raises:
        InvalidPaymentIntentError: On an empty destination or amount,
            a non-positive amount, or a non-native asset.
    """

    destination: str
    amount: str
    asset: str = NATIVE_ASSET

    def __post_init__(self) -> None:
        if not self.destination or not self.amount:
            raise InvalidPaymentIntentError("Fill in the destination and the amount.")
        if self.asset != NATIVE_ASSET:
            raise InvalidPaymentIntentError("Only native payments are supported.")
        _validate_amount(self.amount)


# =========================================================================
# Envelopes
# =========================================================================


@dataclass(frozen=True)
class UnsignedEnvelope:
    """An unsigned transaction, encoded as base64 XDR.

    Attributes:
        xdr: Base64 XDR of the transaction envelope (no signatures).
        source: Source account id.
        sequence: Sequence number embedded in the transaction.
        max_time: Absolute deadline (unix seconds) after which the
            ledger rejects the transaction.
        network_passphrase: Passphrase the envelope was built for.
    """

    xdr: str
    source: str
    sequence: int
    max_time: int
    network_passphrase: str


@dataclass(frozen=True)
class SignedEnvelope:
    """A signed envelope returned by the wallet. Contents are opaque."""

    xdr: str
    network_passphrase: str


# =========================================================================
# Session state
# =========================================================================


class SessionStatus(StrEnum):
    """Connection lifecycle of a session."""

    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"


@dataclass
class SessionState:
    """The single mutable record the presentation layer renders.

    Only the session manager and the submission coordinator write to it.

    Attributes:
        status: Connection lifecycle status.
        selected_wallet_name: Display name of the chosen wallet.
        address: Connected account id, None when disconnected.
        balance: Native balance of ``address``, None if unknown.
        last_outcome: Outcome of the most recent payment attempt.
        message: User-facing status line of the last action.
        balance_error: Failure of the most recent balance refresh,
            reported apart from the payment outcome.
    """

    status: SessionStatus = SessionStatus.DISCONNECTED
    selected_wallet_name: str | None = None
    address: str | None = None
    balance: str | None = None
    last_outcome: SubmissionOutcome | None = None
    message: str | None = None
    balance_error: str | None = None

    def clear(self) -> None:
        """Return to a fully disconnected state."""
        self.status = SessionStatus.DISCONNECTED
        self.selected_wallet_name = None
        self.address = None
        self.balance = None
        self.last_outcome = None
        self.balance_error = None
