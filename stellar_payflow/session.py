"""
Session manager — connect, disconnect and pay.

Owns the SessionState the presentation layer renders and the three user
actions that change it. Each action is one coroutine; all of them share
one ActionGuard, so connect, disconnect, pay and refresh are mutually
exclusive. A rejected concurrent call touches neither the state nor any
collaborator.

Status transitions:
    DISCONNECTED → CONNECTING (connect)
    CONNECTING → CONNECTED (address obtained)
    CONNECTING → DISCONNECTED (selection closed, wallet failure,
                               cancellation; partial state cleared)
    CONNECTED → DISCONNECTED (disconnect)

A balance load failure right after connecting keeps the session
CONNECTED: an unfunded test account is still a connected account, it
just needs funding.

Payment pipeline (send_payment):
    1. Validate the intent.
    2. Load a fresh snapshot (never reuse a sequence number).
    3. Build the unsigned envelope.
    4. Sign through the wallet.
    5. Submit through the coordinator (which refreshes the balance).

Every failure is caught here and turned into one ActionResult and one
status line in ``SessionState.message``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from typing import Callable

from stellar_payflow.account import AccountReader
from stellar_payflow.builder import build_payment
from stellar_payflow.config import TESTNET_PASSPHRASE, Settings
from stellar_payflow.errors import (
    ActionInProgressError,
    ErrorCategory,
    NotConnectedError,
    PaymentFlowError,
    ProviderDeclinedError,
    SessionStateError,
)
from stellar_payflow.gateway.client import LedgerGateway
from stellar_payflow.gateway.horizon import HorizonGateway
from stellar_payflow.gateway.transport import HttpxTransport
from stellar_payflow.guard import ActionGuard
from stellar_payflow.models import PaymentIntent, SessionState, SessionStatus
from stellar_payflow.outcome import (
    Confirmed,
    ProviderDeclined,
    Rejected,
    SubmissionOutcome,
)
from stellar_payflow.signing import SigningDelegate
from stellar_payflow.submission import SubmissionCoordinator
from stellar_payflow.wallet.provider import WalletOption, WalletProvider, as_provider_error

logger = logging.getLogger(__name__)

# Async callback standing in for the wallet selection dialog. Returns the
# chosen wallet id, or None when the user closes the dialog.
WalletChooser = Callable[[Sequence[WalletOption]], Awaitable[str | None]]


def choose_wallet(wallet_id: str) -> WalletChooser:
    """A chooser that always picks ``wallet_id``."""

    async def _choose(options: Sequence[WalletOption]) -> str | None:
        return wallet_id

    return _choose


@dataclass(frozen=True)
class ActionResult:
    """What a session action reports back.

    Attributes:
        ok: Whether the action achieved its goal.
        message: User-facing status line (also stored on the state).
        category: Failure category, None on plain success.
        outcome: Payment outcome, for send_payment only.
    """

    ok: bool
    message: str | None = None
    category: ErrorCategory | None = None
    outcome: SubmissionOutcome | None = None

    @classmethod
    def failure(
        cls,
        error: PaymentFlowError,
        outcome: SubmissionOutcome | None = None,
    ) -> ActionResult:
        return cls(ok=False, message=error.message, category=error.category, outcome=outcome)


def _category_of(outcome: SubmissionOutcome) -> ErrorCategory | None:
    if isinstance(outcome, Rejected):
        return outcome.reason.category
    if isinstance(outcome, ProviderDeclined):
        return ErrorCategory.PROVIDER_DECLINED
    return None


class SessionManager:
    """Owns the session state and dispatches user actions.

    Args:
        provider: Wallet provider (address, signing, session end).
        gateway: Ledger gateway (account reads, submission).
        network_passphrase: Network for build, sign and submit.
        now_fn: Clock for transaction deadlines. Inject for tests.
    """

    def __init__(
        self,
        provider: WalletProvider,
        gateway: LedgerGateway,
        *,
        network_passphrase: str = TESTNET_PASSPHRASE,
        now_fn: Callable[[], float] = time.time,
    ) -> None:
        self._provider = provider
        self._network_passphrase = network_passphrase
        self._now_fn = now_fn
        self._state = SessionState()
        self._guard = ActionGuard()
        self._reader = AccountReader(gateway)
        self._signer = SigningDelegate(provider)
        self._coordinator = SubmissionCoordinator(
            gateway,
            self._reader,
            self._state,
            network_passphrase=network_passphrase,
        )

    @classmethod
    def from_settings(
        cls,
        provider: WalletProvider,
        settings: Settings | None = None,
    ) -> SessionManager:
        """Wire a session to Horizon from configuration."""
        settings = settings or Settings()
        gateway = HorizonGateway(
            settings.horizon_url,
            HttpxTransport(timeout=settings.request_timeout_seconds),
        )
        return cls(provider, gateway, network_passphrase=settings.network_passphrase)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def busy(self) -> bool:
        """True while an action is in flight (the UI disables its buttons)."""
        return self._guard.busy

    # -----------------------------------------------------------------
    # Actions
    # -----------------------------------------------------------------

    async def connect(self, choose: WalletChooser) -> ActionResult:
        """Pick a wallet, obtain its address and load the balance."""
        try:
            with self._guard.hold("connect"):
                return await self._connect(choose)
        except ActionInProgressError as exc:
            logger.info("connect rejected: %s", exc.message)
            return ActionResult.failure(exc)

    async def disconnect(self) -> ActionResult:
        """Clear the session and ask the wallet to end its own."""
        try:
            with self._guard.hold("disconnect"):
                return await self._disconnect()
        except ActionInProgressError as exc:
            logger.info("disconnect rejected: %s", exc.message)
            return ActionResult.failure(exc)

    async def send_payment(self, destination: str, amount: str) -> ActionResult:
        """Pay ``amount`` of the native asset to ``destination``."""
        try:
            with self._guard.hold("submit a payment"):
                return await self._send_payment(destination, amount)
        except ActionInProgressError as exc:
            logger.info("payment rejected: %s", exc.message)
            return ActionResult.failure(exc)

    async def refresh_balance(self) -> ActionResult:
        """Reload the native balance of the connected account."""
        try:
            with self._guard.hold("refresh the balance"):
                return await self._refresh_balance()
        except ActionInProgressError as exc:
            return ActionResult.failure(exc)

    # -----------------------------------------------------------------
    # Action bodies (guard held)
    # -----------------------------------------------------------------

    def _finish(self, result: ActionResult) -> ActionResult:
        self._state.message = result.message
        return result

    def _fail(self, error: PaymentFlowError) -> ActionResult:
        return self._finish(ActionResult.failure(error))

    async def _load_balance(self, address: str) -> PaymentFlowError | None:
        try:
            balance = await self._reader.native_balance(address)
        except PaymentFlowError as exc:
            logger.warning("balance load for %s failed: %s", address, exc.message)
            self._state.balance = None
            self._state.balance_error = exc.message
            return exc
        self._state.balance = balance
        self._state.balance_error = None
        return None

    async def _connect(self, choose: WalletChooser) -> ActionResult:
        if self._state.status is not SessionStatus.DISCONNECTED:
            return self._fail(SessionStateError("A wallet is already connected."))

        self._state.clear()
        self._state.message = None
        self._state.status = SessionStatus.CONNECTING

        connected = False
        try:
            try:
                wallet_id = await choose(self._provider.available_wallets())
                if wallet_id is None:
                    raise ProviderDeclinedError("Wallet selection was closed.")
                option = self._provider.select_wallet(wallet_id)
                self._state.selected_wallet_name = option.name
                address = await self._provider.get_address()
            except Exception as exc:
                error = as_provider_error(exc)
                logger.warning("connect failed (%s): %s", error.category, error.message)
                return self._fail(error)

            if not address:
                return self._fail(
                    ProviderDeclinedError("The wallet did not share an address.")
                )

            self._state.address = address
            self._state.status = SessionStatus.CONNECTED
            connected = True
        finally:
            if not connected:
                self._state.clear()

        logger.info("connected %s with %s", address, option.id)
        error = await self._load_balance(address)
        if error is not None:
            return self._finish(
                ActionResult(ok=True, message=error.message, category=error.category)
            )
        return self._finish(ActionResult(ok=True))

    async def _disconnect(self) -> ActionResult:
        self._state.clear()
        try:
            await self._provider.disconnect()
        except Exception as exc:
            error = as_provider_error(exc)
            logger.warning("wallet did not end its session: %s", error.message)
            return self._finish(
                ActionResult(
                    ok=True,
                    message=f"Disconnected, but the wallet reported: {error.message}",
                    category=error.category,
                )
            )
        logger.info("disconnected")
        return self._finish(ActionResult(ok=True))

    async def _send_payment(self, destination: str, amount: str) -> ActionResult:
        self._state.message = None
        self._state.last_outcome = None

        address = self._state.address
        try:
            if self._state.status is not SessionStatus.CONNECTED or not address:
                raise NotConnectedError()
            intent = PaymentIntent(destination=destination, amount=amount)
            snapshot = await self._reader.load_account(address)
            envelope = build_payment(
                snapshot,
                intent,
                network_passphrase=self._network_passphrase,
                now_fn=self._now_fn,
            )
            signed = await self._signer.sign(envelope, self._network_passphrase)
        except ProviderDeclinedError as exc:
            declined = ProviderDeclined(reason=exc.message)
            self._state.last_outcome = declined
            return self._finish(ActionResult.failure(exc, outcome=declined))
        except PaymentFlowError as exc:
            return self._fail(exc)

        outcome = await self._coordinator.submit(signed)
        return self._finish(
            ActionResult(
                ok=isinstance(outcome, Confirmed),
                message=outcome.message,
                category=_category_of(outcome),
                outcome=outcome,
            )
        )

    async def _refresh_balance(self) -> ActionResult:
        address = self._state.address
        if self._state.status is not SessionStatus.CONNECTED or not address:
            return self._fail(NotConnectedError())
        error = await self._load_balance(address)
        if error is not None:
            return self._fail(error)
        return self._finish(ActionResult(ok=True))
