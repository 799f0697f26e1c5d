"""
Submission coordinator.

Takes a signed envelope to the gateway and reconciles the answer into a
SubmissionOutcome:

    1. Re-decode the envelope against the expected network passphrase.
       Failure → ProviderDeclined (fatal for this attempt, not retried).
    2. Submit the re-encoded envelope.
    3. Transport failure → Rejected(ConnectivityReason).
    4. Structured rejection → Rejected(classify(problem)), or
       Rejected(ConnectivityReason) when nothing is classifiable.
    5. Acceptance → Confirmed(transaction_id), then refresh the source
       balance.

The refresh is best-effort: its failure lands in
``SessionState.balance_error`` and never changes the outcome.

Only one submission may be pending; a concurrent call is rejected
before the gateway is contacted.
"""

from __future__ import annotations

import logging

from stellar_payflow.account import AccountReader
from stellar_payflow.builder import decode_signed
from stellar_payflow.classifier import classify
from stellar_payflow.config import TESTNET_PASSPHRASE
from stellar_payflow.errors import PaymentFlowError, ProviderDeclinedError
from stellar_payflow.gateway.client import LedgerGateway
from stellar_payflow.guard import ActionGuard
from stellar_payflow.models import SessionState, SignedEnvelope
from stellar_payflow.outcome import (
    Confirmed,
    ConnectivityReason,
    ProviderDeclined,
    Rejected,
    SubmissionOutcome,
)

logger = logging.getLogger(__name__)


class SubmissionCoordinator:
    """Submits signed envelopes and records outcomes on the session state.

    Args:
        gateway: Gateway used for submission.
        reader: Account reader used for the post-confirmation refresh.
        state: Session state; ``last_outcome``, ``balance`` and
            ``balance_error`` are written here.
        network_passphrase: Network every envelope must belong to.
    """

    def __init__(
        self,
        gateway: LedgerGateway,
        reader: AccountReader,
        state: SessionState,
        *,
        network_passphrase: str = TESTNET_PASSPHRASE,
    ) -> None:
        self._gateway = gateway
        self._reader = reader
        self._state = state
        self._network_passphrase = network_passphrase
        self._guard = ActionGuard()

    @property
    def pending(self) -> bool:
        """True while a submission is in flight."""
        return self._guard.busy

    async def submit(self, signed: SignedEnvelope) -> SubmissionOutcome:
        """Submit ``signed`` and return the outcome.

        Raises:
            ActionInProgressError: Another submission is pending. The
                gateway is not contacted.
        """
        with self._guard.hold("submit a payment"):
            outcome, source = await self._submit(signed)
            self._state.last_outcome = outcome
            if isinstance(outcome, Confirmed) and source is not None:
                await self._refresh_balance(source)
        return outcome

    async def _submit(
        self, signed: SignedEnvelope
    ) -> tuple[SubmissionOutcome, str | None]:
        # 1. Re-decode against the expected network
        try:
            envelope = decode_signed(signed.xdr, self._network_passphrase)
        except ProviderDeclinedError as exc:
            logger.warning("signed envelope refused: %s", exc.message)
            return ProviderDeclined(reason=exc.message), None

        source = envelope.transaction.source.account_id

        # 2. Submit
        try:
            result = await self._gateway.submit_transaction(envelope.to_xdr())
        except Exception as exc:
            logger.warning("submission failed before reaching the ledger: %s", exc)
            return Rejected(reason=ConnectivityReason(detail=str(exc) or None)), source

        # 3. Reconcile
        if result.accepted and result.transaction_id:
            logger.info("payment confirmed: %s", result.transaction_id)
            return Confirmed(transaction_id=result.transaction_id), source

        reason = classify(result.problem)
        if reason is None:
            logger.warning("unclassified rejection: %s", result.detail)
            return Rejected(reason=ConnectivityReason(detail=result.detail)), source

        logger.warning("payment rejected: %s", reason)
        return Rejected(reason=reason), source

    async def _refresh_balance(self, address: str) -> None:
        try:
            balance = await self._reader.native_balance(address)
        except PaymentFlowError as exc:
            logger.warning("balance refresh after payment failed: %s", exc.message)
            self._state.balance_error = exc.message
            return
        if self._state.address in (None, address):
            self._state.balance = balance
        self._state.balance_error = None
