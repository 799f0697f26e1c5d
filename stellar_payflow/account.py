"""
Account reader — fresh account state from the gateway.

Every call hits the gateway; nothing is cached. Sequence numbers are
consumed by each submission, so a snapshot is only good for one build.

Failures:
    - AccountNotFoundError: the account has no ledger presence.
    - GatewayRejectedError: a structured error answer (kept for the
      classifier).
    - ConnectivityError: anything else (no structured answer).

No retries.
"""

from __future__ import annotations

import logging

from stellar_payflow.errors import ConnectivityError, PaymentFlowError
from stellar_payflow.gateway.client import LedgerGateway
from stellar_payflow.models import AccountSnapshot

logger = logging.getLogger(__name__)


class AccountReader:
    """Loads account snapshots through a LedgerGateway."""

    def __init__(self, gateway: LedgerGateway) -> None:
        self._gateway = gateway

    async def load_account(self, address: str) -> AccountSnapshot:
        """Fetch the current snapshot of ``address``.

        Raises:
            ValueError: If address is empty.
            AccountNotFoundError, GatewayRejectedError, ConnectivityError.
        """
        if not address:
            raise ValueError("address must be non-empty")
        try:
            snapshot = await self._gateway.load_account(address)
        except PaymentFlowError:
            raise
        except Exception as exc:
            logger.warning("account lookup for %s failed: %s", address, exc)
            raise ConnectivityError(
                "Could not load the account. Check the connection and try again."
            ) from exc
        logger.debug("loaded %s at sequence %d", address, snapshot.sequence)
        return snapshot

    async def native_balance(self, address: str) -> str:
        """Native balance of ``address`` ("0" when no native line exists)."""
        snapshot = await self.load_account(address)
        return snapshot.native_balance()
