"""
Wallet kit — a WalletProvider over several wallet modules.

Modules are registered once; the session picks one by id. All calls are
forwarded to the selected module. Calling anything before a wallet is
selected raises ProviderUnavailableError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from stellar_payflow.errors import ProviderUnavailableError
from stellar_payflow.wallet.provider import WalletModule, WalletOption

logger = logging.getLogger(__name__)


class WalletKit:
    """Implements WalletProvider by delegating to a selected module.

    Args:
        modules: Wallet modules to offer, in display order. Ids must be
            unique.
    """

    def __init__(self, modules: Iterable[WalletModule]) -> None:
        self._modules: dict[str, WalletModule] = {}
        for module in modules:
            if module.id in self._modules:
                raise ValueError(f"duplicate wallet module id: {module.id!r}")
            self._modules[module.id] = module
        self._selected: WalletModule | None = None

    def available_wallets(self) -> list[WalletOption]:
        return [WalletOption(id=m.id, name=m.name) for m in self._modules.values()]

    @property
    def selected(self) -> WalletOption | None:
        if self._selected is None:
            return None
        return WalletOption(id=self._selected.id, name=self._selected.name)

    def select_wallet(self, wallet_id: str) -> WalletOption:
        module = self._modules.get(wallet_id)
        if module is None:
            raise ProviderUnavailableError(f"Unknown wallet: {wallet_id}")
        self._selected = module
        logger.debug("selected wallet %s", wallet_id)
        return WalletOption(id=module.id, name=module.name)

    def _require_selected(self) -> WalletModule:
        if self._selected is None:
            raise ProviderUnavailableError("No wallet selected.")
        return self._selected

    async def get_address(self) -> str:
        return await self._require_selected().get_address()

    async def sign_transaction(
        self,
        xdr: str,
        *,
        network_passphrase: str,
        address: str | None = None,
    ) -> str:
        return await self._require_selected().sign_transaction(
            xdr, network_passphrase=network_passphrase, address=address
        )

    async def disconnect(self) -> None:
        module = self._selected
        self._selected = None
        if module is not None:
            await module.disconnect()
