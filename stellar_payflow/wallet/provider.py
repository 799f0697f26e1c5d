"""
Wallet provider protocol — the secrets boundary.

The payment flow never sees private keys. It hands an unsigned envelope
(base64 XDR) and a network passphrase to the provider and gets a signed
envelope back. Every call may show wallet UI and suspend for as long as
the user takes.

Two layers:
    - ``WalletModule`` — one concrete wallet (browser extension, hardware
      device, local keypair, ...).
    - ``WalletProvider`` — what the session depends on: a set of modules
      with one selected (see ``WalletKit``).

Provider-specific failures are opaque; ``as_provider_error`` maps them
onto ProviderDeclinedError / ProviderUnavailableError.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from stellar_payflow.errors import PaymentFlowError, ProviderUnavailableError


@dataclass(frozen=True)
class WalletOption:
    """A wallet the user can pick."""

    id: str
    name: str


@runtime_checkable
class WalletModule(Protocol):
    """A single wallet implementation."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    async def get_address(self) -> str:
        """Ask the wallet for the public account id."""
        ...

    async def sign_transaction(
        self,
        xdr: str,
        *,
        network_passphrase: str,
        address: str | None = None,
    ) -> str:
        """Sign an envelope for ``network_passphrase``; return signed XDR.

        Raises:
            ProviderDeclinedError: The user refused or cancelled.
        """
        ...

    async def disconnect(self) -> None:
        """End the wallet session."""
        ...


@runtime_checkable
class WalletProvider(Protocol):
    """The wallet capability set the session manager depends on."""

    def available_wallets(self) -> Sequence[WalletOption]: ...

    def select_wallet(self, wallet_id: str) -> WalletOption:
        """Make ``wallet_id`` the active wallet.

        Raises:
            ProviderUnavailableError: Unknown wallet id.
        """
        ...

    async def get_address(self) -> str: ...

    async def sign_transaction(
        self,
        xdr: str,
        *,
        network_passphrase: str,
        address: str | None = None,
    ) -> str: ...

    async def disconnect(self) -> None: ...


def as_provider_error(exc: Exception) -> PaymentFlowError:
    """Map an opaque provider failure onto the error taxonomy.

    Errors already in the taxonomy pass through; anything else means the
    provider itself is not usable.
    """
    if isinstance(exc, PaymentFlowError):
        return exc
    return ProviderUnavailableError(f"Wallet error: {exc}")
