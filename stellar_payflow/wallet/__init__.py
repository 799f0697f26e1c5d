"""
Wallet side of the payment flow.

Protocols:
    - ``WalletProvider`` — what the session depends on.
    - ``WalletModule`` — one concrete wallet.

Implementations:
    - ``WalletKit`` — WalletProvider over several modules.
    - ``KeypairWallet`` — local module signing with an in-memory keypair.
"""

from stellar_payflow.wallet.keypair import KeypairWallet
from stellar_payflow.wallet.kit import WalletKit
from stellar_payflow.wallet.provider import (
    WalletModule,
    WalletOption,
    WalletProvider,
    as_provider_error,
)

__all__ = [
    "KeypairWallet",
    "WalletKit",
    "WalletModule",
    "WalletOption",
    "WalletProvider",
    "as_provider_error",
]
