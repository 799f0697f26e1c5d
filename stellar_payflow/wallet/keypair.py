"""
Local keypair wallet — a WalletModule for development and tests.

Signs with a ``stellar_sdk.Keypair`` held in memory. Like a real wallet
it is bound to one network and refuses to sign for any other passphrase,
and refuses envelopes whose source is not its own account.
"""

from __future__ import annotations

from stellar_sdk import Keypair, TransactionEnvelope

from stellar_payflow.config import TESTNET_PASSPHRASE
from stellar_payflow.errors import NetworkMismatchError, ProviderDeclinedError


class KeypairWallet:
    """WalletModule backed by a secret seed.

    Args:
        keypair: Signing keypair (must hold the secret).
        network_passphrase: The only network this wallet signs for.
        wallet_id: Module id shown in wallet selection.
        name: Display name.
    """

    def __init__(
        self,
        keypair: Keypair,
        *,
        network_passphrase: str = TESTNET_PASSPHRASE,
        wallet_id: str = "keypair",
        name: str = "Local keypair",
    ) -> None:
        if not keypair.can_sign():
            raise ValueError("keypair has no secret seed")
        self._keypair = keypair
        self._network_passphrase = network_passphrase
        self._id = wallet_id
        self._name = name
        self.connected = False

    @classmethod
    def from_secret(cls, secret: str, **kwargs: str) -> KeypairWallet:
        return cls(Keypair.from_secret(secret), **kwargs)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    async def get_address(self) -> str:
        self.connected = True
        return self._keypair.public_key

    async def sign_transaction(
        self,
        xdr: str,
        *,
        network_passphrase: str,
        address: str | None = None,
    ) -> str:
        if network_passphrase != self._network_passphrase:
            raise NetworkMismatchError(
                "The wallet is connected to a different network."
            )
        if address is not None and address != self._keypair.public_key:
            raise ProviderDeclinedError("The wallet does not hold this account.")

        envelope = TransactionEnvelope.from_xdr(xdr, network_passphrase)
        if envelope.transaction.source.account_id != self._keypair.public_key:
            raise ProviderDeclinedError("The wallet does not hold the source account.")
        envelope.sign(self._keypair)
        return envelope.to_xdr()

    async def disconnect(self) -> None:
        self.connected = False
