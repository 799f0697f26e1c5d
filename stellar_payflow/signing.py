"""
Signing delegate — hands a built envelope to the wallet.

The network passphrase travels with every signing request: a signature
made for another network is cryptographically valid but would never be
accepted here. An envelope built for another passphrase is refused
before the wallet is asked.

The wallet call may suspend for as long as the user takes to approve.
A user decline surfaces as ProviderDeclinedError. Task cancellation is
not translated.
"""

from __future__ import annotations

import logging

from stellar_payflow.errors import NetworkMismatchError, ProviderDeclinedError
from stellar_payflow.models import SignedEnvelope, UnsignedEnvelope
from stellar_payflow.wallet.provider import WalletProvider, as_provider_error

logger = logging.getLogger(__name__)


class SigningDelegate:
    """Delegates envelope signing to a WalletProvider."""

    def __init__(self, provider: WalletProvider) -> None:
        self._provider = provider

    async def sign(
        self,
        envelope: UnsignedEnvelope,
        network_passphrase: str,
    ) -> SignedEnvelope:
        """Ask the wallet to sign ``envelope`` for ``network_passphrase``.

        Raises:
            NetworkMismatchError: The envelope was built for another network.
            ProviderDeclinedError: The user declined, or the wallet
                returned nothing.
            ProviderUnavailableError: The wallet failed for any other reason.
        """
        if envelope.network_passphrase != network_passphrase:
            raise NetworkMismatchError(
                "The transaction was built for a different network."
            )

        try:
            signed_xdr = await self._provider.sign_transaction(
                envelope.xdr,
                network_passphrase=network_passphrase,
                address=envelope.source,
            )
        except Exception as exc:
            error = as_provider_error(exc)
            logger.warning("signing failed (%s): %s", error.category, error.message)
            raise error from exc

        if not signed_xdr:
            raise ProviderDeclinedError("The wallet did not return a signed transaction.")

        return SignedEnvelope(xdr=signed_xdr, network_passphrase=network_passphrase)
