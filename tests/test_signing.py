"""
Tests for SigningDelegate.

Test plan:
- Forwards XDR, passphrase and source address to the provider
- Envelope built for another network → NetworkMismatchError, provider
  never called
- Provider decline propagates as ProviderDeclinedError
- Opaque provider failure → ProviderUnavailableError
- Empty signed XDR → ProviderDeclinedError
"""

from collections.abc import Sequence

import pytest
from stellar_sdk import Network

from stellar_payflow.config import TESTNET_PASSPHRASE
from stellar_payflow.errors import (
    NetworkMismatchError,
    ProviderDeclinedError,
    ProviderUnavailableError,
)
from stellar_payflow.models import UnsignedEnvelope
from stellar_payflow.signing import SigningDelegate
from stellar_payflow.wallet.provider import WalletOption, WalletProvider

SOURCE = "GBRPYHIL2CI3FNQ4BXLFMNDLFJUNPU2HY3ZMFSHONUCEOASW7QC7OX2H"


class FakeProvider:
    """Records sign requests and answers from a script."""

    def __init__(self, answer: str = "SIGNED", error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.calls: list[tuple[str, str, str | None]] = []

    def available_wallets(self) -> Sequence[WalletOption]:
        return [WalletOption(id="fake", name="Fake")]

    def select_wallet(self, wallet_id: str) -> WalletOption:
        return WalletOption(id=wallet_id, name="Fake")

    async def get_address(self) -> str:
        return SOURCE

    async def sign_transaction(
        self,
        xdr: str,
        *,
        network_passphrase: str,
        address: str | None = None,
    ) -> str:
        self.calls.append((xdr, network_passphrase, address))
        if self.error is not None:
            raise self.error
        return self.answer

    async def disconnect(self) -> None:
        return None


def _envelope(passphrase: str = TESTNET_PASSPHRASE) -> UnsignedEnvelope:
    return UnsignedEnvelope(
        xdr="UNSIGNED",
        source=SOURCE,
        sequence=2,
        max_time=1_700_000_180,
        network_passphrase=passphrase,
    )


class TestSigningDelegate:
    def test_fake_implements_protocol(self) -> None:
        assert isinstance(FakeProvider(), WalletProvider)

    @pytest.mark.asyncio
    async def test_forwards_request(self) -> None:
        provider = FakeProvider()
        signed = await SigningDelegate(provider).sign(_envelope(), TESTNET_PASSPHRASE)
        assert signed.xdr == "SIGNED"
        assert signed.network_passphrase == TESTNET_PASSPHRASE
        assert provider.calls == [("UNSIGNED", TESTNET_PASSPHRASE, SOURCE)]

    @pytest.mark.asyncio
    async def test_envelope_for_other_network(self) -> None:
        provider = FakeProvider()
        with pytest.raises(NetworkMismatchError):
            await SigningDelegate(provider).sign(
                _envelope(Network.PUBLIC_NETWORK_PASSPHRASE), TESTNET_PASSPHRASE
            )
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_decline_propagates(self) -> None:
        provider = FakeProvider(error=ProviderDeclinedError("User declined."))
        with pytest.raises(ProviderDeclinedError, match="User declined."):
            await SigningDelegate(provider).sign(_envelope(), TESTNET_PASSPHRASE)

    @pytest.mark.asyncio
    async def test_opaque_failure(self) -> None:
        cause = RuntimeError("extension crashed")
        provider = FakeProvider(error=cause)
        with pytest.raises(ProviderUnavailableError, match="extension crashed") as excinfo:
            await SigningDelegate(provider).sign(_envelope(), TESTNET_PASSPHRASE)
        assert excinfo.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_empty_answer(self) -> None:
        provider = FakeProvider(answer="")
        with pytest.raises(ProviderDeclinedError):
            await SigningDelegate(provider).sign(_envelope(), TESTNET_PASSPHRASE)
