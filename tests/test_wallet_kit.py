"""
Tests for WalletKit and KeypairWallet.

Test plan:
- Kit: lists modules in order, rejects duplicate ids, unknown id →
  ProviderUnavailableError, calls before selection refused, forwards to
  the selected module, disconnect clears the selection
- KeypairWallet: signs its own envelopes, refuses other networks,
  other addresses and foreign source accounts, needs a secret seed
"""

import pytest
from stellar_sdk import Keypair, Network, TransactionEnvelope

from stellar_payflow.builder import build_payment
from stellar_payflow.config import TESTNET_PASSPHRASE
from stellar_payflow.errors import (
    NetworkMismatchError,
    ProviderDeclinedError,
    ProviderUnavailableError,
)
from stellar_payflow.models import AccountSnapshot, PaymentIntent
from stellar_payflow.wallet import KeypairWallet, WalletKit, WalletOption
from stellar_payflow.wallet.provider import WalletModule, WalletProvider

OWNER = Keypair.random()
OTHER = Keypair.random()


def _unsigned_xdr(source: Keypair = OWNER) -> str:
    snapshot = AccountSnapshot(address=source.public_key, sequence=1)
    intent = PaymentIntent(destination=OTHER.public_key, amount="1")
    return build_payment(snapshot, intent, now_fn=lambda: 1_700_000_000.0).xdr


class TestWalletKit:
    def test_implements_protocol(self) -> None:
        assert isinstance(WalletKit([]), WalletProvider)

    def test_lists_modules_in_order(self) -> None:
        kit = WalletKit(
            [
                KeypairWallet(OWNER, wallet_id="a", name="Alpha"),
                KeypairWallet(OTHER, wallet_id="b", name="Beta"),
            ]
        )
        assert kit.available_wallets() == [
            WalletOption(id="a", name="Alpha"),
            WalletOption(id="b", name="Beta"),
        ]

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="duplicate"):
            WalletKit([KeypairWallet(OWNER), KeypairWallet(OTHER)])

    def test_unknown_wallet(self) -> None:
        kit = WalletKit([KeypairWallet(OWNER)])
        with pytest.raises(ProviderUnavailableError):
            kit.select_wallet("freighter")
        assert kit.selected is None

    @pytest.mark.asyncio
    async def test_nothing_selected(self) -> None:
        kit = WalletKit([KeypairWallet(OWNER)])
        with pytest.raises(ProviderUnavailableError, match="No wallet selected"):
            await kit.get_address()

    @pytest.mark.asyncio
    async def test_forwards_to_selected(self) -> None:
        kit = WalletKit(
            [
                KeypairWallet(OTHER, wallet_id="other"),
                KeypairWallet(OWNER, wallet_id="owner"),
            ]
        )
        assert kit.select_wallet("owner") == WalletOption(id="owner", name="Local keypair")
        assert await kit.get_address() == OWNER.public_key

    @pytest.mark.asyncio
    async def test_disconnect_clears_selection(self) -> None:
        wallet = KeypairWallet(OWNER)
        kit = WalletKit([wallet])
        kit.select_wallet("keypair")
        await kit.get_address()
        await kit.disconnect()
        assert kit.selected is None
        assert not wallet.connected

    @pytest.mark.asyncio
    async def test_disconnect_without_selection(self) -> None:
        await WalletKit([KeypairWallet(OWNER)]).disconnect()


class TestKeypairWallet:
    def test_implements_module(self) -> None:
        assert isinstance(KeypairWallet(OWNER), WalletModule)

    def test_needs_secret(self) -> None:
        with pytest.raises(ValueError, match="secret"):
            KeypairWallet(Keypair.from_public_key(OWNER.public_key))

    @pytest.mark.asyncio
    async def test_from_secret(self) -> None:
        wallet = KeypairWallet.from_secret(OWNER.secret, name="Dev")
        assert wallet.name == "Dev"
        assert await wallet.get_address() == OWNER.public_key

    @pytest.mark.asyncio
    async def test_signs_own_envelope(self) -> None:
        wallet = KeypairWallet(OWNER)
        signed = await wallet.sign_transaction(
            _unsigned_xdr(), network_passphrase=TESTNET_PASSPHRASE
        )
        envelope = TransactionEnvelope.from_xdr(signed, TESTNET_PASSPHRASE)
        assert len(envelope.signatures) == 1
        OWNER.verify(envelope.hash(), envelope.signatures[0].signature)

    @pytest.mark.asyncio
    async def test_refuses_other_network(self) -> None:
        wallet = KeypairWallet(OWNER)
        with pytest.raises(NetworkMismatchError):
            await wallet.sign_transaction(
                _unsigned_xdr(), network_passphrase=Network.PUBLIC_NETWORK_PASSPHRASE
            )

    @pytest.mark.asyncio
    async def test_refuses_other_address(self) -> None:
        wallet = KeypairWallet(OWNER)
        with pytest.raises(ProviderDeclinedError):
            await wallet.sign_transaction(
                _unsigned_xdr(),
                network_passphrase=TESTNET_PASSPHRASE,
                address=OTHER.public_key,
            )

    @pytest.mark.asyncio
    async def test_refuses_foreign_source(self) -> None:
        wallet = KeypairWallet(OWNER)
        with pytest.raises(ProviderDeclinedError, match="source account"):
            await wallet.sign_transaction(
                _unsigned_xdr(source=OTHER), network_passphrase=TESTNET_PASSPHRASE
            )
