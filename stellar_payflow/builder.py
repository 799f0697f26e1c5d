"""
Transaction builder for native payments.

Builds an unsigned envelope from one account snapshot and one payment
intent. This is the "transaction recipe" — pure, no secrets, no network
calls.

The builder enforces:
    - Exactly one operation: a native Payment to the intent destination.
    - Fee == BASE_FEE per operation.
    - Text memo == MEMO_TEXT.
    - Time bounds [0, now + TX_TIMEOUT_SECONDS]: a signed envelope that
      sits unsubmitted past the deadline is rejected by the ledger.
    - Sequence == snapshot.sequence + 1. The snapshot is never mutated.

Same snapshot, intent and clock reading → byte-identical XDR.

``decode_signed`` is the inverse gate on the way out: it re-reads what
the wallet returned and checks the source signature against the
expected network passphrase before anything is submitted.
"""

from __future__ import annotations

import time
from typing import Callable

from stellar_sdk import Account, Asset, Keypair, TransactionBuilder, TransactionEnvelope
from stellar_sdk.exceptions import BadSignatureError, SdkError

from stellar_payflow.config import BASE_FEE, MEMO_TEXT, TESTNET_PASSPHRASE, TX_TIMEOUT_SECONDS
from stellar_payflow.errors import (
    InvalidPaymentIntentError,
    NetworkMismatchError,
    ProviderDeclinedError,
)
from stellar_payflow.models import AccountSnapshot, PaymentIntent, UnsignedEnvelope


def build_payment(
    snapshot: AccountSnapshot,
    intent: PaymentIntent,
    *,
    network_passphrase: str = TESTNET_PASSPHRASE,
    now_fn: Callable[[], float] = time.time,
) -> UnsignedEnvelope:
    """Build an unsigned native payment envelope.

    Args:
        snapshot: Freshly loaded state of the source account.
        intent: Validated payment intent.
        network_passphrase: Network the envelope is built for.
        now_fn: Clock returning unix seconds. Inject for deterministic tests.

    Returns:
        UnsignedEnvelope with base64 XDR and the embedded sequence/deadline.

    Raises:
        InvalidPaymentIntentError: If the SDK rejects the destination,
            the amount or the source account.
    """
    max_time = int(now_fn()) + TX_TIMEOUT_SECONDS
    try:
        # Fresh Account per build: the SDK bumps its sequence in build().
        source = Account(snapshot.address, snapshot.sequence)
        envelope = (
            TransactionBuilder(
                source_account=source,
                network_passphrase=network_passphrase,
                base_fee=BASE_FEE,
            )
            .append_payment_op(
                destination=intent.destination,
                asset=Asset.native(),
                amount=intent.amount,
            )
            .add_text_memo(MEMO_TEXT)
            .add_time_bounds(0, max_time)
            .build()
        )
        xdr = envelope.to_xdr()
    except (SdkError, ValueError, TypeError) as exc:
        raise InvalidPaymentIntentError(f"Invalid payment: {exc}") from exc

    return UnsignedEnvelope(
        xdr=xdr,
        source=snapshot.address,
        sequence=envelope.transaction.sequence,
        max_time=max_time,
        network_passphrase=network_passphrase,
    )


def decode_signed(xdr: str, network_passphrase: str) -> TransactionEnvelope:
    """Decode a signed envelope and check it belongs to ``network_passphrase``.

    The transaction hash commits to the network passphrase, so a
    signature made for another network does not verify here.

    Returns:
        The decoded TransactionEnvelope.

    Raises:
        ProviderDeclinedError: If the XDR is unreadable or unsigned.
        NetworkMismatchError: If no signature of the source account
            verifies for this network.
    """
    try:
        envelope = TransactionEnvelope.from_xdr(xdr, network_passphrase)
        source = envelope.transaction.source.account_id
    except Exception as exc:
        raise ProviderDeclinedError(
            "The wallet returned an unreadable transaction."
        ) from exc

    if not envelope.signatures:
        raise ProviderDeclinedError("The wallet returned an unsigned transaction.")

    signer = Keypair.from_public_key(source)
    tx_hash = envelope.hash()
    hint = signer.signature_hint()
    for decorated in envelope.signatures:
        if decorated.signature_hint != hint:
            continue
        try:
            signer.verify(tx_hash, decorated.signature)
        except BadSignatureError:
            continue
        return envelope

    raise NetworkMismatchError(
        "The wallet signed for a different network. "
        "Switch the wallet to the test network and try again."
    )
