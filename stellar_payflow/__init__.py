"""
stellar-payflow: wallet-driven native payments on the Stellar test network.

Every payment goes through the same lifecycle:
- load a fresh account snapshot
- build an unsigned envelope
- have the wallet sign it
- submit it and classify the answer

Wallets and the ledger gateway are protocols; bring your own or use the
bundled Horizon gateway and keypair wallet.
"""

__version__ = "0.1.0"

from stellar_payflow.account import AccountReader
from stellar_payflow.builder import build_payment, decode_signed
from stellar_payflow.classifier import RULES, ClassificationRule, ResultCodes, classify
from stellar_payflow.config import (
    BASE_FEE,
    MEMO_TEXT,
    TESTNET_PASSPHRASE,
    TX_TIMEOUT_SECONDS,
    Settings,
    fund_account_url,
    transaction_url,
)
from stellar_payflow.errors import (
    AccountNotFoundError,
    ActionInProgressError,
    ConnectivityError,
    ErrorCategory,
    GatewayRejectedError,
    InvalidPaymentIntentError,
    NetworkMismatchError,
    NotConnectedError,
    PaymentFlowError,
    ProviderDeclinedError,
    ProviderUnavailableError,
    SessionStateError,
)
from stellar_payflow.gateway import HorizonGateway, LedgerGateway, SubmitResult
from stellar_payflow.guard import ActionGuard
from stellar_payflow.models import (
    AccountSnapshot,
    Balance,
    PaymentIntent,
    SessionState,
    SessionStatus,
    SignedEnvelope,
    UnsignedEnvelope,
)
from stellar_payflow.outcome import (
    Confirmed,
    ConnectivityReason,
    DestinationNotFunded,
    GenericRejection,
    ProviderDeclined,
    Rejected,
    StaleSequenceNumber,
)
from stellar_payflow.session import ActionResult, SessionManager, choose_wallet
from stellar_payflow.signing import SigningDelegate
from stellar_payflow.submission import SubmissionCoordinator
from stellar_payflow.wallet import KeypairWallet, WalletKit, WalletOption, WalletProvider

__all__ = [
    "BASE_FEE",
    "MEMO_TEXT",
    "RULES",
    "TESTNET_PASSPHRASE",
    "TX_TIMEOUT_SECONDS",
    "AccountNotFoundError",
    "AccountReader",
    "AccountSnapshot",
    "ActionGuard",
    "ActionInProgressError",
    "ActionResult",
    "Balance",
    "ClassificationRule",
    "Confirmed",
    "ConnectivityError",
    "ConnectivityReason",
    "DestinationNotFunded",
    "ErrorCategory",
    "GatewayRejectedError",
    "GenericRejection",
    "HorizonGateway",
    "InvalidPaymentIntentError",
    "KeypairWallet",
    "LedgerGateway",
    "NetworkMismatchError",
    "NotConnectedError",
    "PaymentFlowError",
    "PaymentIntent",
    "ProviderDeclined",
    "ProviderDeclinedError",
    "ProviderUnavailableError",
    "Rejected",
    "ResultCodes",
    "SessionManager",
    "SessionState",
    "SessionStateError",
    "SessionStatus",
    "Settings",
    "SignedEnvelope",
    "SigningDelegate",
    "StaleSequenceNumber",
    "SubmissionCoordinator",
    "SubmitResult",
    "UnsignedEnvelope",
    "WalletKit",
    "WalletOption",
    "WalletProvider",
    "build_payment",
    "choose_wallet",
    "classify",
    "decode_signed",
    "fund_account_url",
    "transaction_url",
]
