"""
Configuration for the payment flow.

Two layers:
    - Policy constants (fee, memo, timeout window, network passphrase).
      These are fixed and not read from the environment.
    - ``Settings`` — the deployment knobs (gateway URL, request timeout),
      loaded from ``PAYFLOW_*`` environment variables via pydantic-settings.

Only the Stellar test network is supported.
"""

from __future__ import annotations

import urllib.parse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from stellar_sdk import Network

# Passphrase of the Stellar test network. Must match at build, sign and submit.
TESTNET_PASSPHRASE = Network.TESTNET_NETWORK_PASSPHRASE

DEFAULT_HORIZON_URL = "https://horizon-testnet.stellar.org"

# Base fee per operation, in stroops.
BASE_FEE = 100

# Text memo attached to every payment (max 28 bytes).
MEMO_TEXT = "Stellar Wallets Kit"

# Seconds after build time at which the ledger must reject the transaction.
TX_TIMEOUT_SECONDS = 180

EXPLORER_TX_URL = "https://stellar.expert/explorer/testnet/tx/{tx_id}"

FUND_ACCOUNT_URL = "https://friendbot.stellar.org/?addr={address}"


def transaction_url(tx_id: str) -> str:
    """Block explorer link for a confirmed test network transaction."""
    return EXPLORER_TX_URL.format(tx_id=tx_id)


def fund_account_url(address: str) -> str:
    """Friendbot link that funds a test network account."""
    return FUND_ACCOUNT_URL.format(address=urllib.parse.quote(address))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PAYFLOW_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    horizon_url: str = Field(
        default=DEFAULT_HORIZON_URL, description="Horizon gateway base URL"
    )
    network_passphrase: str = Field(
        default=TESTNET_PASSPHRASE, description="Network passphrase"
    )
    request_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Gateway request timeout"
    )

    @field_validator("horizon_url")
    @classmethod
    def _require_https(cls, value: str) -> str:
        parsed = urllib.parse.urlparse(value)
        host = parsed.hostname or ""
        is_local = host in ("localhost", "127.0.0.1")
        if parsed.scheme != "https" and not is_local:
            raise ValueError(
                f"horizon_url must use https:// (got: {parsed.scheme}://)"
            )
        return value.rstrip("/")

    @field_validator("network_passphrase")
    @classmethod
    def _require_testnet(cls, value: str) -> str:
        if value != TESTNET_PASSPHRASE:
            raise ValueError("only the Stellar test network is supported")
        return value
