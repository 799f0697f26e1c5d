"""
Horizon gateway — real network implementation of LedgerGateway.

Translates Horizon REST answers into AccountSnapshot / SubmitResult.
Uses an injectable transport (HttpTransport) so the HTTP layer can be
swapped for test fakes without changing parsing logic.

No retry loops. No secrets. No ledger logic beyond response parsing.

Response parsing targets Horizon conventions:
    - GET /accounts/{id}: 200 with ``sequence`` (string) and ``balances``;
      404 problem document when the account does not exist.
    - POST /transactions: 200 with ``hash`` and ``successful``;
      400 problem document with ``extras.result_codes`` on rejection;
      504 ``timeout`` problem when the ledger did not close in time.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

from stellar_payflow.errors import AccountNotFoundError, GatewayRejectedError
from stellar_payflow.gateway.client import SubmitResult
from stellar_payflow.gateway.transport import HttpResponse, HttpTransport, HttpxTransport
from stellar_payflow.models import NATIVE_ASSET, AccountSnapshot, Balance

logger = logging.getLogger(__name__)


class HorizonGateway:
    """Horizon REST client implementing the LedgerGateway protocol.

    Args:
        url: Horizon base URL (e.g. "https://horizon-testnet.stellar.org").
        transport: Injectable transport. Defaults to HttpxTransport.
    """

    def __init__(
        self,
        url: str,
        transport: HttpTransport | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._transport = transport or HttpxTransport()

    @property
    def url(self) -> str:
        """The Horizon base URL."""
        return self._url

    # -----------------------------------------------------------------
    # LedgerGateway protocol methods
    # -----------------------------------------------------------------

    async def load_account(self, address: str) -> AccountSnapshot:
        """Fetch account state via ``GET /accounts/{address}``.

        Transport exceptions propagate to the caller.
        """
        url = f"{self._url}/accounts/{urllib.parse.quote(address, safe='')}"
        response = await self._transport.get_json(url)
        return _parse_account_response(address, response)

    async def submit_transaction(self, signed_xdr: str) -> SubmitResult:
        """Submit a signed envelope via ``POST /transactions``.

        Transport exceptions propagate to the caller.
        """
        response = await self._transport.post_form(
            f"{self._url}/transactions", {"tx": signed_xdr}
        )
        result = _parse_submit_response(response)
        if result.accepted:
            logger.info("transaction accepted: %s", result.transaction_id)
        else:
            logger.debug(
                "transaction rejected: status=%s detail=%s",
                result.status_code,
                result.detail,
            )
        return result


# =====================================================================
# Response parsing (pure functions, no I/O)
# =====================================================================


def _problem_detail(body: dict[str, Any], fallback: str) -> str:
    title = body.get("title")
    detail = body.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(title, str) and title:
        return title
    return fallback


def _parse_balance(entry: dict[str, Any]) -> Balance:
    asset_type = entry.get("asset_type")
    amount = str(entry.get("balance", "0"))
    if asset_type == NATIVE_ASSET:
        return Balance(asset=NATIVE_ASSET, amount=amount)
    if asset_type == "liquidity_pool_shares":
        return Balance(
            asset=f"liquidity_pool:{entry.get('liquidity_pool_id', '')}",
            amount=amount,
        )
    return Balance(
        asset=f"{entry.get('asset_code', '')}:{entry.get('asset_issuer', '')}",
        amount=amount,
    )


def _parse_account_response(address: str, response: HttpResponse) -> AccountSnapshot:
    """Parse a Horizon account answer into an AccountSnapshot.

    Raises:
        AccountNotFoundError: On 404.
        GatewayRejectedError: On any other non-2xx status, or a 2xx body
            without a usable sequence number.
    """
    body = response.body

    if response.status_code == 404:
        raise AccountNotFoundError(address)

    if response.status_code >= 300:
        raise GatewayRejectedError(
            _problem_detail(body, f"account lookup failed ({response.status_code})"),
            status_code=response.status_code,
            problem=body,
        )

    try:
        sequence = int(body["sequence"])
    except (KeyError, TypeError, ValueError):
        raise GatewayRejectedError(
            "account response has no sequence number",
            status_code=response.status_code,
            problem=body,
        ) from None

    raw_balances = body.get("balances")
    balances: tuple[Balance, ...] = ()
    if isinstance(raw_balances, list):
        balances = tuple(
            _parse_balance(entry) for entry in raw_balances if isinstance(entry, dict)
        )

    return AccountSnapshot(
        address=str(body.get("account_id") or body.get("id") or address),
        sequence=sequence,
        balances=balances,
    )


def _parse_submit_response(response: HttpResponse) -> SubmitResult:
    """Parse a Horizon submission answer into a SubmitResult.

    Handles:
        - Applied transaction (2xx with ``hash``)
        - Rejection with result codes (400)
        - Unstructured failures (timeouts, 5xx, malformed bodies)
    """
    body = response.body

    if 200 <= response.status_code < 300:
        tx_hash = body.get("hash") or body.get("id")
        if body.get("successful", True) and isinstance(tx_hash, str) and tx_hash:
            return SubmitResult(
                accepted=True,
                transaction_id=tx_hash,
                status_code=response.status_code,
            )
        return SubmitResult(
            accepted=False,
            status_code=response.status_code,
            problem=body,
            detail="gateway reported an unsuccessful transaction",
        )

    return SubmitResult(
        accepted=False,
        status_code=response.status_code,
        problem=body,
        detail=_problem_detail(
            body, f"transaction submission failed ({response.status_code})"
        ),
    )
