"""
HTTP transport protocol for gateway calls.

Defines the seam where the concrete HTTP implementation plugs in. The
Horizon gateway depends on this protocol, not on httpx directly, so the
transport can be swapped for a fake without editing parsing logic.

Concrete implementations:
    - HttpxTransport (default, uses httpx.AsyncClient)
    - FakeTransport (tests, returns canned responses)

Non-2xx answers are returned, not raised: Horizon puts the useful part
of a rejection in the body. Only transport-level failures (DNS, TLS,
connect/read timeout) raise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Status code and parsed JSON body of an HTTP exchange.

    ``body`` is empty when the response was not a JSON object.
    """

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class HttpTransport(Protocol):
    """Async transport for gateway requests."""

    async def get_json(self, url: str) -> HttpResponse:
        """GET a JSON resource."""
        ...

    async def post_form(self, url: str, data: dict[str, str]) -> HttpResponse:
        """POST a form-encoded body and parse the JSON answer."""
        ...


def _to_response(response: httpx.Response) -> HttpResponse:
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}
    return HttpResponse(status_code=response.status_code, body=body)


class HttpxTransport:
    """Default transport using httpx.AsyncClient.

    Args:
        timeout: Request timeout in seconds. Bounds every gateway call.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    async def get_json(self, url: str) -> HttpResponse:
        """GET via httpx."""
        logger.debug("GET %s", url)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(url, headers={"Accept": "application/json"})
        return _to_response(response)

    async def post_form(self, url: str, data: dict[str, str]) -> HttpResponse:
        """POST a form body via httpx."""
        logger.debug("POST %s", url)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(
                url,
                data=data,
                headers={"Accept": "application/json"},
            )
        return _to_response(response)
