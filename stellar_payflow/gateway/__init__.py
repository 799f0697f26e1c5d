"""
Ledger gateway for the payment flow.

Protocols (for dependency injection):
    - ``LedgerGateway`` — account reads and transaction submission.
    - ``HttpTransport`` — HTTP seam under the Horizon binding.

Concrete gateway:
    - ``HorizonGateway`` — Horizon REST implementation of LedgerGateway.

Transport:
    - ``HttpxTransport`` — default httpx-based transport.
"""

from stellar_payflow.gateway.client import LedgerGateway, SubmitResult
from stellar_payflow.gateway.horizon import HorizonGateway
from stellar_payflow.gateway.transport import HttpResponse, HttpTransport, HttpxTransport

__all__ = [
    "HorizonGateway",
    "HttpResponse",
    "HttpTransport",
    "HttpxTransport",
    "LedgerGateway",
    "SubmitResult",
]
