"""
Gateway error classifier — turns Horizon problem documents into reasons.

Horizon answers a failed submission with a problem document whose
``extras.result_codes`` names what went wrong::

    {"extras": {"result_codes": {"transaction": "tx_failed",
                                 "operations": ["op_no_destination"]}}}

The classifier extracts those codes and walks an ordered rule list.
First match wins:

    1. first operation code == "op_no_destination" → DestinationNotFunded
    2. transaction code == "tx_bad_seq"             → StaleSequenceNumber
    3. any other non-null transaction code          → GenericRejection
    4. no codes extractable                         → None

``None`` means "not a structured rejection": the caller falls back to a
generic message. Extend by appending to ``RULES``; order is the contract.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from stellar_payflow.outcome import (
    ClassifiedReason,
    DestinationNotFunded,
    GenericRejection,
    StaleSequenceNumber,
)

OP_NO_DESTINATION = "op_no_destination"
TX_BAD_SEQ = "tx_bad_seq"


@dataclass(frozen=True)
class ResultCodes:
    """Structured codes extracted from a gateway rejection."""

    transaction: str | None
    operations: tuple[str, ...] = ()

    @property
    def operation(self) -> str | None:
        """The first operation code, which is the one reported."""
        return self.operations[0] if self.operations else None


@dataclass(frozen=True)
class ClassificationRule:
    """One row of the classification table."""

    name: str
    matches: Callable[[ResultCodes], bool]
    build: Callable[[ResultCodes], ClassifiedReason]


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="destination_not_funded",
        matches=lambda codes: codes.operation == OP_NO_DESTINATION,
        build=lambda codes: DestinationNotFunded(
            transaction_code=codes.transaction,
            operation_code=codes.operation,
        ),
    ),
    ClassificationRule(
        name="stale_sequence_number",
        matches=lambda codes: codes.transaction == TX_BAD_SEQ,
        build=lambda codes: StaleSequenceNumber(
            transaction_code=codes.transaction,
            operation_code=codes.operation,
        ),
    ),
    ClassificationRule(
        name="generic_rejection",
        matches=lambda codes: codes.transaction is not None,
        build=lambda codes: GenericRejection(
            transaction_code=codes.transaction or "",
            operation_code=codes.operation,
        ),
    ),
)


def _problem_of(raw_error: Any) -> Mapping[str, Any] | None:
    """Find the problem document in a raw error.

    Accepts the document itself or any object exposing it as ``problem``
    (GatewayRejectedError, SubmitResult).
    """
    if isinstance(raw_error, Mapping):
        return raw_error
    problem = getattr(raw_error, "problem", None)
    if isinstance(problem, Mapping):
        return problem
    return None


def extract_result_codes(raw_error: Any) -> ResultCodes | None:
    """Pull ``extras.result_codes`` out of a raw gateway error.

    Returns:
        ResultCodes, or None if the error carries no result codes.
    """
    problem = _problem_of(raw_error)
    if problem is None:
        return None

    extras = problem.get("extras")
    if not isinstance(extras, Mapping):
        return None
    codes = extras.get("result_codes")
    if not isinstance(codes, Mapping):
        return None

    transaction = codes.get("transaction")
    operations = codes.get("operations")
    if not isinstance(transaction, str) or not transaction:
        transaction = None
    if isinstance(operations, (list, tuple)):
        op_codes = tuple(str(op) for op in operations)
    else:
        op_codes = ()

    if transaction is None and not op_codes:
        return None
    return ResultCodes(transaction=transaction, operations=op_codes)


def classify(raw_error: Any) -> ClassifiedReason | None:
    """Classify a raw gateway rejection.

    Args:
        raw_error: Horizon problem document, or an object exposing one
            as ``problem``. Anything else classifies as None.

    Returns:
        The reason of the first matching rule, or None when the error is
        not a structured gateway rejection.
    """
    codes = extract_result_codes(raw_error)
    if codes is None:
        return None
    for rule in RULES:
        if rule.matches(codes):
            return rule.build(codes)
    return None
