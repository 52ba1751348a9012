"""Fold a customer's transactions into one timeline per authorization code."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Sequence

from txinsights.schemas import AggregatedTransaction, TimelineEntry, Transaction
from txinsights.services.errors import DataFormatError

logger = logging.getLogger(__name__)


def parse_transaction_date(transaction: Transaction) -> datetime:
    """Return ``transactionDate`` as an aware datetime; naive values are taken as UTC."""

    raw = transaction.transaction_date
    try:
        parsed = datetime.fromisoformat(raw)
    except (TypeError, ValueError) as exc:
        raise DataFormatError(
            f"Transaction {transaction.transaction_id} has an invalid transactionDate: {raw!r}"
        ) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def group_by_authorization_code(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    """Partition transactions by authorization code, keeping first-seen key order."""

    groups: dict[str, list[Transaction]] = {}
    for transaction in transactions:
        groups.setdefault(transaction.authorization_code, []).append(transaction)
    return groups


def _summarise_group(group: list[Transaction]) -> AggregatedTransaction:
    dated = [(parse_transaction_date(transaction), transaction) for transaction in group]
    dated.sort(key=lambda pair: pair[0])
    ordered = [transaction for _, transaction in dated]
    first, last = ordered[0], ordered[-1]
    return AggregatedTransaction(
        created_at=first.transaction_date,
        updated_at=last.transaction_date,
        transaction_id=first.transaction_id,
        authorization_code=first.authorization_code,
        status=last.transaction_status,
        description=first.description,
        transaction_type=first.transaction_type,
        metadata=first.metadata if "metadata" in first.model_fields_set else None,
        timeline=[
            TimelineEntry(
                created_at=transaction.transaction_date,
                status=transaction.transaction_status,
                amount=transaction.amount,
            )
            for transaction in ordered
        ],
    )


def aggregate_transactions(
    transactions: Sequence[Transaction], customer_id: int
) -> list[AggregatedTransaction]:
    """Return one aggregated entry per authorization code used by ``customer_id``.

    Each group is ordered by ``transactionDate`` with a stable sort, so members
    sharing a timestamp keep their upstream order. The earliest member supplies
    the identifying fields and the latest member supplies the current status.
    Raises ``DataFormatError`` when a member's date cannot be parsed.
    """

    customer_transactions = [t for t in transactions if t.customer_id == customer_id]
    groups = group_by_authorization_code(customer_transactions)
    aggregated = [_summarise_group(group) for group in groups.values()]
    logger.debug(
        "aggregated %d transactions into %d groups for customer %s",
        len(customer_transactions),
        len(aggregated),
        customer_id,
    )
    return aggregated


__all__ = ["aggregate_transactions", "group_by_authorization_code", "parse_transaction_date"]
