"""Infer related customers from P2P transfers and shared devices."""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from txinsights.schemas import RelatedCustomer, RelationType, Transaction

logger = logging.getLogger(__name__)

RelationMap = dict[int, set[RelationType]]


def _first_match(
    transactions: Sequence[Transaction], predicate: Callable[[Transaction], bool]
) -> Transaction | None:
    # Back-references are not guaranteed unique; the earliest in scan order wins.
    return next((candidate for candidate in transactions if predicate(candidate)), None)


def _link(relations: RelationMap, related_customer_id: int, relation_type: RelationType) -> None:
    relations.setdefault(related_customer_id, set()).add(relation_type)


def find_device_links(
    transactions: Sequence[Transaction], customer_id: int, relations: RelationMap
) -> None:
    """Link every other customer who transacted from one of the customer's devices."""

    customer_devices = {
        t.metadata.device_id for t in transactions if t.customer_id == customer_id and t.metadata.device_id
    }
    if not customer_devices:
        return
    for transaction in transactions:
        if transaction.customer_id != customer_id and transaction.metadata.device_id in customer_devices:
            _link(relations, transaction.customer_id, RelationType.DEVICE)


def find_send_links(
    transactions: Sequence[Transaction], customer_id: int, relations: RelationMap
) -> None:
    """Link the receiving side of each P2P transfer the customer sent."""

    for sent in transactions:
        if sent.customer_id != customer_id or sent.transaction_type != RelationType.P2P_SEND.value:
            continue
        received = _first_match(
            transactions, lambda t: t.metadata.related_transaction_id == sent.transaction_id
        )
        if received is not None and received.customer_id != customer_id:
            _link(relations, received.customer_id, RelationType.P2P_SEND)


def find_receive_links(
    transactions: Sequence[Transaction], customer_id: int, relations: RelationMap
) -> None:
    """Link the sending side of each P2P transfer the customer received."""

    for received in transactions:
        if received.customer_id != customer_id or received.transaction_type != RelationType.P2P_RECEIVE.value:
            continue
        related_id = received.metadata.related_transaction_id
        if related_id is None:
            continue
        sent = _first_match(transactions, lambda t: t.transaction_id == related_id)
        if sent is not None and sent.customer_id != customer_id:
            _link(relations, sent.customer_id, RelationType.P2P_RECEIVE)


def resolve_relationships(transactions: Sequence[Transaction], customer_id: int) -> list[RelatedCustomer]:
    """Return every (related customer, relation type) pair for ``customer_id``.

    The three passes are independent and their results are unioned, so a
    customer appears once per distinct relation type. Output order is not
    significant.
    """

    relations: RelationMap = {}
    find_device_links(transactions, customer_id, relations)
    find_send_links(transactions, customer_id, relations)
    find_receive_links(transactions, customer_id, relations)

    related = [
        RelatedCustomer(related_customer_id=related_customer_id, relation_type=relation_type)
        for related_customer_id, relation_types in relations.items()
        for relation_type in sorted(relation_types, key=lambda item: item.value)
    ]
    logger.debug("resolved %d relationships for customer %s", len(related), customer_id)
    return related


__all__ = [
    "find_device_links",
    "find_receive_links",
    "find_send_links",
    "resolve_relationships",
]
