from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tests.conftest import make_transaction, to_transactions
from txinsights.services.aggregation import (
    aggregate_transactions,
    group_by_authorization_code,
    parse_transaction_date,
)
from txinsights.services.errors import DataFormatError


def test_same_authorization_code_folds_into_one_timeline() -> None:
    transactions = to_transactions(
        [
            make_transaction(
                1,
                1,
                transaction_date="2024-01-01T00:00:00Z",
                transaction_status="COMPLETED",
                description="Initial",
                deviceId="device1",
            ),
            make_transaction(
                2,
                1,
                transaction_date="2024-01-02T00:00:00Z",
                transaction_status="PENDING",
                description="Update",
            ),
        ]
    )

    [aggregated] = aggregate_transactions(transactions, 1)

    assert aggregated.created_at == "2024-01-01T00:00:00Z"
    assert aggregated.updated_at == "2024-01-02T00:00:00Z"
    assert aggregated.status == "PENDING"
    assert aggregated.transaction_id == 1
    assert aggregated.description == "Initial"
    assert aggregated.metadata.device_id == "device1"
    assert [(entry.status, entry.amount) for entry in aggregated.timeline] == [
        ("COMPLETED", 100),
        ("PENDING", 100),
    ]


def test_group_members_are_ordered_by_date_not_input_order() -> None:
    transactions = to_transactions(
        [
            make_transaction(3, 1, transaction_date="2024-01-03T00:00:00Z", transaction_status="SETTLED"),
            make_transaction(1, 1, transaction_date="2024-01-01T00:00:00Z", transaction_status="PENDING"),
            make_transaction(2, 1, transaction_date="2024-01-02T00:00:00Z", transaction_status="AUTHORIZED"),
        ]
    )

    [aggregated] = aggregate_transactions(transactions, 1)

    assert aggregated.transaction_id == 1
    assert aggregated.status == "SETTLED"
    assert [entry.created_at for entry in aggregated.timeline] == [
        "2024-01-01T00:00:00Z",
        "2024-01-02T00:00:00Z",
        "2024-01-03T00:00:00Z",
    ]


def test_equal_dates_keep_upstream_order() -> None:
    transactions = to_transactions(
        [
            make_transaction(1, 1, transaction_status="FIRST"),
            make_transaction(2, 1, transaction_status="SECOND"),
            make_transaction(3, 1, transaction_status="THIRD"),
        ]
    )

    [aggregated] = aggregate_transactions(transactions, 1)

    assert [entry.status for entry in aggregated.timeline] == ["FIRST", "SECOND", "THIRD"]
    assert aggregated.transaction_id == 1
    assert aggregated.status == "THIRD"


def test_single_member_group() -> None:
    transactions = to_transactions([make_transaction(7, 1, authorization_code="SOLO")])

    [aggregated] = aggregate_transactions(transactions, 1)

    assert aggregated.created_at == aggregated.updated_at
    assert len(aggregated.timeline) == 1


def test_groups_follow_discovery_order_and_partition_the_customer() -> None:
    records = [
        make_transaction(1, 1, authorization_code="B", transaction_date="2024-02-01T00:00:00Z"),
        make_transaction(2, 2, authorization_code="B"),
        make_transaction(3, 1, authorization_code="A", transaction_date="2024-01-05T00:00:00Z"),
        make_transaction(4, 1, authorization_code="B", transaction_date="2024-01-01T00:00:00Z"),
        make_transaction(5, 1, authorization_code="C", amount=12.5),
    ]
    transactions = to_transactions(records)

    aggregated = aggregate_transactions(transactions, 1)

    assert [item.authorization_code for item in aggregated] == ["B", "A", "C"]
    timeline_entries = sorted(
        (entry.created_at, entry.status, entry.amount) for item in aggregated for entry in item.timeline
    )
    customer_entries = sorted(
        (t.transaction_date, t.transaction_status, t.amount) for t in transactions if t.customer_id == 1
    )
    assert timeline_entries == customer_entries
    for item in aggregated:
        assert item.timeline
        dates = [datetime.fromisoformat(entry.created_at) for entry in item.timeline]
        assert dates == sorted(dates)


def test_offsets_are_compared_as_instants() -> None:
    transactions = to_transactions(
        [
            make_transaction(1, 1, transaction_date="2024-01-01T10:00:00+02:00", transaction_status="LATER"),
            make_transaction(2, 1, transaction_date="2024-01-01T07:00:00Z", transaction_status="EARLIER"),
        ]
    )

    [aggregated] = aggregate_transactions(transactions, 1)

    assert [entry.status for entry in aggregated.timeline] == ["EARLIER", "LATER"]


def test_unknown_customer_yields_empty_list() -> None:
    transactions = to_transactions([make_transaction(1, 1)])

    assert aggregate_transactions(transactions, 99) == []


def test_aggregation_is_idempotent() -> None:
    transactions = to_transactions(
        [
            make_transaction(1, 1, transaction_date="2024-01-02T00:00:00Z"),
            make_transaction(2, 1, transaction_date="2024-01-01T00:00:00Z"),
            make_transaction(3, 1, authorization_code="AUTH2"),
        ]
    )

    assert aggregate_transactions(transactions, 1) == aggregate_transactions(transactions, 1)


def test_unparseable_date_raises_data_format_error() -> None:
    transactions = to_transactions(
        [
            make_transaction(1, 1),
            make_transaction(2, 1, transaction_date="yesterday"),
        ]
    )

    with pytest.raises(DataFormatError, match="yesterday"):
        aggregate_transactions(transactions, 1)


def test_parse_transaction_date_assumes_utc_for_naive_values() -> None:
    [transaction] = to_transactions([make_transaction(1, 1, transaction_date="2024-03-04T05:06:07")])

    assert parse_transaction_date(transaction) == datetime(2024, 3, 4, 5, 6, 7, tzinfo=timezone.utc)


def test_group_by_authorization_code_preserves_member_order() -> None:
    transactions = to_transactions(
        [
            make_transaction(1, 1, authorization_code="X"),
            make_transaction(2, 1, authorization_code="Y"),
            make_transaction(3, 1, authorization_code="X"),
        ]
    )

    groups = group_by_authorization_code(transactions)

    assert list(groups) == ["X", "Y"]
    assert [t.transaction_id for t in groups["X"]] == [1, 3]
