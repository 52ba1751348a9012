"""Pydantic schemas for transaction resources."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class TransactionMetadata(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, extra="allow")

    related_transaction_id: int | None = None
    device_id: str | None = None


class Transaction(BaseModel):
    """A single transaction record as published by the upstream source."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    transaction_id: int
    authorization_code: str
    transaction_date: str
    customer_id: int
    transaction_type: str
    transaction_status: str
    description: str
    amount: int | float
    metadata: TransactionMetadata = Field(default_factory=TransactionMetadata)

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_metadata_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class TimelineEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    created_at: str
    status: str
    amount: int | float


class AggregatedTransaction(BaseModel):
    """All states of one authorization code folded into a single entry."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    created_at: str
    updated_at: str
    transaction_id: int
    authorization_code: str
    status: str
    description: str
    transaction_type: str
    metadata: TransactionMetadata | None = None
    timeline: list[TimelineEntry]


class AggregatedTransactionsResponse(BaseModel):
    transactions: list[AggregatedTransaction]


__all__ = [
    "AggregatedTransaction",
    "AggregatedTransactionsResponse",
    "TimelineEntry",
    "Transaction",
    "TransactionMetadata",
]
