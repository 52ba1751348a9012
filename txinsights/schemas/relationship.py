"""Schemas for customer relationship endpoints."""
from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RelationType(str, enum.Enum):
    P2P_SEND = "P2P_SEND"
    P2P_RECEIVE = "P2P_RECEIVE"
    DEVICE = "DEVICE"


class RelatedCustomer(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, use_enum_values=True)

    related_customer_id: int
    relation_type: RelationType


class CustomerRelationshipResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    related_customers: list[RelatedCustomer]


__all__ = ["CustomerRelationshipResponse", "RelatedCustomer", "RelationType"]
