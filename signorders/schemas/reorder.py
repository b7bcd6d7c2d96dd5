"""Pydantic schemas for reorders."""

from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from signorders.db.enums import InstallationType, OrderStatus
from signorders.schemas.base import CamelModel
from signorders.schemas.order import PersonRef
from signorders.utils.normalization import validate_zip_code


class ReorderCreate(CamelModel):
    """Request to create a reorder against an eligible order."""
    original_order_id: UUID
    installation_type: InstallationType
    zip_code: str
    additional_info: str | None = None
    listing_agent_id: UUID

    @field_validator("zip_code")
    @classmethod
    def _zip(cls, v: str) -> str:
        return validate_zip_code(v)


class ReorderUpdate(CamelModel):
    installation_type: InstallationType | None = None
    zip_code: str | None = None
    additional_info: str | None = None
    listing_agent_id: UUID | None = None
    status: OrderStatus | None = None

    @field_validator("zip_code")
    @classmethod
    def _zip(cls, v: str | None) -> str | None:
        return validate_zip_code(v)


class ReorderRead(CamelModel):
    id: UUID
    reorder_id: str
    original_order_id: UUID
    original_order_number: str | None = None
    installation_type: InstallationType
    zip_code: str
    additional_info: str | None
    listing_agent_id: UUID
    listing_agent: PersonRef | None = None
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
