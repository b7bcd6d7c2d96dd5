"""Pydantic schemas for orders."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from signorders.db.enums import InstallationType, OrderStatus
from signorders.schemas.base import CamelModel, OptionalEmailAddress, as_utc
from signorders.utils.normalization import (
    normalize_state,
    validate_phone,
    validate_zip_code,
)

_DATE_FIELDS = ("listing_date", "expiration_date", "installation_date", "completion_date")


class _OrderFieldValidators(CamelModel):
    """Field normalization shared by create and update."""

    @field_validator("state", check_fields=False)
    @classmethod
    def _state(cls, v: str | None) -> str | None:
        return normalize_state(v)

    @field_validator("zip_code", check_fields=False)
    @classmethod
    def _zip(cls, v: str | None) -> str | None:
        return validate_zip_code(v)

    @field_validator("contact_phone", check_fields=False)
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return validate_phone(v)

    @field_validator(*_DATE_FIELDS, check_fields=False)
    @classmethod
    def _dates(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class OrderCreate(_OrderFieldValidators):
    """Request to create an order."""
    office_id: UUID
    agent_id: UUID
    installation_type: InstallationType
    property_type: str = Field(..., min_length=1, max_length=100)
    street_address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=2, max_length=20)
    zip_code: str
    contact_name: str | None = Field(None, max_length=255)
    contact_phone: str | None = None
    contact_email: OptionalEmailAddress = None
    listing_date: datetime | None = None
    expiration_date: datetime | None = None
    installation_date: datetime | None = None
    completion_date: datetime | None = None
    directions: str | None = None
    additional_info: str | None = None
    underwater_sprinkler: bool = False
    invisible_dog_fence: bool = False
    vendor_id: UUID | None = None
    status: OrderStatus = OrderStatus.PENDING


class OrderUpdate(_OrderFieldValidators):
    """Request to update an order (partial). orderId is not updatable."""
    office_id: UUID | None = None
    agent_id: UUID | None = None
    installation_type: InstallationType | None = None
    property_type: str | None = Field(None, min_length=1, max_length=100)
    street_address: str | None = Field(None, min_length=1, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, min_length=2, max_length=20)
    zip_code: str | None = None
    contact_name: str | None = Field(None, max_length=255)
    contact_phone: str | None = None
    contact_email: OptionalEmailAddress = None
    listing_date: datetime | None = None
    expiration_date: datetime | None = None
    installation_date: datetime | None = None
    completion_date: datetime | None = None
    directions: str | None = None
    additional_info: str | None = None
    underwater_sprinkler: bool | None = None
    invisible_dog_fence: bool | None = None
    vendor_id: UUID | None = None
    status: OrderStatus | None = None


class PersonRef(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    email: str


class NamedRef(CamelModel):
    id: UUID
    name: str


class ReorderSummary(CamelModel):
    id: UUID
    reorder_id: str
    installation_type: InstallationType
    status: OrderStatus
    created_at: datetime


class OrderRead(CamelModel):
    """Full order response (detail, create, update)."""
    id: UUID
    order_id: str
    office_id: UUID
    agent_id: UUID
    installation_type: InstallationType
    property_type: str
    street_address: str
    city: str
    state: str
    zip_code: str
    contact_name: str | None
    contact_phone: str | None
    contact_email: str | None
    listing_date: datetime | None
    expiration_date: datetime | None
    installation_date: datetime | None
    completion_date: datetime | None
    directions: str | None
    additional_info: str | None
    underwater_sprinkler: bool
    invisible_dog_fence: bool
    vendor_id: UUID | None
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    office: NamedRef | None = None
    agent: PersonRef | None = None
    vendor: NamedRef | None = None
    reorders: list[ReorderSummary] = []


class OrderListItem(CamelModel):
    """Row of GET /orders."""
    id: UUID
    order_id: str
    office_id: UUID
    agent_id: UUID
    installation_type: InstallationType
    property_type: str
    address: str
    city: str
    state: str
    zip_code: str
    contact_name: str | None
    contact_phone: str | None
    installation_date: datetime | None
    completion_date: datetime | None
    status: OrderStatus
    created_at: datetime
    office_name: str | None = None
    agent_name: str | None = None
    vendor_name: str | None = None
    reorder_count: int = 0
    can_order: bool


class PaginationInfo(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderListResponse(CamelModel):
    orders: list[OrderListItem]
    pagination: PaginationInfo


class ReorderEligibilityResponse(CamelModel):
    eligible: bool
