"""Pydantic schemas for the sign-requests grid and its statistics."""

from datetime import datetime
from uuid import UUID

from signorders.db.enums import InstallationType, OrderStatus
from signorders.schemas.base import CamelModel


class SignRequestItem(CamelModel):
    """Row of GET /sign-requests."""
    id: UUID
    order_id: str
    address: str
    installation_type: InstallationType
    property_type: str
    status: OrderStatus
    contact_name: str | None
    contact_email: str | None
    agent_id: UUID
    agent_name: str | None = None
    office_id: UUID
    office_name: str | None = None
    vendor_name: str | None = None
    installation_date: datetime | None
    completion_date: datetime | None
    created_at: datetime
    can_order: bool


class SignRequestListResponse(CamelModel):
    orders: list[SignRequestItem]
    total: int
    page: int
    limit: int
    total_pages: int


class StatsBreakdownEntry(CamelModel):
    installation_type: InstallationType
    status: OrderStatus
    count: int


class SignRequestStats(CamelModel):
    total_orders: int
    eligible_for_ordering: int
    breakdown: list[StatsBreakdownEntry]
