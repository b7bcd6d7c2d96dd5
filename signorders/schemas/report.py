"""Pydantic schemas for PDF reports."""

from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from signorders.db.enums import InstallationType
from signorders.schemas.base import CamelModel, as_utc


class ReportFilters(CamelModel):
    """Report criteria. The date range applies only when both ends are given."""
    start_date: datetime | None = None
    end_date: datetime | None = None
    office_id: UUID | None = None
    vendor_id: UUID | None = None
    installation_type: InstallationType | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class ReportData(CamelModel):
    total_orders: int
    total_offices: int
    # {office name: {INSTALLATION: n, REMOVAL: n, REPAIR: n}}
    data: dict[str, dict[str, int]]
    type_totals: dict[str, int]
    filters: ReportFilters


class ReportGenerateResponse(CamelModel):
    message: str
    filename: str
    download_url: str
    data: ReportData
