"""Pydantic schemas for lookup reference data."""

from uuid import UUID

from pydantic import Field, field_validator

from signorders.db.enums import Role
from signorders.schemas.base import CamelModel, OptionalEmailAddress
from signorders.utils.normalization import validate_zip_code


class OfficeRead(CamelModel):
    id: UUID
    name: str
    address: str | None
    phone: str | None
    email: str | None
    manager_email: str | None
    is_active: bool


class OfficeCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)
    phone: str | None = Field(None, max_length=50)
    email: OptionalEmailAddress = None
    manager_email: OptionalEmailAddress = None


class AgentRead(CamelModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    role: Role
    office_id: UUID | None


class VendorRead(CamelModel):
    id: UUID
    name: str
    contact_person: str | None
    email: str | None
    phone: str | None
    address: str | None
    service_areas: list[str]
    is_active: bool


class VendorCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact_person: str | None = Field(None, max_length=255)
    email: OptionalEmailAddress = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    service_areas: list[str] = []

    @field_validator("service_areas")
    @classmethod
    def _zips(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return [validate_zip_code(z) for z in v]


class VendorUpdate(VendorCreate):
    name: str | None = Field(None, min_length=1, max_length=255)
    service_areas: list[str] | None = None
    is_active: bool | None = None


class OptionItem(CamelModel):
    """Static dropdown entry."""
    value: str
    label: str
