"""Pydantic schemas for CC email distribution entries."""

from datetime import datetime
from uuid import UUID

from signorders.schemas.base import CamelModel, EmailAddress
from signorders.schemas.order import NamedRef, PaginationInfo, PersonRef


class CCEmailCreate(CamelModel):
    email: EmailAddress
    office_id: UUID
    agent_id: UUID | None = None


class CCEmailUpdate(CamelModel):
    email: EmailAddress | None = None
    office_id: UUID | None = None
    agent_id: UUID | None = None


class CCEmailRead(CamelModel):
    id: UUID
    email: str
    office_id: UUID
    agent_id: UUID | None
    is_active: bool
    office: NamedRef | None = None
    agent: PersonRef | None = None
    entered_by: PersonRef | None = None
    modified_by: PersonRef | None = None
    created_at: datetime
    updated_at: datetime


class CCEmailListResponse(CamelModel):
    cc_emails: list[CCEmailRead]
    pagination: PaginationInfo
