"""Authentication-related Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from signorders.db.enums import Role
from signorders.schemas.base import CamelModel, EmailAddress


class UserSession(BaseModel):
    """
    Full session context for authenticated requests.

    Returned by the get_current_session dependency; carries everything
    the filter compiler and access checks need.
    """
    user_id: UUID
    office_id: UUID | None = None
    role: Role  # Validated enum
    email: str
    display_name: str


class LoginRequest(CamelModel):
    email: EmailAddress
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    """Create a user (admins only)."""
    email: EmailAddress
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: Role = Role.AGENT
    office_id: UUID | None = None


class OfficeSummary(CamelModel):
    id: UUID
    name: str


class UserRead(CamelModel):
    """Response schema for a user (GET /auth/me, login, register)."""
    id: UUID
    email: str
    first_name: str
    last_name: str
    role: Role
    office_id: UUID | None = None
    office: OfficeSummary | None = None
    is_active: bool = True
    last_login_at: datetime | None = None


class TokenResponse(CamelModel):
    token: str
    user: UserRead


class MessageResponse(CamelModel):
    message: str
