"""Pydantic schemas for API request/response models."""

from signorders.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UserRead,
    UserSession,
)

__all__ = [
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "TokenResponse",
    "UserRead",
    "UserSession",
]
