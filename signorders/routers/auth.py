"""Authentication router - password login and bearer session tokens."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from signorders.core.deps import get_current_session, get_db, require_roles
from signorders.core.errors import NotFoundError
from signorders.core.rate_limit import auth_limit, limiter
from signorders.db.enums import ROLES_UNRESTRICTED
from signorders.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UserRead,
    UserSession,
)
from signorders.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limiter.limit(auth_limit)
def login(request: Request, data: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email + password for a session token.

    Unknown users, wrong passwords and disabled accounts all return
    401 INVALID_CREDENTIALS.
    """
    user = auth_service.authenticate(db, data.email, data.password)
    return TokenResponse(token=auth_service.issue_token(user), user=auth_service.to_user_read(user))


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(
    data: RegisterRequest,
    session: UserSession = Depends(require_roles(ROLES_UNRESTRICTED)),
    db: Session = Depends(get_db),
):
    """Create a user (IT_ADMIN / SIGN_ADMIN only)."""
    user = auth_service.register_user(db, data)
    logger.info("User %s registered by %s", user.id, session.user_id)
    return TokenResponse(token=auth_service.issue_token(user), user=auth_service.to_user_read(user))


@router.get("/me", response_model=UserRead)
def me(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    user = auth_service.get_user(db, session.user_id)
    if not user:
        raise NotFoundError("User")
    return auth_service.to_user_read(user)


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Issue a fresh token with a new expiry for the current session."""
    user = auth_service.get_user(db, session.user_id)
    if not user:
        raise NotFoundError("User")
    return TokenResponse(token=auth_service.issue_token(user), user=auth_service.to_user_read(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Revoke every outstanding token for the caller."""
    auth_service.revoke_sessions(db, session.user_id)
    return MessageResponse(message="Logged out")
