"""FastAPI dependencies for authentication, authorization, and database access."""

from typing import Generator
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from signorders.core.errors import AuthenticationError, AuthorizationError
from signorders.core.security import decode_session_token
from signorders.db.session import SessionLocal


AUTH_HEADER = "Authorization"
BEARER_PREFIX = "bearer "


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get(AUTH_HEADER, "")
    if header.lower().startswith(BEARER_PREFIX):
        token = header[len(BEARER_PREFIX):].strip()
        return token or None
    return None


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Get authenticated user from the bearer token.

    Validates:
    - Authorization header carries a bearer token
    - JWT is valid and not expired
    - User exists and is active
    - Token version matches (for revocation support)

    Raises:
        AuthenticationError: Authentication failed
    """
    # Import here to avoid circular imports
    from signorders.db.models import User

    token = _bearer_token(request)
    if not token:
        raise AuthenticationError("Access denied. No token provided.")

    try:
        payload = decode_session_token(token)
    except Exception:
        raise AuthenticationError("Invalid token.", code="INVALID_TOKEN")

    user = db.get(User, _parse_uuid(payload.get("sub")))
    if not user:
        raise AuthenticationError("Invalid token.", code="INVALID_TOKEN")

    if not user.is_active:
        raise AuthenticationError("Account disabled", code="ACCOUNT_DISABLED")

    # Token version check (revocation support)
    if user.token_version != payload.get("token_version"):
        raise AuthenticationError("Session revoked", code="SESSION_REVOKED")

    return user


def _parse_uuid(value) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token.", code="INVALID_TOKEN")


def get_current_session(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Get full session context: user_id, office_id, role.

    This is the PRIMARY auth dependency for most endpoints.
    Role and office are read from the user row, not the token, so a
    role change takes effect on the next request.

    Raises:
        AuthenticationError: Not authenticated
        AuthorizationError: Unknown role
    """
    from signorders.db.enums import Role
    from signorders.schemas.auth import UserSession

    user = get_current_user(request, db)

    # Validate role is a known enum value - return 403 not 500
    if not Role.has_value(user.role):
        raise AuthorizationError(
            f"Unknown role '{user.role}'. Contact administrator."
        )

    return UserSession(
        user_id=user.id,
        office_id=user.office_id,
        role=Role(user.role),
        email=user.email,
        display_name=user.full_name,
    )


def require_roles(allowed_roles):
    """
    Dependency factory for role-based authorization.

    Uses enum values (not strings) to prevent drift.

    Usage:
        @router.post("/offices", dependencies=[Depends(require_roles(ROLES_CAN_MANAGE_LOOKUPS))])
    """
    def dependency(request: Request, db: Session = Depends(get_db)):
        session = get_current_session(request, db)
        if session.role not in allowed_roles:
            raise AuthorizationError(
                f"Role '{session.role.value}' not authorized for this action"
            )
        return session
    return dependency


# =============================================================================
# Permission Check Helpers (use enum sets from db.enums)
# =============================================================================

def is_unrestricted(session) -> bool:
    """Check if user sees every office and agent."""
    from signorders.db.enums import ROLES_UNRESTRICTED
    return session.role in ROLES_UNRESTRICTED


def can_hard_delete(session) -> bool:
    """Check if user can permanently delete orders."""
    from signorders.db.enums import ROLES_CAN_HARD_DELETE
    return session.role in ROLES_CAN_HARD_DELETE


def can_access_order(session, office_id, agent_id) -> bool:
    """Check if an order (by its office/agent) falls inside the caller's scope."""
    from signorders.db.enums import Role

    if is_unrestricted(session):
        return True
    if session.role == Role.AGENT:
        return agent_id == session.user_id
    if session.role == Role.ADMIN_AGENT:
        return session.office_id is None or office_id == session.office_id
    return False
