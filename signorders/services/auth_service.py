"""Authentication service - password login, registration, token lifecycle."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from signorders.core.errors import AuthenticationError, ConflictError, NotFoundError
from signorders.core.security import create_session_token, hash_password, verify_password
from signorders.db.base import utcnow
from signorders.db.models import Office, User
from signorders.schemas.auth import RegisterRequest, UserRead
from signorders.utils.normalization import normalize_email

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: UUID) -> User | None:
    return (
        db.query(User)
        .options(selectinload(User.office))
        .filter(User.id == user_id)
        .first()
    )


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def issue_token(user: User) -> str:
    return create_session_token(user.id, user.office_id, user.role, user.token_version)


def to_user_read(user: User) -> UserRead:
    return UserRead.model_validate(user)


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Verify credentials and stamp last_login_at.

    Unknown email, wrong password and disabled accounts all look the same
    to the caller.
    """
    user = get_user_by_email(db, email)
    if not user or not user.is_active or not verify_password(password, user.password_hash):
        logger.info("Login failed")
        raise AuthenticationError("Invalid credentials", code="INVALID_CREDENTIALS")

    user.last_login_at = utcnow()
    db.commit()
    logger.info("Login succeeded", extra={"user_id": str(user.id)})
    return get_user(db, user.id)


def register_user(db: Session, data: RegisterRequest) -> User:
    if get_user_by_email(db, data.email):
        raise ConflictError("User already exists", code="USER_EXISTS")
    if data.office_id and db.get(Office, data.office_id) is None:
        raise NotFoundError("Office", data.office_id)

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role.value,
        office_id=data.office_id,
    )
    db.add(user)
    db.commit()
    logger.info("User registered", extra={"user_id": str(user.id), "role": user.role})
    return get_user(db, user.id)


def revoke_sessions(db: Session, user_id: UUID) -> None:
    """Bump token_version; every token issued before now stops validating."""
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User")
    user.token_version += 1
    db.commit()
