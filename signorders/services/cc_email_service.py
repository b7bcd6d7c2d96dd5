"""CC email service - per-office notification copy lists (soft-deleted)."""

from uuid import UUID

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session, selectinload

from signorders.core.deps import is_unrestricted
from signorders.core.errors import AuthorizationError, ConflictError, NotFoundError
from signorders.db.enums import Role
from signorders.db.models import CCEmail, Office, User
from signorders.schemas.auth import UserSession
from signorders.schemas.cc_email import CCEmailCreate, CCEmailUpdate
from signorders.utils.normalization import escape_like
from signorders.utils.pagination import PaginationParams

DEFAULT_CC_EMAIL_LIMIT = 10


def _eager_options():
    return (
        selectinload(CCEmail.office),
        selectinload(CCEmail.agent),
        selectinload(CCEmail.entered_by),
        selectinload(CCEmail.modified_by),
    )


def list_cc_emails(
    db: Session,
    session: UserSession,
    *,
    office_id: UUID | None = None,
    agent_id: UUID | None = None,
    search: str | None = None,
    pagination: PaginationParams,
) -> tuple[list[CCEmail], int]:
    """Active CC emails, role scoped the same way as orders."""
    if session.role == Role.AGENT:
        agent_id = session.user_id
    elif session.role == Role.ADMIN_AGENT and session.office_id:
        office_id = session.office_id

    conditions = [CCEmail.is_active.is_(True)]
    if office_id:
        conditions.append(CCEmail.office_id == office_id)
    if agent_id:
        conditions.append(CCEmail.agent_id == agent_id)
    if search and search.strip():
        conditions.append(
            CCEmail.email.ilike(f"%{escape_like(search.strip())}%", escape="\\")
        )

    total = db.query(func.count(distinct(CCEmail.id))).filter(*conditions).scalar() or 0
    rows = (
        db.query(CCEmail)
        .options(*_eager_options())
        .filter(*conditions)
        .order_by(CCEmail.created_at.desc(), CCEmail.id)
        .offset(pagination.offset)
        .limit(pagination.limit)
        .all()
    )
    return rows, total


def _ensure_scope(session: UserSession, office_id: UUID, agent_id: UUID | None) -> None:
    """AGENT: own rows in own office. ADMIN_AGENT: own office."""
    if is_unrestricted(session):
        return
    if session.role == Role.AGENT:
        if agent_id != session.user_id or (session.office_id and office_id != session.office_id):
            raise AuthorizationError("Agents can only manage their own CC emails")
        return
    if session.role == Role.ADMIN_AGENT and session.office_id and office_id != session.office_id:
        raise AuthorizationError("Admin agents can only manage CC emails for their office")


def _find_active_duplicate(
    db: Session,
    email: str,
    office_id: UUID,
    agent_id: UUID | None,
    exclude_id: UUID | None = None,
) -> CCEmail | None:
    query = db.query(CCEmail).filter(
        CCEmail.email == email,
        CCEmail.office_id == office_id,
        CCEmail.is_active.is_(True),
    )
    # A missing agent matches other rows without an agent
    if agent_id is None:
        query = query.filter(CCEmail.agent_id.is_(None))
    else:
        query = query.filter(CCEmail.agent_id == agent_id)
    if exclude_id is not None:
        query = query.filter(CCEmail.id != exclude_id)
    return query.first()


def get_cc_email(db: Session, session: UserSession, cc_email_id: UUID) -> CCEmail:
    row = (
        db.query(CCEmail)
        .options(*_eager_options())
        .filter(CCEmail.id == cc_email_id, CCEmail.is_active.is_(True))
        .first()
    )
    if not row:
        raise NotFoundError("CC email")
    _ensure_scope(session, row.office_id, row.agent_id)
    return row


def create_cc_email(db: Session, session: UserSession, data: CCEmailCreate) -> CCEmail:
    _ensure_scope(session, data.office_id, data.agent_id)
    if db.get(Office, data.office_id) is None:
        raise NotFoundError("Office", data.office_id)
    if data.agent_id and db.get(User, data.agent_id) is None:
        raise NotFoundError("Agent", data.agent_id)

    if _find_active_duplicate(db, data.email, data.office_id, data.agent_id):
        raise ConflictError(
            "This email is already configured for this office/agent combination",
            code="DUPLICATE_CC_EMAIL",
        )

    row = CCEmail(
        email=data.email,
        office_id=data.office_id,
        agent_id=data.agent_id,
        entered_by_user_id=session.user_id,
    )
    db.add(row)
    db.commit()
    return get_cc_email(db, session, row.id)


def update_cc_email(
    db: Session,
    session: UserSession,
    cc_email_id: UUID,
    data: CCEmailUpdate,
) -> CCEmail:
    row = get_cc_email(db, session, cc_email_id)
    updates = data.model_dump(exclude_unset=True)

    email = updates.get("email") or row.email
    office_id = updates.get("office_id") or row.office_id
    agent_id = updates["agent_id"] if "agent_id" in updates else row.agent_id

    _ensure_scope(session, office_id, agent_id)
    if _find_active_duplicate(db, email, office_id, agent_id, exclude_id=row.id):
        raise ConflictError(
            "This email is already configured for this office/agent combination",
            code="DUPLICATE_CC_EMAIL",
        )

    row.email = email
    row.office_id = office_id
    row.agent_id = agent_id
    row.modified_by_user_id = session.user_id
    db.commit()
    return get_cc_email(db, session, row.id)


def delete_cc_email(db: Session, session: UserSession, cc_email_id: UUID) -> None:
    """Soft delete: the row stays, hidden from lists and duplicate checks."""
    row = get_cc_email(db, session, cc_email_id)
    row.is_active = False
    row.modified_by_user_id = session.user_id
    db.commit()
