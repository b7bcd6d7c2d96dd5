"""Reorder service - follow-up orders against eligible originals."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from signorders.core.errors import IneligibleForReorder, NotFoundError
from signorders.db.models import Order, Reorder, User
from signorders.schemas.auth import UserSession
from signorders.schemas.order import PersonRef
from signorders.schemas.reorder import ReorderCreate, ReorderRead, ReorderUpdate
from signorders.services import order_service
from signorders.services.reorder_eligibility import is_eligible_for_reorder

logger = logging.getLogger(__name__)

REORDER_ID_PREFIX = "RO"


def to_reorder_read(reorder: Reorder) -> ReorderRead:
    agent = reorder.listing_agent
    return ReorderRead(
        id=reorder.id,
        reorder_id=reorder.reorder_id,
        original_order_id=reorder.original_order_id,
        original_order_number=reorder.original_order.order_id if reorder.original_order else None,
        installation_type=reorder.installation_type,
        zip_code=reorder.zip_code,
        additional_info=reorder.additional_info,
        listing_agent_id=reorder.listing_agent_id,
        listing_agent=PersonRef.model_validate(agent) if agent else None,
        status=reorder.status,
        created_at=reorder.created_at,
        updated_at=reorder.updated_at,
    )


def _load(db: Session, reorder_id: UUID) -> Reorder | None:
    return (
        db.query(Reorder)
        .options(selectinload(Reorder.listing_agent), selectinload(Reorder.original_order))
        .filter(Reorder.id == reorder_id)
        .first()
    )


def list_reorders_for_order(db: Session, session: UserSession, order_id: UUID) -> list[Reorder]:
    """Reorders of one order, newest first."""
    order_service.get_accessible_order(db, session, order_id)
    return (
        db.query(Reorder)
        .options(selectinload(Reorder.listing_agent), selectinload(Reorder.original_order))
        .filter(Reorder.original_order_id == order_id)
        .order_by(Reorder.created_at.desc(), Reorder.id)
        .all()
    )


def create_reorder(db: Session, session: UserSession, data: ReorderCreate) -> Reorder:
    """
    Create a reorder.

    Check order: original exists (404), caller may act on it (403),
    original is eligible (400), listing agent exists (404). Nothing is
    written unless every check passes.
    """
    original = db.get(Order, data.original_order_id)
    if not original:
        raise NotFoundError("Original order")

    order_service.ensure_order_access(session, original)

    if not is_eligible_for_reorder(original.status, original.installation_type):
        raise IneligibleForReorder(original.order_id)

    if db.get(User, data.listing_agent_id) is None:
        raise NotFoundError("Listing agent", data.listing_agent_id)

    reorder = Reorder(
        reorder_id=order_service.generate_identifier(db, Reorder.reorder_id, REORDER_ID_PREFIX),
        original_order_id=original.id,
        installation_type=data.installation_type.value,
        zip_code=data.zip_code,
        additional_info=data.additional_info,
        listing_agent_id=data.listing_agent_id,
    )
    db.add(reorder)
    db.commit()

    logger.info(
        "Reorder created",
        extra={"reorder_id": reorder.reorder_id, "original_order_id": original.order_id},
    )
    return _load(db, reorder.id)


def get_accessible_reorder(db: Session, session: UserSession, reorder_id: UUID) -> Reorder:
    reorder = _load(db, reorder_id)
    if not reorder:
        raise NotFoundError("Reorder")
    order_service.ensure_order_access(session, reorder.original_order)
    return reorder


def update_reorder(db: Session, session: UserSession, reorder_id: UUID, data: ReorderUpdate) -> Reorder:
    reorder = get_accessible_reorder(db, session, reorder_id)

    updates = data.model_dump(exclude_unset=True)
    if updates.get("listing_agent_id") and db.get(User, updates["listing_agent_id"]) is None:
        raise NotFoundError("Listing agent", updates["listing_agent_id"])

    for field, value in updates.items():
        if value is None and field != "additional_info":
            continue
        if field in ("installation_type", "status"):
            value = value.value
        setattr(reorder, field, value)

    db.commit()
    return _load(db, reorder.id)


def delete_reorder(db: Session, session: UserSession, reorder_id: UUID) -> None:
    reorder = get_accessible_reorder(db, session, reorder_id)
    db.delete(reorder)
    db.commit()
