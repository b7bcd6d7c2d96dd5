"""Order service - business logic for sign orders."""

import logging
import time
from uuid import UUID

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session, selectinload

from signorders.core.deps import can_access_order, can_hard_delete
from signorders.core.errors import AuthorizationError, NotFoundError
from signorders.db.enums import Role
from signorders.db.models import Office, Order, User, Vendor
from signorders.schemas.auth import UserSession
from signorders.schemas.order import OrderCreate, OrderListItem, OrderUpdate
from signorders.services.reorder_eligibility import is_eligible_for_reorder
from signorders.utils.pagination import PaginationParams

logger = logging.getLogger(__name__)

ORDER_ID_PREFIX = "SO"

REQUIRED_ORDER_FIELDS = {
    "office_id",
    "agent_id",
    "installation_type",
    "property_type",
    "street_address",
    "city",
    "state",
    "zip_code",
    "underwater_sprinkler",
    "invisible_dog_fence",
    "status",
}


def generate_identifier(db: Session, column, prefix: str) -> str:
    """
    Human-readable id of the form PREFIX-<epoch millis>.

    Bumps the millisecond value until it is unused so two inserts in the
    same millisecond still get distinct ids.
    """
    stamp = int(time.time() * 1000)
    while True:
        candidate = f"{prefix}-{stamp}"
        if db.query(column).filter(column == candidate).first() is None:
            return candidate
        stamp += 1


def format_address(street: str | None, city: str | None, state: str | None, zip_code: str | None) -> str:
    """'street, city, state zip' with missing parts as empty strings, trimmed."""
    return f"{street or ''}, {city or ''}, {state or ''} {zip_code or ''}".strip()


def _eager_options():
    return (
        selectinload(Order.office),
        selectinload(Order.agent),
        selectinload(Order.vendor),
        selectinload(Order.reorders),
    )


# =============================================================================
# Listing
# =============================================================================

def list_orders(
    db: Session,
    conditions: list,
    pagination: PaginationParams,
) -> tuple[list[Order], int]:
    """
    Fetch one page of orders matching the compiled conditions.

    Returns:
        (orders, total_count) - total is a distinct count independent of paging
    """
    total = (
        db.query(func.count(distinct(Order.id)))
        .filter(*conditions)
        .scalar()
    ) or 0

    orders = (
        db.query(Order)
        .options(*_eager_options())
        .filter(*conditions)
        .order_by(Order.created_at.desc(), Order.id)
        .offset(pagination.offset)
        .limit(pagination.limit)
        .all()
    )
    return orders, total


def to_order_list_item(order: Order) -> OrderListItem:
    """Convert Order model to the GET /orders row."""
    return OrderListItem(
        id=order.id,
        order_id=order.order_id,
        office_id=order.office_id,
        agent_id=order.agent_id,
        installation_type=order.installation_type,
        property_type=order.property_type,
        address=format_address(order.street_address, order.city, order.state, order.zip_code),
        city=order.city,
        state=order.state,
        zip_code=order.zip_code,
        contact_name=order.contact_name,
        contact_phone=order.contact_phone,
        installation_date=order.installation_date,
        completion_date=order.completion_date,
        status=order.status,
        created_at=order.created_at,
        office_name=order.office.name if order.office else None,
        agent_name=order.agent.full_name if order.agent else None,
        vendor_name=order.vendor.name if order.vendor else None,
        reorder_count=len(order.reorders),
        can_order=is_eligible_for_reorder(order.status, order.installation_type),
    )


# =============================================================================
# CRUD
# =============================================================================

def get_order(db: Session, order_id: UUID) -> Order | None:
    return (
        db.query(Order)
        .options(*_eager_options())
        .filter(Order.id == order_id)
        .first()
    )


def get_accessible_order(db: Session, session: UserSession, order_id: UUID) -> Order:
    """Load an order or raise NotFound / AccessDenied for the caller."""
    order = get_order(db, order_id)
    if not order:
        raise NotFoundError("Order")
    ensure_order_access(session, order)
    return order


def ensure_order_access(session: UserSession, order: Order) -> None:
    if not can_access_order(session, order.office_id, order.agent_id):
        raise AuthorizationError()


def _ensure_can_place(session: UserSession, office_id: UUID, agent_id: UUID) -> None:
    """AGENT orders only for themselves; ADMIN_AGENT only inside their office."""
    if session.role == Role.AGENT and agent_id != session.user_id:
        raise AuthorizationError("Agents can only create orders for themselves")
    if (
        session.role == Role.ADMIN_AGENT
        and session.office_id
        and office_id != session.office_id
    ):
        raise AuthorizationError("Admin agents can only create orders for their office")


def find_vendor_for_zip(db: Session, zip_code: str) -> Vendor | None:
    """First active vendor (by name) whose service areas include the zip code."""
    base_zip = zip_code[:5]
    vendors = (
        db.query(Vendor)
        .filter(Vendor.is_active.is_(True))
        .order_by(Vendor.name, Vendor.id)
        .all()
    )
    for vendor in vendors:
        areas = vendor.service_areas or []
        if zip_code in areas or base_zip in areas:
            return vendor
    return None


def _require(db: Session, model, pk: UUID | None, label: str):
    if pk is None:
        return None
    row = db.get(model, pk)
    if row is None:
        raise NotFoundError(label, pk)
    return row


def create_order(db: Session, session: UserSession, data: OrderCreate) -> Order:
    """Create a new order, auto-assigning a vendor by zip code when none is given."""
    _ensure_can_place(session, data.office_id, data.agent_id)
    _require(db, Office, data.office_id, "Office")
    _require(db, User, data.agent_id, "Agent")

    vendor_id = data.vendor_id
    if vendor_id:
        _require(db, Vendor, vendor_id, "Vendor")
    else:
        vendor = find_vendor_for_zip(db, data.zip_code)
        vendor_id = vendor.id if vendor else None

    values = data.model_dump(exclude={"vendor_id", "installation_type", "status"})
    order = Order(
        **values,
        order_id=generate_identifier(db, Order.order_id, ORDER_ID_PREFIX),
        installation_type=data.installation_type.value,
        status=data.status.value,
        vendor_id=vendor_id,
    )
    db.add(order)
    db.commit()

    logger.info(
        "Order created",
        extra={"order_id": order.order_id, "office_id": str(order.office_id)},
    )
    return get_order(db, order.id)


def update_order(db: Session, session: UserSession, order: Order, data: OrderUpdate) -> Order:
    """Partial update. order_id is never touched."""
    ensure_order_access(session, order)

    updates = data.model_dump(exclude_unset=True)
    new_office = updates.get("office_id") or order.office_id
    new_agent = updates.get("agent_id") or order.agent_id
    if "office_id" in updates or "agent_id" in updates:
        _ensure_can_place(session, new_office, new_agent)
        _require(db, Office, updates.get("office_id"), "Office")
        _require(db, User, updates.get("agent_id"), "Agent")
    if updates.get("vendor_id"):
        _require(db, Vendor, updates["vendor_id"], "Vendor")

    for field, value in updates.items():
        # Explicit nulls never clear a required column
        if value is None and field in REQUIRED_ORDER_FIELDS:
            continue
        if field in ("installation_type", "status"):
            value = value.value
        setattr(order, field, value)

    db.commit()
    return get_order(db, order.id)


def delete_order(db: Session, session: UserSession, order: Order) -> None:
    """Physically delete an order (admins only); reorders cascade."""
    if not can_hard_delete(session):
        raise AuthorizationError("Only administrators can delete orders")
    db.delete(order)
    db.commit()
    logger.info("Order deleted", extra={"order_id": order.order_id})


def check_reorder_eligibility(order: Order) -> bool:
    return is_eligible_for_reorder(order.status, order.installation_type)
