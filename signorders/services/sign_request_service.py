"""Sign-requests grid: office-scoped order listing and statistics."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import case, distinct, func
from sqlalchemy.orm import Session

from signorders.db.models import Order
from signorders.schemas.auth import UserSession
from signorders.schemas.sign_request import SignRequestItem, SignRequestStats, StatsBreakdownEntry
from signorders.services import order_service
from signorders.services.order_filters import (
    OrderFilter,
    SearchScope,
    build_order_conditions,
    require_office,
)
from signorders.services.reorder_eligibility import can_order, eligible_for_ordering_clause
from signorders.utils.pagination import PaginationParams


def list_sign_requests(
    db: Session,
    session: UserSession,
    *,
    office_id: UUID | None,
    agent_id: UUID | None = None,
    search: str | None = None,
    pagination: PaginationParams,
    now: datetime | None = None,
) -> tuple[list[Order], int]:
    """
    One page of the grid for a single office.

    Raises:
        RequiredParameterMissing: office_id absent (before any query runs)
    """
    office_id = require_office(office_id)
    conditions = build_order_conditions(
        OrderFilter(office_id=office_id, agent_id=agent_id, search=search),
        session,
        scope=SearchScope.SIGN_REQUESTS,
        now=now,
    )
    return order_service.list_orders(db, conditions, pagination)


def to_sign_request_item(order: Order) -> SignRequestItem:
    """Convert Order model to a grid row; canOrder uses the completion-date rule."""
    return SignRequestItem(
        id=order.id,
        order_id=order.order_id,
        address=order_service.format_address(
            order.street_address, order.city, order.state, order.zip_code
        ),
        installation_type=order.installation_type,
        property_type=order.property_type,
        status=order.status,
        contact_name=order.contact_name,
        contact_email=order.contact_email,
        agent_id=order.agent_id,
        agent_name=order.agent.full_name if order.agent else None,
        office_id=order.office_id,
        office_name=order.office.name if order.office else None,
        vendor_name=order.vendor.name if order.vendor else None,
        installation_date=order.installation_date,
        completion_date=order.completion_date,
        created_at=order.created_at,
        can_order=can_order(order.completion_date, order.installation_type),
    )


def get_sign_request_stats(
    db: Session,
    session: UserSession,
    *,
    office_id: UUID | None,
    agent_id: UUID | None = None,
    now: datetime | None = None,
) -> SignRequestStats:
    """
    Totals for the grid's filter set (no pagination).

    breakdown comes from a single GROUP BY installation_type, status.
    """
    office_id = require_office(office_id)
    conditions = build_order_conditions(
        OrderFilter(office_id=office_id, agent_id=agent_id),
        session,
        scope=SearchScope.SIGN_REQUESTS,
        now=now,
    )

    total, eligible = (
        db.query(
            func.count(distinct(Order.id)),
            func.count(distinct(case((eligible_for_ordering_clause(), Order.id)))),
        )
        .filter(*conditions)
        .one()
    )

    rows = (
        db.query(Order.installation_type, Order.status, func.count(distinct(Order.id)))
        .filter(*conditions)
        .group_by(Order.installation_type, Order.status)
        .order_by(Order.installation_type, Order.status)
        .all()
    )

    return SignRequestStats(
        total_orders=total or 0,
        eligible_for_ordering=eligible or 0,
        breakdown=[
            StatsBreakdownEntry(installation_type=t, status=s, count=c)
            for t, s, c in rows
        ],
    )
