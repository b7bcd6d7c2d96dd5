"""Orders router - API endpoints for sign orders."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from signorders.core.deps import get_current_session, get_db
from signorders.db.enums import InstallationType, OrderStatus
from signorders.schemas.auth import MessageResponse, UserSession
from signorders.schemas.base import as_utc
from signorders.schemas.order import (
    OrderCreate,
    OrderListResponse,
    OrderRead,
    OrderUpdate,
    PaginationInfo,
    ReorderEligibilityResponse,
)
from signorders.services import order_events, order_service
from signorders.services.order_filters import OrderFilter, SearchScope, build_order_conditions
from signorders.utils.pagination import PaginationParams, pagination_dependency, total_pages

router = APIRouter()

DEFAULT_ORDERS_LIMIT = 5


@router.get("", response_model=OrderListResponse)
def list_orders(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(pagination_dependency(DEFAULT_ORDERS_LIMIT)),
    office_id: UUID | None = Query(None, alias="officeId"),
    agent_id: UUID | None = Query(None, alias="agentId"),
    search: str | None = Query(None, description="Order id, address, contact or notes"),
    installation_type: InstallationType | None = Query(None, alias="installationType"),
    status: OrderStatus | None = None,
    date_from: datetime | None = Query(None, alias="dateFrom"),
    date_to: datetime | None = Query(None, alias="dateTo"),
):
    """
    List orders visible to the caller.

    Orders installed more than two years ago are never listed; AGENT and
    ADMIN_AGENT callers are pinned to their own orders / office.
    """
    filters = OrderFilter(
        office_id=office_id,
        agent_id=agent_id,
        search=search,
        installation_type=installation_type,
        status=status,
        date_from=as_utc(date_from),
        date_to=as_utc(date_to),
    )
    conditions = build_order_conditions(filters, session, scope=SearchScope.ORDERS)
    orders, total = order_service.list_orders(db, conditions, pagination)

    return OrderListResponse(
        orders=[order_service.to_order_list_item(o) for o in orders],
        pagination=PaginationInfo(
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            pages=total_pages(total, pagination.limit),
        ),
    )


@router.get("/eligible-for-reorder/{order_id}", response_model=ReorderEligibilityResponse)
def check_reorder_eligibility(
    order_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Whether a reorder may be placed against this order (status based)."""
    order = order_service.get_accessible_order(db, session, order_id)
    return ReorderEligibilityResponse(eligible=order_service.check_reorder_eligibility(order))


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return order_service.get_accessible_order(db, session, order_id)


@router.post("", response_model=OrderRead, status_code=201)
def create_order(
    data: OrderCreate,
    background_tasks: BackgroundTasks,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Create an order; a notification email goes out after the commit."""
    order = order_service.create_order(db, session, data)
    order_events.order_created(background_tasks, order.id)
    return order


@router.put("/{order_id}", response_model=OrderRead)
def update_order(
    order_id: UUID,
    data: OrderUpdate,
    background_tasks: BackgroundTasks,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    order = order_service.get_accessible_order(db, session, order_id)
    order = order_service.update_order(db, session, order, data)
    order_events.order_updated(background_tasks, order.id)
    return order


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(
    order_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    order = order_service.get_accessible_order(db, session, order_id)
    order_service.delete_order(db, session, order)
    return MessageResponse(message="Order deleted successfully")
