"""Reorders router."""

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from signorders.core.deps import get_current_session, get_db
from signorders.schemas.auth import MessageResponse, UserSession
from signorders.schemas.reorder import ReorderCreate, ReorderRead, ReorderUpdate
from signorders.services import order_events, reorder_service

router = APIRouter()


@router.get("/order/{order_id}", response_model=list[ReorderRead])
def list_reorders_for_order(
    order_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    reorders = reorder_service.list_reorders_for_order(db, session, order_id)
    return [reorder_service.to_reorder_read(r) for r in reorders]


@router.post("", response_model=ReorderRead, status_code=201)
def create_reorder(
    data: ReorderCreate,
    background_tasks: BackgroundTasks,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Create a reorder. 400 NOT_ELIGIBLE_FOR_REORDER when the original is not eligible."""
    reorder = reorder_service.create_reorder(db, session, data)
    order_events.reorder_created(background_tasks, reorder.id)
    return reorder_service.to_reorder_read(reorder)


@router.put("/{reorder_id}", response_model=ReorderRead)
def update_reorder(
    reorder_id: UUID,
    data: ReorderUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    reorder = reorder_service.update_reorder(db, session, reorder_id, data)
    return reorder_service.to_reorder_read(reorder)


@router.delete("/{reorder_id}", response_model=MessageResponse)
def delete_reorder(
    reorder_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    reorder_service.delete_reorder(db, session, reorder_id)
    return MessageResponse(message="Reorder deleted successfully")
