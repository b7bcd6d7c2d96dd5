"""CC emails router - per-office notification copy lists."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from signorders.core.deps import get_current_session, get_db
from signorders.schemas.auth import MessageResponse, UserSession
from signorders.schemas.cc_email import (
    CCEmailCreate,
    CCEmailListResponse,
    CCEmailRead,
    CCEmailUpdate,
)
from signorders.schemas.order import PaginationInfo
from signorders.services import cc_email_service
from signorders.utils.pagination import PaginationParams, pagination_dependency, total_pages

router = APIRouter()


@router.get("", response_model=CCEmailListResponse)
def list_cc_emails(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(
        pagination_dependency(cc_email_service.DEFAULT_CC_EMAIL_LIMIT)
    ),
    office_id: UUID | None = Query(None, alias="officeId"),
    agent_id: UUID | None = Query(None, alias="agentId"),
    search: str | None = None,
):
    rows, total = cc_email_service.list_cc_emails(
        db,
        session,
        office_id=office_id,
        agent_id=agent_id,
        search=search,
        pagination=pagination,
    )
    return CCEmailListResponse(
        cc_emails=[CCEmailRead.model_validate(r) for r in rows],
        pagination=PaginationInfo(
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            pages=total_pages(total, pagination.limit),
        ),
    )


@router.get("/{cc_email_id}", response_model=CCEmailRead)
def get_cc_email(
    cc_email_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return cc_email_service.get_cc_email(db, session, cc_email_id)


@router.post("", response_model=CCEmailRead, status_code=201)
def create_cc_email(
    data: CCEmailCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """409 DUPLICATE_CC_EMAIL when the same active email/office/agent exists."""
    return cc_email_service.create_cc_email(db, session, data)


@router.put("/{cc_email_id}", response_model=CCEmailRead)
def update_cc_email(
    cc_email_id: UUID,
    data: CCEmailUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return cc_email_service.update_cc_email(db, session, cc_email_id, data)


@router.delete("/{cc_email_id}", response_model=MessageResponse)
def delete_cc_email(
    cc_email_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    cc_email_service.delete_cc_email(db, session, cc_email_id)
    return MessageResponse(message="CC email deleted successfully")
