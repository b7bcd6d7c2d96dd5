"""Sign-requests router - office-scoped order grid and statistics."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from signorders.core.deps import get_current_session, get_db
from signorders.schemas.auth import UserSession
from signorders.schemas.sign_request import SignRequestListResponse, SignRequestStats
from signorders.services import sign_request_service
from signorders.utils.pagination import PaginationParams, pagination_dependency, total_pages

router = APIRouter()

DEFAULT_SIGN_REQUESTS_LIMIT = 5


@router.get("", response_model=SignRequestListResponse)
def list_sign_requests(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    pagination: PaginationParams = Depends(pagination_dependency(DEFAULT_SIGN_REQUESTS_LIMIT)),
    office_id: UUID | None = Query(None, alias="officeId", description="Required"),
    agent_id: UUID | None = Query(None, alias="agentId"),
    search: str | None = None,
):
    """
    Grid rows for one office.

    Responds 400 OFFICE_REQUIRED when officeId is missing.
    """
    orders, total = sign_request_service.list_sign_requests(
        db,
        session,
        office_id=office_id,
        agent_id=agent_id,
        search=search,
        pagination=pagination,
    )
    return SignRequestListResponse(
        orders=[sign_request_service.to_sign_request_item(o) for o in orders],
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        total_pages=total_pages(total, pagination.limit),
    )


@router.get("/stats", response_model=SignRequestStats)
def sign_request_stats(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    office_id: UUID | None = Query(None, alias="officeId", description="Required"),
    agent_id: UUID | None = Query(None, alias="agentId"),
):
    return sign_request_service.get_sign_request_stats(
        db, session, office_id=office_id, agent_id=agent_id
    )
