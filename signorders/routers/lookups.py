"""Lookups router - reference data for dropdowns."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from signorders.core.deps import get_current_session, get_db, require_roles
from signorders.db.enums import ROLES_CAN_MANAGE_LOOKUPS
from signorders.schemas.auth import UserSession
from signorders.schemas.lookup import (
    AgentRead,
    OfficeCreate,
    OfficeRead,
    OptionItem,
    VendorCreate,
    VendorRead,
    VendorUpdate,
)
from signorders.services import lookup_service

router = APIRouter()


@router.get("/offices", response_model=list[OfficeRead])
def list_offices(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    return lookup_service.list_offices(db)


@router.post(
    "/offices",
    response_model=OfficeRead,
    status_code=201,
    dependencies=[Depends(require_roles(ROLES_CAN_MANAGE_LOOKUPS))],
)
def create_office(data: OfficeCreate, db: Session = Depends(get_db)):
    return lookup_service.create_office(db, data)


@router.get("/agents", response_model=list[AgentRead])
def list_agents(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    office_id: UUID | None = Query(None, alias="officeId"),
):
    return lookup_service.list_agents(db, session, office_id)


@router.get("/vendors", response_model=list[VendorRead])
def list_vendors(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    zip_code: str | None = Query(None, alias="zipCode"),
):
    return lookup_service.list_vendors(db, zip_code)


@router.post(
    "/vendors",
    response_model=VendorRead,
    status_code=201,
    dependencies=[Depends(require_roles(ROLES_CAN_MANAGE_LOOKUPS))],
)
def create_vendor(data: VendorCreate, db: Session = Depends(get_db)):
    return lookup_service.create_vendor(db, data)


@router.put(
    "/vendors/{vendor_id}",
    response_model=VendorRead,
    dependencies=[Depends(require_roles(ROLES_CAN_MANAGE_LOOKUPS))],
)
def update_vendor(vendor_id: UUID, data: VendorUpdate, db: Session = Depends(get_db)):
    return lookup_service.update_vendor(db, vendor_id, data)


@router.get("/installation-types", response_model=list[OptionItem])
def installation_types(session: UserSession = Depends(get_current_session)):
    return lookup_service.installation_type_options()


@router.get("/property-types", response_model=list[OptionItem])
def property_types(session: UserSession = Depends(get_current_session)):
    return lookup_service.property_type_options()


@router.get("/states", response_model=list[OptionItem])
def states(session: UserSession = Depends(get_current_session)):
    return lookup_service.state_options()
