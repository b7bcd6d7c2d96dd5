"""Lookup service - offices, agents, vendors and static dropdown lists."""

from uuid import UUID

from sqlalchemy.orm import Session

from signorders.core.errors import NotFoundError
from signorders.db.enums import PROPERTY_TYPES, InstallationType, Role
from signorders.db.models import Office, User, Vendor
from signorders.schemas.auth import UserSession
from signorders.schemas.lookup import OfficeCreate, OptionItem, VendorCreate, VendorUpdate
from signorders.utils.normalization import US_STATES


def list_offices(db: Session) -> list[Office]:
    return (
        db.query(Office)
        .filter(Office.is_active.is_(True))
        .order_by(Office.name)
        .all()
    )


def create_office(db: Session, data: OfficeCreate) -> Office:
    office = Office(**data.model_dump())
    db.add(office)
    db.commit()
    db.refresh(office)
    return office


def list_agents(db: Session, session: UserSession, office_id: UUID | None = None) -> list[User]:
    """Active users, scoped: AGENT sees only self, ADMIN_AGENT only their office."""
    query = db.query(User).filter(User.is_active.is_(True))

    if session.role == Role.AGENT:
        query = query.filter(User.id == session.user_id)
    elif session.role == Role.ADMIN_AGENT and session.office_id:
        query = query.filter(User.office_id == session.office_id)
    elif office_id:
        query = query.filter(User.office_id == office_id)

    return query.order_by(User.first_name, User.last_name).all()


def list_vendors(db: Session, zip_code: str | None = None) -> list[Vendor]:
    """Active vendors by name; with a zip code, only those servicing it."""
    vendors = (
        db.query(Vendor)
        .filter(Vendor.is_active.is_(True))
        .order_by(Vendor.name)
        .all()
    )
    if zip_code:
        zip_code = zip_code.strip()
        vendors = [v for v in vendors if zip_code in (v.service_areas or [])]
    return vendors


def create_vendor(db: Session, data: VendorCreate) -> Vendor:
    vendor = Vendor(**data.model_dump())
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    return vendor


def update_vendor(db: Session, vendor_id: UUID, data: VendorUpdate) -> Vendor:
    vendor = db.get(Vendor, vendor_id)
    if not vendor:
        raise NotFoundError("Vendor")
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "service_areas", "is_active"):
            continue
        setattr(vendor, field, value)
    db.commit()
    db.refresh(vendor)
    return vendor


def installation_type_options() -> list[OptionItem]:
    return [OptionItem(value=t.value, label=t.label) for t in InstallationType]


def property_type_options() -> list[OptionItem]:
    return [OptionItem(value=p, label=p) for p in PROPERTY_TYPES]


def state_options() -> list[OptionItem]:
    return [OptionItem(value=code, label=name) for code, name in US_STATES.items()]
