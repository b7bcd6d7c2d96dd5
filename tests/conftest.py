"""
Test configuration and fixtures.

Provides:
- In-memory SQLite schema, rebuilt for every test
- Users for each role and bearer tokens for them
- Order / vendor / CC email factories
- HTTPX AsyncClient bound to the app with get_db overridden
"""
import os
import uuid
from typing import AsyncGenerator, Generator

# Must be set before signorders.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TESTING"] = "1"
os.environ["RESEND_API_KEY"] = ""
os.environ["EMAIL_FROM"] = ""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.orm import Session

from signorders.main import app
from signorders.core.config import settings
from signorders.core.deps import get_db
from signorders.core.security import create_session_token
from signorders.db.base import Base
from signorders.db.enums import InstallationType, OrderStatus, Role
from signorders.db.models import CCEmail, Office, Order, User, Vendor
from signorders.db.session import engine, SessionLocal
from signorders.schemas.auth import UserSession


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def schema() -> Generator[None, None, None]:
    """Fresh tables per test; background tasks share the same in-memory engine."""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def report_dir(tmp_path, monkeypatch):
    path = tmp_path / "reports"
    monkeypatch.setattr(settings, "REPORT_STORAGE_PATH", str(path))
    return path


@pytest.fixture(scope="function")
def db(schema) -> Generator[Session, None, None]:
    session = SessionLocal()
    yield session
    session.close()


# =============================================================================
# Offices and Users
# =============================================================================

def _office(db: Session, name: str) -> Office:
    office = Office(
        name=name,
        address="1 Main St",
        email=f"{name.lower().replace(' ', '-')}@offices.test",
        manager_email=f"manager-{name.lower().replace(' ', '-')}@offices.test",
    )
    db.add(office)
    db.commit()
    return office


@pytest.fixture
def office(db: Session) -> Office:
    return _office(db, "Office A")


@pytest.fixture
def other_office(db: Session) -> Office:
    return _office(db, "Office B")


@pytest.fixture
def make_user(db: Session):
    """Factory: make_user(role, office, **fields) -> committed User."""
    def _make(role: Role = Role.AGENT, office: Office | None = None, **fields) -> User:
        suffix = uuid.uuid4().hex[:8]
        values = {
            "email": f"{role.value.lower()}-{suffix}@test.com",
            # Not a valid bcrypt hash; password login always fails for these users
            "password_hash": "!",
            "first_name": role.value.title().replace("_", " "),
            "last_name": suffix,
            "role": role.value,
            "office_id": office.id if office else None,
        }
        values.update(fields)
        user = User(**values)
        db.add(user)
        db.commit()
        return user
    return _make


@pytest.fixture
def it_admin(make_user) -> User:
    return make_user(Role.IT_ADMIN)


@pytest.fixture
def sign_admin(make_user) -> User:
    return make_user(Role.SIGN_ADMIN)


@pytest.fixture
def admin_agent(make_user, office) -> User:
    return make_user(Role.ADMIN_AGENT, office)


@pytest.fixture
def agent(make_user, office) -> User:
    return make_user(Role.AGENT, office)


@pytest.fixture
def other_agent(make_user, office) -> User:
    return make_user(Role.AGENT, office)


@pytest.fixture
def outside_agent(make_user, other_office) -> User:
    return make_user(Role.AGENT, other_office)


def session_for(user: User) -> UserSession:
    """UserSession as the auth dependency would build it."""
    return UserSession(
        user_id=user.id,
        office_id=user.office_id,
        role=Role(user.role),
        email=user.email,
        display_name=user.full_name,
    )


def auth_headers(user: User) -> dict[str, str]:
    token = create_session_token(
        user_id=user.id,
        office_id=user.office_id,
        role=user.role,
        token_version=user.token_version,
    )
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Domain Factories
# =============================================================================

@pytest.fixture
def make_order(db: Session):
    """Factory: make_order(office, agent, **fields) -> committed Order."""
    def _make(office: Office, agent: User, **fields) -> Order:
        values = {
            "order_id": f"SO-{uuid.uuid4().int % 10**13}",
            "office_id": office.id,
            "agent_id": agent.id,
            "installation_type": InstallationType.INSTALLATION.value,
            "property_type": "Residential",
            "street_address": "12 Oak Lane",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62704",
            "contact_name": "Pat Seller",
            "contact_email": "pat@example.com",
            "status": OrderStatus.PENDING.value,
        }
        values.update(fields)
        order = Order(**values)
        db.add(order)
        db.commit()
        return order
    return _make


@pytest.fixture
def make_vendor(db: Session):
    def _make(name: str = "Acme Signs", service_areas: list[str] | None = None, **fields) -> Vendor:
        vendor = Vendor(
            name=name,
            email=f"{name.lower().replace(' ', '-')}@vendors.test",
            service_areas=service_areas or [],
            **fields,
        )
        db.add(vendor)
        db.commit()
        return vendor
    return _make


@pytest.fixture
def make_cc_email(db: Session):
    def _make(office: Office, entered_by: User, email: str = "cc@example.com", agent: User | None = None) -> CCEmail:
        row = CCEmail(
            email=email,
            office_id=office.id,
            agent_id=agent.id if agent else None,
            entered_by_user_id=entered_by.id,
        )
        db.add(row)
        db.commit()
        return row
    return _make


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient for the app; pass auth_headers(user) per request.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def admin_client(db: Session, sign_admin: User) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient authenticated as a SIGN_ADMIN."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers(sign_admin),
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def headers_for():
    """headers_for(user) -> Authorization header dict."""
    return auth_headers


@pytest.fixture
def session_of():
    """session_of(user) -> UserSession."""
    return session_for
