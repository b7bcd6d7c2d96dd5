"""
Order filter compiler.

Turns an OrderFilter plus the caller's UserSession into a list of
SQLAlchemy conditions over Order, all ANDed by the caller:

- two-year visibility rule on installation_date (always applied)
- role scoping (AGENT -> own orders, ADMIN_AGENT -> own office)
- explicit equality filters and an optional created_at range
- free-text search as a single OR group over a per-endpoint field set
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import ColumnElement, or_

from signorders.core.config import settings
from signorders.core.errors import RequiredParameterMissing
from signorders.db.enums import Role, ROLES_UNRESTRICTED
from signorders.db.models import Order
from signorders.schemas.auth import UserSession
from signorders.utils.normalization import escape_like


class SearchScope(str, enum.Enum):
    """Which columns a free-text search term is matched against."""
    ORDERS = "orders"
    SIGN_REQUESTS = "sign_requests"


SEARCH_FIELDS = {
    SearchScope.ORDERS: (
        Order.order_id,
        Order.street_address,
        Order.city,
        Order.state,
        Order.zip_code,
        Order.contact_name,
        Order.contact_phone,
        Order.additional_info,
    ),
    SearchScope.SIGN_REQUESTS: (
        Order.order_id,
        Order.street_address,
        Order.city,
        Order.state,
        Order.zip_code,
        Order.contact_name,
        Order.contact_email,
        Order.installation_type,
        Order.property_type,
        Order.status,
    ),
}


@dataclass(frozen=True)
class OrderFilter:
    """Client-supplied list criteria (all optional)."""
    office_id: UUID | None = None
    agent_id: UUID | None = None
    search: str | None = None
    installation_type: str | None = None
    status: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None


def require_office(office_id: UUID | None) -> UUID:
    """Sign-request endpoints refuse to run without an office."""
    if office_id is None:
        raise RequiredParameterMissing("Office ID is required", code="OFFICE_REQUIRED")
    return office_id


def subtract_years(moment: datetime, years: int) -> datetime:
    """Same calendar date `years` earlier; Feb 29 falls back to Feb 28."""
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        return moment.replace(year=moment.year - years, day=28)


def visibility_cutoff(now: datetime | None = None, years: int | None = None) -> datetime:
    """Earliest installation_date still visible in listings."""
    now = now or datetime.now(timezone.utc)
    if years is None:
        years = settings.VISIBILITY_WINDOW_YEARS
    return subtract_years(now, years)


def visibility_clause(now: datetime | None = None) -> ColumnElement[bool]:
    """Rows without an installation date are always visible."""
    cutoff = visibility_cutoff(now)
    return or_(Order.installation_date.is_(None), Order.installation_date >= cutoff)


def apply_role_scope(filters: OrderFilter, session: UserSession) -> OrderFilter:
    """
    Force the caller's own agent/office onto the filter.

    A forced value silently replaces whatever the client asked for.
    """
    if session.role in ROLES_UNRESTRICTED:
        return filters
    if session.role == Role.AGENT:
        return replace(filters, agent_id=session.user_id)
    if session.role == Role.ADMIN_AGENT and session.office_id:
        return replace(filters, office_id=session.office_id)
    return filters


def search_clause(term: str | None, scope: SearchScope) -> ColumnElement[bool] | None:
    """Case-insensitive substring match over the scope's fields; None for blank input."""
    if not term or not term.strip():
        return None
    pattern = f"%{escape_like(term.strip())}%"
    return or_(*(column.ilike(pattern, escape="\\") for column in SEARCH_FIELDS[scope]))


def build_order_conditions(
    filters: OrderFilter,
    session: UserSession,
    *,
    scope: SearchScope = SearchScope.ORDERS,
    now: datetime | None = None,
) -> list[ColumnElement[bool]]:
    """Compile filters + session into AND-able conditions over Order."""
    scoped = apply_role_scope(filters, session)

    conditions: list[ColumnElement[bool]] = [visibility_clause(now)]

    if scoped.office_id:
        conditions.append(Order.office_id == scoped.office_id)
    if scoped.agent_id:
        conditions.append(Order.agent_id == scoped.agent_id)
    if scoped.installation_type:
        conditions.append(Order.installation_type == _enum_value(scoped.installation_type))
    if scoped.status:
        conditions.append(Order.status == _enum_value(scoped.status))
    if scoped.date_from:
        conditions.append(Order.created_at >= scoped.date_from)
    if scoped.date_to:
        conditions.append(Order.created_at <= scoped.date_to)

    search = search_clause(scoped.search, scope)
    if search is not None:
        conditions.append(search)

    return conditions


def _enum_value(value) -> str:
    return value.value if isinstance(value, enum.Enum) else str(value)
