"""Tests for the order filter compiler (visibility window, role scoping, search)."""
from datetime import datetime, timedelta, timezone

import pytest

from signorders.core.errors import RequiredParameterMissing
from signorders.db.models import Order
from signorders.services.order_filters import (
    OrderFilter,
    SearchScope,
    apply_role_scope,
    build_order_conditions,
    require_office,
    search_clause,
    subtract_years,
    visibility_cutoff,
)

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


def _ids(db, conditions) -> set[str]:
    return {o.order_id for o in db.query(Order).filter(*conditions).all()}


# =============================================================================
# Date arithmetic
# =============================================================================

def test_subtract_years_keeps_calendar_date():
    assert subtract_years(NOW, 2) == datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_subtract_years_leap_day_falls_back_to_feb_28():
    leap = datetime(2024, 2, 29, 8, 30, tzinfo=timezone.utc)
    assert subtract_years(leap, 2) == datetime(2022, 2, 28, 8, 30, tzinfo=timezone.utc)


def test_visibility_cutoff_uses_configured_window():
    assert visibility_cutoff(NOW) == datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
    assert visibility_cutoff(NOW, years=1) == datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_require_office_raises_before_querying():
    with pytest.raises(RequiredParameterMissing) as exc:
        require_office(None)
    assert exc.value.code == "OFFICE_REQUIRED"
    assert exc.value.status_code == 400


# =============================================================================
# Visibility window
# =============================================================================

def test_two_year_boundary_is_inclusive(db, office, agent, sign_admin, make_order, session_of):
    cutoff = subtract_years(NOW, 2)
    make_order(office, agent, order_id="SO-ON-CUTOFF", installation_date=cutoff)
    make_order(office, agent, order_id="SO-BEFORE", installation_date=cutoff - timedelta(seconds=1))
    make_order(office, agent, order_id="SO-UNDATED", installation_date=None)
    make_order(office, agent, order_id="SO-RECENT", installation_date=NOW - timedelta(days=180))
    make_order(office, agent, order_id="SO-OLD", installation_date=subtract_years(NOW, 3))

    conditions = build_order_conditions(OrderFilter(), session_of(sign_admin), now=NOW)

    assert _ids(db, conditions) == {"SO-ON-CUTOFF", "SO-UNDATED", "SO-RECENT"}


def test_visibility_applies_even_with_explicit_filters(db, office, agent, sign_admin, make_order, session_of):
    make_order(office, agent, order_id="SO-OLD", installation_date=subtract_years(NOW, 3))

    conditions = build_order_conditions(
        OrderFilter(office_id=office.id, agent_id=agent.id),
        session_of(sign_admin),
        now=NOW,
    )

    assert _ids(db, conditions) == set()


# =============================================================================
# Role scoping
# =============================================================================

def test_agent_filter_is_forced_to_self(agent, other_agent, session_of):
    scoped = apply_role_scope(OrderFilter(agent_id=other_agent.id), session_of(agent))
    assert scoped.agent_id == agent.id


def test_admin_agent_office_is_forced(admin_agent, other_office, session_of):
    scoped = apply_role_scope(OrderFilter(office_id=other_office.id), session_of(admin_agent))
    assert scoped.office_id == admin_agent.office_id


def test_unrestricted_roles_keep_client_filters(sign_admin, it_admin, other_office, session_of):
    filters = OrderFilter(office_id=other_office.id)
    assert apply_role_scope(filters, session_of(sign_admin)) == filters
    assert apply_role_scope(filters, session_of(it_admin)) == filters


def test_agent_sees_only_own_orders(
    db, office, agent, other_agent, make_order, session_of
):
    make_order(office, agent, order_id="SO-MINE")
    make_order(office, other_agent, order_id="SO-THEIRS")

    conditions = build_order_conditions(
        OrderFilter(agent_id=other_agent.id), session_of(agent), now=NOW
    )

    assert _ids(db, conditions) == {"SO-MINE"}


def test_admin_agent_sees_only_own_office(
    db, office, agent, outside_agent, other_office, admin_agent, make_order, session_of
):
    make_order(office, agent, order_id="SO-HOME")
    make_order(other_office, outside_agent, order_id="SO-AWAY")

    conditions = build_order_conditions(OrderFilter(), session_of(admin_agent), now=NOW)

    assert _ids(db, conditions) == {"SO-HOME"}


# =============================================================================
# Search
# =============================================================================

def test_blank_search_adds_no_condition():
    assert search_clause(None, SearchScope.ORDERS) is None
    assert search_clause("   ", SearchScope.ORDERS) is None


def test_search_is_case_insensitive_and_anded(db, office, agent, sign_admin, make_order, session_of):
    make_order(office, agent, order_id="SO-1", city="Shelbyville")
    make_order(office, agent, order_id="SO-2", city="Springfield")
    make_order(
        office, agent, order_id="SO-3", city="Shelbyville",
        installation_date=subtract_years(NOW, 3),
    )

    conditions = build_order_conditions(
        OrderFilter(search="shelby"), session_of(sign_admin), now=NOW
    )

    assert _ids(db, conditions) == {"SO-1"}


def test_search_scope_controls_matched_columns(db, office, agent, sign_admin, make_order, session_of):
    make_order(office, agent, order_id="SO-1", contact_email="unique-contact@example.com")

    by_orders = build_order_conditions(
        OrderFilter(search="unique-contact"), session_of(sign_admin), now=NOW
    )
    by_grid = build_order_conditions(
        OrderFilter(search="unique-contact"),
        session_of(sign_admin),
        scope=SearchScope.SIGN_REQUESTS,
        now=NOW,
    )

    assert _ids(db, by_orders) == set()
    assert _ids(db, by_grid) == {"SO-1"}


def test_search_treats_like_wildcards_literally(db, office, agent, sign_admin, make_order, session_of):
    make_order(office, agent, order_id="SO-1", additional_info="gate code 100%")
    make_order(office, agent, order_id="SO-2", additional_info="gate code 1000")

    conditions = build_order_conditions(
        OrderFilter(search="100%"), session_of(sign_admin), now=NOW
    )

    assert _ids(db, conditions) == {"SO-1"}


def test_status_and_type_filters(db, office, agent, sign_admin, make_order, session_of):
    make_order(office, agent, order_id="SO-1", status="COMPLETED", installation_type="REMOVAL")
    make_order(office, agent, order_id="SO-2", status="COMPLETED", installation_type="REPAIR")
    make_order(office, agent, order_id="SO-3", status="PENDING", installation_type="REMOVAL")

    conditions = build_order_conditions(
        OrderFilter(status="COMPLETED", installation_type="REMOVAL"),
        session_of(sign_admin),
        now=NOW,
    )

    assert _ids(db, conditions) == {"SO-1"}
