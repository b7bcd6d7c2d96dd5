"""Tests for the two reorder eligibility rules."""
from datetime import datetime, timezone

import pytest

from signorders.db.enums import InstallationType, OrderStatus
from signorders.services.reorder_eligibility import can_order, is_eligible_for_reorder


@pytest.mark.parametrize(
    "status, installation_type, expected",
    [
        (OrderStatus.COMPLETED, InstallationType.INSTALLATION, True),
        (OrderStatus.PENDING, InstallationType.REMOVAL, True),
        (OrderStatus.CANCELLED, InstallationType.REMOVAL, True),
        (OrderStatus.PENDING, InstallationType.INSTALLATION, False),
        (OrderStatus.IN_PROGRESS, InstallationType.REPAIR, False),
        ("COMPLETED", "REPAIR", True),
        ("PENDING", "REPAIR", False),
    ],
)
def test_status_rule(status, installation_type, expected):
    assert is_eligible_for_reorder(status, installation_type) is expected


def test_completion_date_rule():
    done = datetime(2026, 1, 5, tzinfo=timezone.utc)
    assert can_order(done, "INSTALLATION") is True
    assert can_order(None, "REMOVAL") is True
    assert can_order(None, "INSTALLATION") is False


def test_rules_diverge_for_completed_without_date():
    """A COMPLETED order with no completion date passes one rule and not the other."""
    assert is_eligible_for_reorder("COMPLETED", "INSTALLATION") is True
    assert can_order(None, "INSTALLATION") is False
