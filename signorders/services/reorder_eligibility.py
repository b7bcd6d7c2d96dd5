"""
Reorder eligibility rules.

Two forms are in use:

- is_eligible_for_reorder: status based. Gates reorder creation and the
  eligibility-check endpoint.
- can_order / eligible_for_ordering_clause: completion-date based. Drives
  the sign-requests grid flag and the stats count.

They are not equivalent (an order can be COMPLETED with no completion date).
"""

from datetime import datetime

from sqlalchemy import ColumnElement, or_

from signorders.db.enums import InstallationType, OrderStatus
from signorders.db.models import Order


def _value(v) -> str | None:
    return getattr(v, "value", v)


def is_eligible_for_reorder(status, installation_type) -> bool:
    return (
        _value(status) == OrderStatus.COMPLETED.value
        or _value(installation_type) == InstallationType.REMOVAL.value
    )


def can_order(completion_date: datetime | None, installation_type) -> bool:
    return (
        completion_date is not None
        or _value(installation_type) == InstallationType.REMOVAL.value
    )


def eligible_for_ordering_clause() -> ColumnElement[bool]:
    """SQL form of can_order, for aggregate counts."""
    return or_(
        Order.completion_date.is_not(None),
        Order.installation_type == InstallationType.REMOVAL.value,
    )
