"""Service layer modules."""

# Import service modules (not individual functions) for cleaner access
from signorders.services import auth_service
from signorders.services import cc_email_service
from signorders.services import lookup_service
from signorders.services import notification_service
from signorders.services import order_events
from signorders.services import order_service
from signorders.services import reorder_service
from signorders.services import report_service
from signorders.services import sign_request_service

__all__ = [
    "auth_service",
    "cc_email_service",
    "lookup_service",
    "notification_service",
    "order_events",
    "order_service",
    "reorder_service",
    "report_service",
    "sign_request_service",
]
