"""API routers."""

from signorders.routers.auth import router as auth_router
from signorders.routers.cc_emails import router as cc_emails_router
from signorders.routers.lookups import router as lookups_router
from signorders.routers.orders import router as orders_router
from signorders.routers.reorders import router as reorders_router
from signorders.routers.reports import router as reports_router
from signorders.routers.sign_requests import router as sign_requests_router

__all__ = [
    "auth_router",
    "cc_emails_router",
    "lookups_router",
    "orders_router",
    "reorders_router",
    "reports_router",
    "sign_requests_router",
]
