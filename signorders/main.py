"""FastAPI application entry point."""
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from signorders.core.config import settings
from signorders.core.errors import DomainError
from signorders.core.structured_logging import build_log_context, configure_logging
from signorders.db.session import engine

configure_logging()
logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
    logger.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from signorders.core.rate_limit import limiter


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Sign Order API",
    description="Sign installation, removal and repair orders for real-estate offices",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    expose_headers=["X-Request-ID", "Content-Disposition"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Tag each request with X-Request-ID and log one line when it finishes."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
        extra=build_log_context(
            request_id=request_id,
            route=request.url.path,
            method=request.method,
        ),
    )
    return response


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "error": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"message": "Validation failed", "error": "VALIDATION_ERROR", "details": details},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"message": "Server error", "error": "SERVER_ERROR"},
    )


# ============================================================================
# Routers
# ============================================================================

from signorders.routers import (
    auth_router,
    cc_emails_router,
    lookups_router,
    orders_router,
    reorders_router,
    reports_router,
    sign_requests_router,
)

app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(orders_router, prefix="/orders", tags=["orders"])
app.include_router(sign_requests_router, prefix="/sign-requests", tags=["sign-requests"])
app.include_router(reorders_router, prefix="/reorders", tags=["reorders"])
app.include_router(cc_emails_router, prefix="/ccemails", tags=["cc-emails"])
app.include_router(lookups_router, prefix="/lookups", tags=["lookups"])
app.include_router(reports_router, prefix="/reports", tags=["reports"])


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
