"""Structured logging helpers."""

import logging
from typing import Any

from signorders.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once at app start."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def build_log_context(
    *,
    user_id: str | None = None,
    office_id: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
) -> dict[str, Any]:
    """Return a log context dict for ``extra=``; empty values are dropped."""
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = str(user_id)
    if office_id:
        context["office_id"] = str(office_id)
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    return context
