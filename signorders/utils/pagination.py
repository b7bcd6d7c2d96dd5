"""Pagination utilities for list endpoints."""

import math
from dataclasses import dataclass

from fastapi import Query


# Pagination limits
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass
class PaginationParams:
    """Pagination parameters from query string."""
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total: int, limit: int) -> int:
    """ceil(total / limit); 0 when there is nothing to page."""
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


def pagination_dependency(default_limit: int = DEFAULT_LIMIT):
    """
    Build a pagination dependency with an endpoint-specific default limit.

    Usage:
        @router.get("/items")
        def list_items(pagination: PaginationParams = Depends(pagination_dependency(5))):
            ...
    """
    def get_pagination(
        page: int = Query(DEFAULT_PAGE, ge=1, description="Page number (1-indexed)"),
        limit: int = Query(default_limit, ge=1, le=MAX_LIMIT, description=f"Items per page (max {MAX_LIMIT})"),
    ) -> PaginationParams:
        return PaginationParams(page=page, limit=limit)
    return get_pagination
