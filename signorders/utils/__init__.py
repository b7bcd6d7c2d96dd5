"""Utility modules."""

from signorders.utils.normalization import (
    escape_like,
    normalize_email,
    normalize_state,
    validate_phone,
    validate_zip_code,
)
from signorders.utils.pagination import (
    PaginationParams,
    pagination_dependency,
    total_pages,
)

__all__ = [
    # Normalization
    "escape_like",
    "normalize_email",
    "normalize_state",
    "validate_phone",
    "validate_zip_code",
    # Pagination
    "PaginationParams",
    "pagination_dependency",
    "total_pages",
]
