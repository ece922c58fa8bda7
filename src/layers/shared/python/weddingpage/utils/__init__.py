"""Utility functions and helpers."""

from weddingpage.utils.responses import success, error, from_exception
from weddingpage.utils.auth import get_auth_context, AuthContext
from weddingpage.utils.cache import TTLCache
from weddingpage.utils.exceptions import (
    AppError,
    NotFoundError,
    ValidationError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    StoreError,
)

__all__ = [
    # Response helpers
    "success",
    "error",
    "from_exception",
    # Auth
    "get_auth_context",
    "AuthContext",
    # Cache
    "TTLCache",
    # Exceptions
    "AppError",
    "NotFoundError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "StoreError",
]
