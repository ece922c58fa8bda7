"""Authentication context helpers."""

from dataclasses import dataclass
from typing import Any

import structlog

from weddingpage.models.account import Role
from weddingpage.utils.exceptions import ForbiddenError, UnauthorizedError
from weddingpage.utils.tokens import decode_token

logger = structlog.get_logger()


@dataclass
class AuthContext:
    """Authentication context extracted from the bearer token.

    Contains user identity and authorization information.
    """

    user_id: str
    role: Role = Role.USER
    page_id: str | None = None

    @property
    def is_admin(self) -> bool:
        """Whether the caller has the admin role."""
        return self.role is Role.ADMIN


def _extract_token(event: dict[str, Any]) -> str | None:
    """Extract the bearer token from event headers.

    Args:
        event: API Gateway event.

    Returns:
        Token string or None.
    """
    headers = event.get("headers", {}) or {}

    # Headers might be case-insensitive
    auth_header = headers.get("Authorization") or headers.get("authorization")
    if not auth_header:
        return None

    if not auth_header.startswith("Bearer "):
        raise UnauthorizedError("Authorization header must use the Bearer scheme")

    token = auth_header[7:].strip()
    return token or None


def get_auth_context(event: dict[str, Any], required: bool = True) -> AuthContext | None:
    """Extract authentication context from an API Gateway event.

    Args:
        event: API Gateway event dict.
        required: Whether a missing token is an error.

    Returns:
        AuthContext, or None when no token was sent and auth is optional.

    Raises:
        UnauthorizedError: If the token is missing (when required) or invalid.
    """
    token = _extract_token(event)

    if not token:
        if required:
            raise UnauthorizedError("Authentication token is required")
        return None

    claims = decode_token(token)

    return AuthContext(
        user_id=claims.user_id,
        role=claims.role,
        page_id=claims.page_id,
    )


def require_admin(auth: AuthContext) -> None:
    """Ensure the caller is an admin.

    Raises:
        ForbiddenError: If the caller is not an admin.
    """
    if not auth.is_admin:
        logger.warning("Admin access denied", user_id=auth.user_id)
        raise ForbiddenError("Admin role required")


def resolve_effective_page_id(auth: AuthContext | None, requested_page_id: str | None) -> str | None:
    """Pick the page an operation applies to.

    An identity bound to a page always wins over the requested page. Admins
    without a bound page may address any page; plain users without one may
    not write anywhere.

    Args:
        auth: Caller identity, or None for anonymous public reads.
        requested_page_id: Page ID taken from the query string or body.

    Returns:
        The page ID to operate on (None if nothing was requested).

    Raises:
        ForbiddenError: If a user without an assigned page addresses a page.
    """
    if auth is None:
        return requested_page_id

    if auth.page_id:
        if requested_page_id and requested_page_id != auth.page_id:
            logger.info(
                "Substituting identity page id",
                user_id=auth.user_id,
                requested_page_id=requested_page_id,
                page_id=auth.page_id,
            )
        return auth.page_id

    if auth.role is Role.ADMIN:
        return requested_page_id
    if auth.role is Role.USER:
        raise ForbiddenError("No page is assigned to this account")

    raise AssertionError(f"Unhandled role: {auth.role!r}")
