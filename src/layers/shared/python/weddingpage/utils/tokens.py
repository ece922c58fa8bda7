"""Bearer token issuing and validation.

Tokens are HS256 JWTs signed with ``JWT_SECRET``. The legacy admin client
sends unsigned base64 JSON payloads; those are only honoured when
``ALLOW_LEGACY_TOKENS`` is enabled, which must be limited to deployments
behind a trusted edge that authenticates callers on its own.
"""

import base64
import binascii
import json
import os
import time
from dataclasses import dataclass

import jwt
import structlog

from weddingpage.models.account import Role
from weddingpage.utils.exceptions import UnauthorizedError

logger = structlog.get_logger()

DEFAULT_TOKEN_TTL_SECONDS = 45 * 60


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a validated token."""

    user_id: str
    role: Role
    page_id: str | None = None


def _secret() -> str:
    secret = os.environ.get("JWT_SECRET")
    if not secret:
        logger.error("JWT_SECRET not configured")
        raise UnauthorizedError("Token validation is not configured")
    return secret


def _algorithm() -> str:
    return os.environ.get("JWT_ALGORITHM", "HS256")


def _legacy_tokens_allowed() -> bool:
    return os.environ.get("ALLOW_LEGACY_TOKENS", "false").lower() == "true"


def issue_token(
    user_id: str,
    role: Role | str = Role.USER,
    page_id: str | None = None,
    ttl_seconds: int | None = None,
) -> str:
    """Issue a signed token for an already authenticated account.

    Args:
        user_id: Account ID.
        role: Account role.
        page_id: Page assigned to the account, if any.
        ttl_seconds: Lifetime; defaults to TOKEN_TTL_SECONDS or 45 minutes.

    Returns:
        Encoded JWT string.
    """
    if ttl_seconds is None:
        ttl_seconds = int(os.environ.get("TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS))

    now = int(time.time())
    payload = {
        "sub": user_id,
        "role": Role.parse(role).value,
        "page_id": page_id,
        "iat": now,
        "exp": now + ttl_seconds,
    }
    return jwt.encode(payload, _secret(), algorithm=_algorithm())


def decode_token(token: str) -> TokenClaims:
    """Validate a bearer token and return its claims.

    Args:
        token: Raw token string (without the "Bearer " prefix).

    Returns:
        TokenClaims for the caller.

    Raises:
        UnauthorizedError: If the token is expired, forged or malformed.
    """
    try:
        claims = jwt.decode(
            token,
            _secret(),
            algorithms=[_algorithm()],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token has expired")
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        if _legacy_tokens_allowed():
            return _decode_legacy_token(token)
        logger.warning("Invalid token", error=str(e))
        raise UnauthorizedError("Invalid token")

    try:
        role = Role.parse(claims.get("role"))
    except ValueError:
        logger.warning("Token carries unknown role", role=claims.get("role"))
        raise UnauthorizedError("Invalid token")

    return TokenClaims(
        user_id=str(claims["sub"]),
        role=role,
        page_id=claims.get("page_id") or None,
    )


def _decode_legacy_token(token: str) -> TokenClaims:
    """Decode an unsigned base64 JSON token from the legacy admin client."""
    try:
        payload = json.loads(base64.b64decode(token, validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Invalid legacy token", error=str(e))
        raise UnauthorizedError("Invalid token")

    if not isinstance(payload, dict) or not payload.get("userId"):
        raise UnauthorizedError("Invalid token")

    expires = payload.get("expires")
    if not isinstance(expires, (int, float)) or time.time() * 1000 > expires:
        raise UnauthorizedError("Token has expired")

    try:
        role = Role.parse(payload.get("role") or payload.get("userRole"))
    except ValueError:
        raise UnauthorizedError("Invalid token")

    logger.info("Accepted legacy token", user_id=payload["userId"])

    return TokenClaims(
        user_id=str(payload["userId"]),
        role=role,
        page_id=payload.get("page_id") or payload.get("pageId") or None,
    )
