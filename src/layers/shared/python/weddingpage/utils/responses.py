"""API response helper functions.

Every response body uses the same envelope:
``{success, data?, error?, message?, details?, hint?, code?}``.
"""

import json
import os
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel as PydanticBaseModel

from weddingpage.utils.exceptions import AppError

_ALLOWED_ORIGIN = os.environ.get("CORS_ALLOWED_ORIGIN", "*")


def get_cors_headers() -> dict:
    """Get CORS headers for API responses."""
    return {
        "Access-Control-Allow-Origin": _ALLOWED_ORIGIN,
        "Access-Control-Allow-Headers": "Content-Type,Authorization",
        "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
        "Content-Type": "application/json",
    }


CORS_HEADERS = get_cors_headers()

# Public reads must never be served stale by an intermediate cache
NO_STORE_HEADERS = {
    **CORS_HEADERS,
    "Cache-Control": "no-store, no-cache, must-revalidate",
}


def _json_serializer(obj: Any) -> Any:
    """JSON serializer for objects not serializable by default."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return int(obj) if obj % 1 == 0 else float(obj)
    if isinstance(obj, PydanticBaseModel):
        return obj.model_dump(mode="json")
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def _serialize(data: Any) -> str:
    """Serialize data to JSON string."""
    return json.dumps(data, default=_json_serializer, ensure_ascii=False)


def success(
    data: Any = None,
    status_code: int = 200,
    message: str | None = None,
    no_store: bool = False,
) -> dict:
    """Create a successful API response.

    Args:
        data: Response data (dict, list, or Pydantic model).
        status_code: HTTP status code (default 200).
        message: Optional human-readable message.
        no_store: Send Cache-Control: no-store.

    Returns:
        API Gateway response dict.
    """
    if isinstance(data, PydanticBaseModel):
        data = data.model_dump(mode="json")

    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message

    return {
        "statusCode": status_code,
        "headers": NO_STORE_HEADERS if no_store else CORS_HEADERS,
        "body": _serialize(body),
    }


def options() -> dict:
    """Create a CORS preflight response."""
    return {
        "statusCode": 200,
        "headers": CORS_HEADERS,
        "body": "",
    }


def error(
    message: str,
    status_code: int = 500,
    code: str | None = None,
    details: Any = None,
    hint: str | None = None,
) -> dict:
    """Create an error API response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        code: Machine-readable error code.
        details: Additional error details.
        hint: Operator-facing hint.

    Returns:
        API Gateway response dict.
    """
    body: dict[str, Any] = {
        "success": False,
        "error": message,
    }

    if code:
        body["code"] = code
    if details:
        body["details"] = details
    if hint:
        body["hint"] = hint

    return {
        "statusCode": status_code,
        "headers": CORS_HEADERS,
        "body": _serialize(body),
    }


def from_exception(exc: AppError) -> dict:
    """Create an error response from an AppError."""
    return {
        "statusCode": exc.status_code,
        "headers": CORS_HEADERS,
        "body": _serialize(exc.to_dict()),
    }


def method_not_allowed() -> dict:
    """Create a 405 Method Not Allowed response."""
    return error("Method not allowed", 405, code="METHOD_NOT_ALLOWED")


def internal_error(exc: Exception) -> dict:
    """Create the generic 500 response used by handler catch-alls.

    Args:
        exc: The unexpected exception.

    Returns:
        API Gateway response dict.
    """
    return error(
        "Internal server error",
        500,
        code="INTERNAL_ERROR",
        details={"type": type(exc).__name__, "reason": str(exc)},
    )
