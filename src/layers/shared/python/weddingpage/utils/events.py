"""Helpers for reading API Gateway proxy events."""

import base64
import binascii
import json
from typing import Any

from weddingpage.utils.exceptions import ValidationError


def get_method(event: dict[str, Any]) -> str:
    """Get the upper-cased HTTP method."""
    return (event.get("httpMethod") or "").upper()


def get_query_params(event: dict[str, Any]) -> dict[str, str]:
    """Get query string parameters (never None)."""
    return event.get("queryStringParameters", {}) or {}


def has_flag(event: dict[str, Any], name: str) -> bool:
    """Check for a bare query flag such as ``?transport``.

    API Gateway passes ``?transport`` through as ``{"transport": ""}``.
    """
    return name in get_query_params(event)


def parse_json_body(event: dict[str, Any]) -> dict[str, Any]:
    """Parse the JSON request body.

    Args:
        event: API Gateway event.

    Returns:
        Parsed body, or an empty dict when there is no body.

    Raises:
        ValidationError: If the body is not a JSON object.
    """
    raw = event.get("body")
    if not raw:
        return {}

    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            raise ValidationError("Invalid JSON body")

    try:
        body = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("Invalid JSON body")

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    return body
