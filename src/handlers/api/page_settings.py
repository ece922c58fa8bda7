"""Page settings API handler.

Public reads resolve a page by ID or by handle; writes require a bearer
token and target the caller's own page when the token carries one. The
approval seed is admin only and targets the requested page.
"""

from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from weddingpage.models.child_item import ChildListKind, ReplaceListRequest
from weddingpage.models.page_settings import SettingsWriteRequest
from weddingpage.services.child_list_service import ChildListService
from weddingpage.services.field_sanitizer import sanitize_settings
from weddingpage.services.identity_resolver import IdentityResolver
from weddingpage.services.page_settings_service import PageSettingsService
from weddingpage.utils.auth import (
    AuthContext,
    get_auth_context,
    require_admin,
    resolve_effective_page_id,
)
from weddingpage.utils.events import get_method, get_query_params, has_flag, parse_json_body
from weddingpage.utils.exceptions import AppError, ValidationError
from weddingpage.utils.responses import (
    from_exception,
    internal_error,
    method_not_allowed,
    options,
    success,
)

logger = structlog.get_logger()

WRITE_METHODS = ("POST", "PUT")


def handler(event: dict[str, Any], context: Any) -> dict:
    """Handle page settings API requests.

    Routes:
        GET      /page-settings?pageId=...           - settings (created on first read)
        GET      /page-settings?userUrl=...&date=... - settings resolved by handle
        POST|PUT /page-settings                      - partial settings update
        GET      /page-settings?transport            - transport list
        POST|PUT /page-settings?transport            - replace transport list
        GET      /page-settings?info                 - info list
        POST|PUT /page-settings?info                 - replace info list
        POST|PUT /page-settings?approval&pageId=...  - fill empty wedding fields
    """
    try:
        http_method = get_method(event)
        if http_method == "OPTIONS":
            return options()
        if http_method != "GET" and http_method not in WRITE_METHODS:
            return method_not_allowed()

        # A token that is sent must be valid, even on public reads
        auth = get_auth_context(event, required=http_method in WRITE_METHODS)

        if has_flag(event, "transport"):
            return handle_child_list(ChildListKind.TRANSPORT, http_method, auth, event)
        if has_flag(event, "info"):
            return handle_child_list(ChildListKind.INFO, http_method, auth, event)
        if has_flag(event, "approval"):
            if http_method == "GET":
                return method_not_allowed()
            return seed_approval(auth, event)

        if http_method == "GET":
            return get_settings(auth, event)
        return update_settings(auth, event)

    except AppError as e:
        if e.status_code >= 500:
            logger.error("Page settings request failed", code=e.code, error=e.message, details=e.details)
        return from_exception(e)
    except Exception as e:
        logger.exception("Page settings handler error", error=str(e))
        return internal_error(e)


def _read_page_id(auth: AuthContext | None, event: dict) -> str:
    """Page a read applies to.

    A lookup by handle always resolves the handle. Otherwise the caller's
    own page wins over a requested page id.
    """
    params = get_query_params(event)
    by_handle = bool(params.get("userUrl")) and not params.get("pageId")
    if auth and auth.page_id and not by_handle:
        return resolve_effective_page_id(auth, params.get("pageId"))

    return IdentityResolver().resolve(
        page_id=params.get("pageId"),
        user_url=params.get("userUrl"),
        date_token=params.get("date"),
    )


def _write_page_id(auth: AuthContext, requested_page_id: str | None) -> str:
    """Page a write applies to, honouring the identity's own page."""
    page_id = resolve_effective_page_id(auth, requested_page_id)
    if not page_id:
        raise ValidationError(
            "pageId is required",
            errors=[{"field": "pageId", "message": "Field required"}],
        )
    return page_id


# =============================================================================
# Settings
# =============================================================================


def get_settings(auth: AuthContext | None, event: dict) -> dict:
    """Get a page's settings with the derived image URL."""
    page_id = _read_page_id(auth, event)

    service = PageSettingsService()
    settings = service.get_or_create(page_id)

    return success(service.to_response(settings), no_store=True)


def update_settings(auth: AuthContext, event: dict) -> dict:
    """Apply a partial settings update."""
    body = parse_json_body(event)
    params = get_query_params(event)

    try:
        request = SettingsWriteRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)

    page_id = _write_page_id(auth, params.get("pageId") or request.page_id)
    fields = sanitize_settings(request.settings)

    service = PageSettingsService()
    settings = service.save(page_id, fields)

    logger.info("Page settings updated", page_id=page_id, user_id=auth.user_id)

    return success(service.to_response(settings), message="Settings saved")


def seed_approval(auth: AuthContext, event: dict) -> dict:
    """Fill empty wedding fields of the approved customer's page.

    Admin only. The target is the ``pageId`` query parameter, never the
    admin's own page.
    """
    require_admin(auth)

    body = parse_json_body(event)
    params = get_query_params(event)

    page_id = params.get("pageId")
    if not page_id:
        raise ValidationError(
            "pageId is required",
            errors=[{"field": "pageId", "message": "Field required"}],
        )

    wedding_fields = body.get("settings")
    if not isinstance(wedding_fields, dict):
        raise ValidationError(
            "settings must be an object",
            errors=[{"field": "settings", "message": "Field required"}],
        )

    service = PageSettingsService()
    result = service.seed_on_approval(page_id, wedding_fields)

    return success(
        {
            "settings": service.to_response(result.settings) if result.settings else None,
            "applied": result.applied,
            "seeded_fields": result.seeded_fields,
        }
    )


# =============================================================================
# Child lists
# =============================================================================


def handle_child_list(
    kind: ChildListKind,
    http_method: str,
    auth: AuthContext | None,
    event: dict,
) -> dict:
    """Route a transport or info list request."""
    if http_method == "GET":
        page_id = _read_page_id(auth, event)
        items = ChildListService().list_items(page_id, kind)
        return success(_list_payload(kind, page_id, items), no_store=True)

    body = parse_json_body(event)
    params = get_query_params(event)

    try:
        request = ReplaceListRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)

    page_id = _write_page_id(auth, params.get("pageId") or request.page_id)
    items = ChildListService().replace_list(page_id, kind, request.items)

    if kind is ChildListKind.TRANSPORT:
        venue_fields = {}
        if request.location_name is not None:
            venue_fields["transport_location_name"] = request.location_name
        if request.venue_address is not None:
            venue_fields["venue_address"] = request.venue_address
        if venue_fields:
            PageSettingsService().save(page_id, sanitize_settings(venue_fields))

    logger.info("Child list updated", page_id=page_id, kind=kind.value, count=len(items))

    return success(_list_payload(kind, page_id, items))


def _list_payload(kind: ChildListKind, page_id: str, items: list) -> dict:
    payload: dict[str, Any] = {"items": [item.to_public() for item in items]}
    if kind is ChildListKind.TRANSPORT:
        settings = PageSettingsService().find(page_id)
        payload["transport_location_name"] = settings.transport_location_name if settings else None
        payload["venue_address"] = settings.venue_address if settings else None
    return payload
