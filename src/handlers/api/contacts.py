"""Wedding contacts API handler.

One contact sheet per page: names, phone numbers and bank accounts of the
couple and their parents. Reads are public and cached per container.
"""

from typing import Any

import structlog

from weddingpage.services.contact_service import get_contact_service
from weddingpage.utils.auth import AuthContext, get_auth_context, resolve_effective_page_id
from weddingpage.utils.events import get_method, get_query_params, parse_json_body
from weddingpage.utils.exceptions import AppError, NotFoundError, ValidationError
from weddingpage.utils.responses import (
    from_exception,
    internal_error,
    method_not_allowed,
    options,
    success,
)

logger = structlog.get_logger()


def handler(event: dict[str, Any], context: Any) -> dict:
    """Handle contacts API requests.

    Routes:
        GET      /contacts?pageId=... - contact sheet (public)
        POST|PUT /contacts            - upsert contact fields
        DELETE   /contacts            - remove the contact sheet
    """
    try:
        http_method = get_method(event)
        if http_method == "OPTIONS":
            return options()

        if http_method not in ("GET", "POST", "PUT", "DELETE"):
            return method_not_allowed()

        if http_method == "GET":
            auth = get_auth_context(event, required=False)
            return get_contacts(auth, event)

        auth = get_auth_context(event)
        body = parse_json_body(event)
        params = get_query_params(event)
        page_id = resolve_effective_page_id(auth, params.get("pageId") or body.get("pageId"))
        if not page_id:
            raise ValidationError("pageId is required")

        if http_method == "DELETE":
            return delete_contacts(page_id)
        return save_contacts(page_id, body)

    except AppError as e:
        return from_exception(e)
    except Exception as e:
        logger.exception("Contacts handler error", error=str(e))
        return internal_error(e)


def get_contacts(auth: AuthContext | None, event: dict) -> dict:
    """Get the contact sheet of a page.

    A caller bound to a page reads its own sheet.
    """
    requested_page_id = get_query_params(event).get("pageId")
    page_id = resolve_effective_page_id(auth, requested_page_id) if auth and auth.page_id else requested_page_id
    if not page_id:
        raise ValidationError("pageId is required")

    sheet = get_contact_service().get(page_id)
    if not sheet:
        raise NotFoundError("Contacts", page_id)

    return success(sheet)


def save_contacts(page_id: str, body: dict) -> dict:
    """Upsert contact fields."""
    contacts = body.get("contacts", body)
    sheet = get_contact_service().save(page_id, contacts)
    return success(sheet, message="Contacts saved")


def delete_contacts(page_id: str) -> dict:
    """Delete the contact sheet of a page."""
    deleted = get_contact_service().delete(page_id)
    if not deleted:
        raise NotFoundError("Contacts", page_id)
    return success({"page_id": page_id, "deleted": True})
