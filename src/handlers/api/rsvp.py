"""RSVP API handler.

Guests submit responses without signing in. Responses carry phone
numbers, so listing them requires the couple's token (or an admin's).
"""

from typing import Any

import structlog

from weddingpage.services.rsvp_service import RsvpService, summarize_responses
from weddingpage.utils.auth import get_auth_context, resolve_effective_page_id
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


def handler(event: dict[str, Any], context: Any) -> dict:
    """Handle RSVP API requests.

    Routes:
        POST /rsvp                       - submit a response (public)
        GET  /rsvp?pageId=...[&attending] - list responses with a summary
    """
    try:
        http_method = get_method(event)
        if http_method == "OPTIONS":
            return options()

        if http_method == "POST":
            return submit_rsvp(event)
        elif http_method == "GET":
            return list_rsvps(event)
        else:
            return method_not_allowed()

    except AppError as e:
        return from_exception(e)
    except Exception as e:
        logger.exception("RSVP handler error", error=str(e))
        return internal_error(e)


def submit_rsvp(event: dict) -> dict:
    """Store a guest's response."""
    body = parse_json_body(event)
    response = RsvpService().submit(body)
    return success(response, status_code=201, message="RSVP submitted")


def list_rsvps(event: dict) -> dict:
    """List a page's responses for its owner.

    Query params:
        pageId: Page to list (admins; users always get their own page)
        attending: Only guests who will attend
    """
    auth = get_auth_context(event)
    params = get_query_params(event)

    page_id = resolve_effective_page_id(auth, params.get("pageId"))
    if not page_id:
        raise ValidationError("pageId is required")

    service = RsvpService()
    responses = service.list_responses(page_id, attending_only=has_flag(event, "attending"))

    return success(
        {
            "items": [r.model_dump(mode="json") for r in responses],
            "summary": summarize_responses(responses),
        },
        no_store=True,
    )
