"""Guestbook comments API handler.

Anyone can read and post. A comment is deleted by presenting the password
its author chose.
"""

from typing import Any

import structlog

from weddingpage.services.guestbook_service import DEFAULT_PAGE_SIZE, GuestbookService
from weddingpage.utils.events import get_method, get_query_params, parse_json_body
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
    """Handle guestbook API requests.

    Routes:
        GET    /comments?pageId=...&page=1&itemsPerPage=5 - list comments
        POST   /comments                                  - post a comment
        DELETE /comments                                  - delete with password
    """
    try:
        http_method = get_method(event)
        if http_method == "OPTIONS":
            return options()

        service = GuestbookService()

        if http_method == "GET":
            return list_comments(service, event)
        elif http_method == "POST":
            return post_comment(service, event)
        elif http_method == "DELETE":
            return delete_comment(service, event)
        else:
            return method_not_allowed()

    except AppError as e:
        return from_exception(e)
    except Exception as e:
        logger.exception("Comments handler error", error=str(e))
        return internal_error(e)


def _int_param(params: dict, name: str, default: int) -> int:
    raw = params.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(
            f"{name} must be an integer",
            errors=[{"field": name, "message": "Must be an integer"}],
        )


def list_comments(service: GuestbookService, event: dict) -> dict:
    """List one page of a guestbook, newest first."""
    params = get_query_params(event)

    page_id = params.get("pageId")
    if not page_id:
        raise ValidationError("pageId is required")

    result = service.list_page(
        page_id,
        page=_int_param(params, "page", 1),
        items_per_page=_int_param(params, "itemsPerPage", DEFAULT_PAGE_SIZE),
    )

    return success(
        {
            "items": [c.to_public() for c in result.items],
            "count": result.count,
            "page": result.page,
            "items_per_page": result.items_per_page,
        },
        no_store=True,
    )


def post_comment(service: GuestbookService, event: dict) -> dict:
    """Post a comment."""
    comment = service.post(parse_json_body(event))
    return success(comment.to_public(), status_code=201, message="Comment posted")


def delete_comment(service: GuestbookService, event: dict) -> dict:
    """Delete a comment."""
    comment_id = service.delete(parse_json_body(event))
    return success({"id": comment_id, "deleted": True}, message="Comment deleted")
