"""User management API handler.

Admin-only account approval and teardown. Approving an account with a
page seeds the page's empty wedding fields from the account.
All endpoints require the admin role.
"""

from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from weddingpage.models.account import (
    Account,
    AccountSource,
    ApprovalStatus,
    ApproveAccountRequest,
    DeleteAccountRequest,
)
from weddingpage.repositories.account import AccountRepository
from weddingpage.repositories.base import store_errors
from weddingpage.services.account_teardown import teardown_account
from weddingpage.services.date_token import format_date_token
from weddingpage.services.page_settings_service import PageSettingsService
from weddingpage.utils.auth import get_auth_context, require_admin
from weddingpage.utils.events import get_method, get_query_params, parse_json_body
from weddingpage.utils.exceptions import AppError, NotFoundError, StoreError, ValidationError
from weddingpage.utils.responses import (
    error,
    from_exception,
    internal_error,
    method_not_allowed,
    options,
    success,
)

logger = structlog.get_logger()


def handler(event: dict[str, Any], context: Any) -> dict:
    """Handle user management API requests.

    Routes:
        GET    /user-management?source=admin_user|naver - List accounts
        POST   /user-management?action=approve          - Approve or reject
        DELETE /user-management                         - Tear down an account
    """
    try:
        http_method = get_method(event)
        if http_method == "OPTIONS":
            return options()

        auth = get_auth_context(event)
        require_admin(auth)

        repo = AccountRepository()
        params = get_query_params(event)

        if http_method == "GET":
            return list_accounts(repo, params)
        elif http_method == "POST" and params.get("action") == "approve":
            return approve_account(repo, event)
        elif http_method == "POST":
            raise ValidationError(
                "Unknown action",
                errors=[{"field": "action", "message": "Expected 'approve'"}],
            )
        elif http_method == "DELETE":
            return delete_account(repo, event)
        else:
            return method_not_allowed()

    except AppError as e:
        return from_exception(e)
    except ValueError as e:
        return error(str(e), 400, code="VALIDATION_ERROR")
    except Exception as e:
        logger.exception("User management handler error", error=str(e))
        return internal_error(e)


def _get_account(repo: AccountRepository, source: AccountSource, user_id: str) -> Account:
    with store_errors("read account"):
        account = repo.get_by_id(source, user_id)
    if not account:
        raise NotFoundError("Account", user_id)
    return account


def list_accounts(repo: AccountRepository, params: dict) -> dict:
    """List the accounts of a source.

    Query params:
        source: admin_user (default) or naver
    """
    source = AccountSource(params.get("source") or AccountSource.ADMIN_USER.value)

    with store_errors("list accounts"):
        accounts = repo.list_by_source(source)

    return success(
        {
            "source": source.value,
            "items": [
                {**a.model_dump(mode="json"), "date_token": format_date_token(a.wedding_date)}
                for a in accounts
            ],
        }
    )


def approve_account(repo: AccountRepository, event: dict) -> dict:
    """Set an account's approval status.

    Approval activates the account, assigns the page when one is given and
    fills empty wedding fields of the page's settings.
    """
    body = parse_json_body(event)

    try:
        request = ApproveAccountRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)

    source = AccountSource(request.source)
    status = ApprovalStatus(request.status)
    account = _get_account(repo, source, request.user_id)

    account.approval_status = status
    if status is ApprovalStatus.APPROVED:
        account.is_active = True
        if request.page_id:
            account.page_id = request.page_id

    with store_errors("save account"):
        account = repo.save_account(account)

    logger.info(
        "Account approval updated",
        account_id=account.id,
        source=source.value,
        status=status.value,
        page_id=account.page_id,
    )

    seed = None
    if status is ApprovalStatus.APPROVED and account.page_id:
        seed = _seed_page(repo, account)

    return success(
        {"account": account.model_dump(mode="json"), "seed": seed},
        message=f"Account {status.value}",
    )


def _seed_page(repo: AccountRepository, account: Account) -> dict:
    """Seed the approved account's page.

    The approval is already stored, so a store failure here is reported in
    the result instead of failing the request.
    """
    service = PageSettingsService(account_repo=repo)
    try:
        result = service.seed_on_approval(account.page_id, account.wedding_fields())
    except StoreError as e:
        logger.error(
            "Approval seed failed",
            account_id=account.id,
            page_id=account.page_id,
            code=e.code,
            error=e.message,
        )
        return {
            "applied": False,
            "seeded_fields": [],
            "error": {"code": e.code, "message": e.message},
        }

    return {"applied": result.applied, "seeded_fields": result.seeded_fields}


def delete_account(repo: AccountRepository, event: dict) -> dict:
    """Delete an account and its page data."""
    body = parse_json_body(event)

    try:
        request = DeleteAccountRequest.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)

    account = _get_account(repo, AccountSource(request.source), request.user_id)
    report = teardown_account(account, account_repo=repo)

    return success(report, message="Account deleted")
