"""Account teardown: remove an account and everything its page owns."""

from collections.abc import Callable

import structlog
from botocore.exceptions import ClientError

from weddingpage.models.account import Account
from weddingpage.models.child_item import ChildListKind
from weddingpage.repositories.account import AccountRepository
from weddingpage.repositories.child_list import ChildListRepository
from weddingpage.repositories.comment import CommentRepository
from weddingpage.repositories.contact import ContactRepository
from weddingpage.repositories.page_settings import PageSettingsRepository
from weddingpage.repositories.rsvp import RsvpRepository

logger = structlog.get_logger()


def teardown_account(
    account: Account,
    account_repo: AccountRepository | None = None,
    settings_repo: PageSettingsRepository | None = None,
    child_list_repo: ChildListRepository | None = None,
    contact_repo: ContactRepository | None = None,
    rsvp_repo: RsvpRepository | None = None,
    comment_repo: CommentRepository | None = None,
) -> dict[str, list[str]]:
    """Delete an account and its page data.

    Each entity is deleted independently. A failed delete is logged and
    recorded in the report; the remaining deletes still run.

    Args:
        account: The account to remove.
        account_repo: Account repository.
        settings_repo: Settings repository.
        child_list_repo: Child list repository.
        contact_repo: Contact repository.
        rsvp_repo: RSVP repository.
        comment_repo: Guestbook comment repository.

    Returns:
        Report with the names of the ``deleted`` and ``failed`` entities.
    """
    account_repo = account_repo or AccountRepository()
    settings_repo = settings_repo or PageSettingsRepository()
    child_list_repo = child_list_repo or ChildListRepository()
    contact_repo = contact_repo or ContactRepository()
    rsvp_repo = rsvp_repo or RsvpRepository()
    comment_repo = comment_repo or CommentRepository()

    steps: list[tuple[str, Callable[[], object]]] = [
        ("account", lambda: account_repo.delete_account(account)),
    ]

    page_id = account.page_id
    if page_id:
        steps += [
            ("settings", lambda: settings_repo.delete_by_page_id(page_id)),
            ("transport", lambda: child_list_repo.delete_all(page_id, ChildListKind.TRANSPORT)),
            ("info", lambda: child_list_repo.delete_all(page_id, ChildListKind.INFO)),
            ("contacts", lambda: contact_repo.delete_by_page_id(page_id)),
            ("rsvps", lambda: rsvp_repo.delete_all(page_id)),
            ("comments", lambda: comment_repo.delete_all(page_id)),
        ]

    report: dict[str, list[str]] = {"deleted": [], "failed": []}
    for name, step in steps:
        try:
            step()
            report["deleted"].append(name)
        except ClientError as e:
            logger.warning(
                "Teardown step failed",
                step=name,
                account_id=account.id,
                page_id=page_id,
                error=str(e),
            )
            report["failed"].append(name)

    logger.info("Account torn down", account_id=account.id, page_id=page_id, **report)
    return report
