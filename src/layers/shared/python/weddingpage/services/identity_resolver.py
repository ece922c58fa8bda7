"""Resolve a public handle to a canonical page identifier."""

import structlog

from weddingpage.models.account import Account, AccountSource, RESOLUTION_ORDER
from weddingpage.repositories.account import AccountRepository
from weddingpage.services.date_token import parse_date_token
from weddingpage.utils.exceptions import NotFoundError, ValidationError

logger = structlog.get_logger()


class IdentityResolver:
    """Maps a page ID or a (handle, date token) pair to a page ID.

    A handle that matches no account is never used as a page ID: handles
    are chosen by tenants and may be stale or reassigned.
    """

    def __init__(
        self,
        account_repo: AccountRepository | None = None,
        sources: tuple[AccountSource, ...] = RESOLUTION_ORDER,
    ):
        """Initialize resolver.

        Args:
            account_repo: Account repository.
            sources: Account sources, searched in order.
        """
        self.account_repo = account_repo or AccountRepository()
        self.sources = sources

    def resolve(
        self,
        page_id: str | None = None,
        user_url: str | None = None,
        date_token: str | None = None,
    ) -> str:
        """Resolve the page identifier for a request.

        Args:
            page_id: Direct page identifier; returned unchanged when given.
            user_url: Public handle.
            date_token: Optional YYMMDD wedding date disambiguator.

        Returns:
            The canonical page identifier.

        Raises:
            ValidationError: If neither identifier is given or the date
                token is malformed.
            NotFoundError: If no account in any source holds the handle.
        """
        if page_id:
            return page_id

        handle = (user_url or "").strip()
        if not handle:
            raise ValidationError("pageId or userUrl is required")

        wedding_date = None
        if date_token:
            wedding_date = parse_date_token(date_token)
            if not wedding_date:
                raise ValidationError(
                    "date must be a valid YYMMDD date",
                    errors=[{"field": "date", "message": "Invalid date token"}],
                )

        for source in self.sources:
            account = self._match(source, handle, wedding_date)
            if account:
                logger.info(
                    "Resolved handle",
                    user_url=handle,
                    source=source.value,
                    page_id=account.page_id,
                    exact_date=wedding_date is not None
                    and account.wedding_date == wedding_date,
                )
                return account.page_id

        logger.info("Handle not found", user_url=handle, wedding_date=wedding_date)
        raise NotFoundError("Page", handle, message=f"No page found for '{handle}'")

    def _match(
        self,
        source: AccountSource,
        handle: str,
        wedding_date: str | None,
    ) -> Account | None:
        """Find the best account in one source: exact date match first."""
        if wedding_date:
            exact = self._first_with_page(
                self.account_repo.find_by_user_url(source, handle, wedding_date)
            )
            if exact:
                return exact

        return self._first_with_page(self.account_repo.find_by_user_url(source, handle))

    @staticmethod
    def _first_with_page(accounts: list[Account]) -> Account | None:
        for account in accounts:
            if account.page_id:
                return account
        return None
