"""Account repository for DynamoDB operations."""

import structlog

from weddingpage.models.account import Account, AccountSource
from weddingpage.repositories.base import BaseRepository

logger = structlog.get_logger()


class AccountRepository(BaseRepository[Account]):
    """Repository for Account entities across both account sources."""

    def __init__(self, table_name: str | None = None):
        """Initialize account repository."""
        super().__init__(Account, table_name)

    def get_by_id(self, source: AccountSource, account_id: str) -> Account | None:
        """Get an account by ID.

        Args:
            source: Account source.
            account_id: The account ID.

        Returns:
            Account or None if not found.
        """
        return self.get(pk=f"ACCOUNT#{AccountSource(source).value}", sk=f"ACCOUNT#{account_id}")

    def find_by_user_url(
        self,
        source: AccountSource,
        user_url: str,
        wedding_date: str | None = None,
    ) -> list[Account]:
        """Find accounts by handle using GSI1.

        Args:
            source: Account source.
            user_url: The public handle.
            wedding_date: Optional ISO date; restricts to exact matches.

        Returns:
            Matching accounts ordered by wedding date, then ID.
        """
        items, _ = self.query(
            pk=f"USER_URL#{AccountSource(source).value}#{user_url}",
            sk_begins_with=f"{wedding_date}#" if wedding_date else None,
            index_name="GSI1",
        )
        return items

    def get_by_page_id(self, page_id: str) -> Account | None:
        """Get the account a page is assigned to using GSI2.

        Args:
            page_id: The page identifier.

        Returns:
            Account or None if no account holds the page.
        """
        items, _ = self.query(
            pk=f"ACCOUNT_PAGE#{page_id}",
            index_name="GSI2",
            limit=1,
        )
        return items[0] if items else None

    def list_by_source(self, source: AccountSource) -> list[Account]:
        """List all accounts of a source."""
        return self.query_all(f"ACCOUNT#{AccountSource(source).value}", sk_begins_with="ACCOUNT#")

    def save_account(self, account: Account) -> Account:
        """Create or replace an account, keeping its index keys in sync."""
        account.update_timestamp()
        gsi_keys: dict[str, str] = {}
        for keys in (account.get_gsi1_keys(), account.get_gsi2_keys()):
            if keys:
                gsi_keys.update(keys)
        return self.put(account, gsi_keys=gsi_keys)

    def delete_account(self, account: Account) -> bool:
        """Delete an account."""
        return self.delete(account.get_pk(), account.get_sk())
