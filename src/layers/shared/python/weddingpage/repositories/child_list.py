"""Ordered child list repository (transport and info rows)."""

import structlog

from weddingpage.models.child_item import ChildItem, ChildListKind
from weddingpage.repositories.base import BaseRepository

logger = structlog.get_logger()


class ChildListRepository(BaseRepository[ChildItem]):
    """Repository for ChildItem rows stored under a page partition."""

    def __init__(self, table_name: str | None = None):
        """Initialize child list repository."""
        super().__init__(ChildItem, table_name)

    def list_items(self, page_id: str, kind: ChildListKind) -> list[ChildItem]:
        """List rows of a kind in render order.

        Args:
            page_id: The page identifier.
            kind: Transport or info.

        Returns:
            Rows sorted by display_order, ties by array position.
        """
        items = self.query_all(f"PAGE#{page_id}", sk_begins_with=kind.sk_prefix)
        return sorted(items, key=lambda item: (item.display_order, item.position))

    def delete_all(self, page_id: str, kind: ChildListKind) -> int:
        """Delete every row of a kind.

        Returns:
            Number of rows deleted.
        """
        items = self.query_all(f"PAGE#{page_id}", sk_begins_with=kind.sk_prefix)
        self.batch_delete([(item.get_pk(), item.get_sk()) for item in items])
        return len(items)

    def insert_all(self, items: list[ChildItem]) -> None:
        """Insert rows."""
        self.batch_write(items)
