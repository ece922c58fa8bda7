"""Replace-all semantics for ordered child lists (transport, info)."""

from collections.abc import Callable
from datetime import datetime

import structlog
from botocore.exceptions import ClientError

from weddingpage.models.base import utc_now
from weddingpage.models.child_item import ChildItem, ChildItemInput, ChildListKind
from weddingpage.repositories.base import store_errors
from weddingpage.repositories.child_list import ChildListRepository

logger = structlog.get_logger()


class ChildListService:
    """Lists and replaces the ordered child lists of a page."""

    def __init__(
        self,
        repo: ChildListRepository | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repo = repo or ChildListRepository()
        self.clock = clock

    def list_items(self, page_id: str, kind: ChildListKind) -> list[ChildItem]:
        """List the rows of a kind in render order."""
        with store_errors(f"list {kind.value} items"):
            return self.repo.list_items(page_id, kind)

    def replace_list(
        self,
        page_id: str,
        kind: ChildListKind,
        items: list[ChildItemInput],
    ) -> list[ChildItem]:
        """Replace every row of a kind with the submitted items.

        A failed delete is logged and the insert still runs; rows are keyed
        by array position so leftovers beyond the new length may remain. A
        failed insert is fatal.

        Args:
            page_id: The page identifier.
            kind: Transport or info.
            items: Submitted items in array order.

        Returns:
            The inserted rows in render order.

        Raises:
            StoreError: If the insert fails.
        """
        try:
            removed = self.repo.delete_all(page_id, kind)
            logger.debug("Child list cleared", page_id=page_id, kind=kind.value, removed=removed)
        except ClientError as e:
            logger.warning(
                "Child list delete failed, inserting anyway",
                page_id=page_id,
                kind=kind.value,
                error=str(e),
            )

        now = self.clock()
        rows = [
            ChildItem(
                page_id=page_id,
                kind=kind,
                title=item.title,
                description=item.description,
                display_order=item.display_order if item.display_order is not None else idx + 1,
                position=idx,
                created_at=now,
                updated_at=now,
            )
            for idx, item in enumerate(items)
        ]

        with store_errors(f"insert {kind.value} items"):
            self.repo.insert_all(rows)

        logger.info("Child list replaced", page_id=page_id, kind=kind.value, count=len(rows))
        return sorted(rows, key=lambda row: (row.display_order, row.position))

