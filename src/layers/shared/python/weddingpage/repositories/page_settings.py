"""Page settings repository for DynamoDB operations."""

from datetime import datetime
from typing import Any

import structlog
from botocore.exceptions import ClientError

from weddingpage.models.page_settings import PageSettings
from weddingpage.repositories.base import BaseRepository

logger = structlog.get_logger()


class PageSettingsRepository(BaseRepository[PageSettings]):
    """Repository for PageSettings entities."""

    def __init__(self, table_name: str | None = None):
        """Initialize page settings repository."""
        super().__init__(PageSettings, table_name)

    @staticmethod
    def _key(page_id: str) -> tuple[str, str]:
        return f"PAGE#{page_id}", "SETTINGS"

    def get_by_page_id(self, page_id: str) -> PageSettings | None:
        """Get settings by page ID.

        Args:
            page_id: The page identifier.

        Returns:
            PageSettings or None if not found.
        """
        pk, sk = self._key(page_id)
        return self.get(pk, sk)

    def get_field(self, page_id: str, field: str) -> tuple[bool, Any]:
        """Read a single attribute.

        Args:
            page_id: The page identifier.
            field: Attribute name.

        Returns:
            Tuple of (record_exists, value). Value is None when the record or
            the attribute is missing.
        """
        pk, sk = self._key(page_id)
        try:
            response = self.table.get_item(
                Key=self._build_key(pk, sk),
                ProjectionExpression="#pk, #field",
                ExpressionAttributeNames={"#pk": "PK", "#field": field},
                ConsistentRead=True,
            )
        except ClientError as e:
            logger.error("DynamoDB get_item failed", error=str(e), page_id=page_id, field=field)
            raise

        item = response.get("Item")
        if not item:
            return False, None
        return True, item.get(field)

    def create_settings(self, settings: PageSettings) -> PageSettings:
        """Create a settings record; fails if one already exists.

        Raises:
            ConflictError: If the page already has settings.
        """
        return self.create(settings)

    def upsert_fields(
        self,
        page_id: str,
        fields: dict[str, Any],
        now: datetime,
        defaults: dict[str, Any] | None = None,
    ) -> PageSettings:
        """Write the given fields, creating the record if needed.

        Args:
            page_id: The page identifier.
            fields: Attributes to overwrite.
            now: Timestamp for updated_at (and created_at on insert).
            defaults: Attributes written only where the item lacks them.

        Returns:
            The record after the write.
        """
        pk, sk = self._key(page_id)
        return self.update_fields(
            pk,
            sk,
            {**fields, "page_id": page_id, "updated_at": now},
            set_if_missing={**(defaults or {}), "created_at": now},
        )

    def delete_by_page_id(self, page_id: str) -> bool:
        """Delete the settings record of a page."""
        pk, sk = self._key(page_id)
        return self.delete(pk, sk)
