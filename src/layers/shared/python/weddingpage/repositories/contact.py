"""Contact sheet repository for DynamoDB operations."""

from datetime import datetime
from typing import Any

from weddingpage.models.contact import ContactSheet
from weddingpage.repositories.base import BaseRepository


class ContactRepository(BaseRepository[ContactSheet]):
    """Repository for ContactSheet entities."""

    def __init__(self, table_name: str | None = None):
        """Initialize contact repository."""
        super().__init__(ContactSheet, table_name)

    def get_by_page_id(self, page_id: str) -> ContactSheet | None:
        """Get the contact sheet of a page."""
        return self.get(f"PAGE#{page_id}", "CONTACT")

    def upsert_fields(self, page_id: str, fields: dict[str, Any], now: datetime) -> ContactSheet:
        """Write the given fields, creating the sheet if needed."""
        return self.update_fields(
            f"PAGE#{page_id}",
            "CONTACT",
            {**fields, "page_id": page_id, "updated_at": now},
            set_if_missing={"created_at": now},
        )

    def delete_by_page_id(self, page_id: str) -> bool:
        """Delete the contact sheet of a page."""
        return self.delete(f"PAGE#{page_id}", "CONTACT")
