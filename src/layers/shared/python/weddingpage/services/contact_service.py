"""Contact sheet reads (cached) and writes."""

import os
from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from weddingpage.models.base import utc_now
from weddingpage.models.contact import CONTACT_FIELDS, ContactSheet, ContactSheetUpdate
from weddingpage.repositories.base import store_errors
from weddingpage.repositories.contact import ContactRepository
from weddingpage.utils.cache import TTLCache
from weddingpage.utils.exceptions import ValidationError

logger = structlog.get_logger()


def _default_cache() -> TTLCache:
    return TTLCache(float(os.environ.get("CONTACT_CACHE_TTL_SECONDS", "120")))


class ContactService:
    """Reads and writes the contact sheet of a page.

    Reads go through a TTL cache that lives as long as the Lambda
    container; writes drop the page's entry.
    """

    def __init__(
        self,
        repo: ContactRepository | None = None,
        cache: TTLCache | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repo = repo or ContactRepository()
        self.cache = cache if cache is not None else _default_cache()
        self.clock = clock

    @staticmethod
    def _cache_key(page_id: str) -> str:
        return f"contact_{page_id}"

    def get(self, page_id: str) -> ContactSheet | None:
        """Get the contact sheet of a page, possibly from cache."""

        def load() -> ContactSheet | None:
            with store_errors("read contacts"):
                return self.repo.get_by_page_id(page_id)

        return self.cache.get_or_load(self._cache_key(page_id), load)

    def save(self, page_id: str, payload: Any) -> ContactSheet:
        """Upsert allowlisted contact fields.

        Raises:
            ValidationError: If the payload is not an object or is empty.
            StoreError: If the store fails.
        """
        if not isinstance(payload, dict):
            raise ValidationError("contacts must be an object")
        try:
            update = ContactSheetUpdate.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e)

        fields = {
            k: v for k, v in update.model_dump(exclude_unset=True).items() if k in CONTACT_FIELDS
        }
        if not fields:
            raise ValidationError("No contact fields to update")

        with store_errors("save contacts"):
            sheet = self.repo.upsert_fields(page_id, fields, self.clock())

        self.cache.invalidate(self._cache_key(page_id))
        logger.info("Contacts saved", page_id=page_id, fields=sorted(fields))
        return sheet

    def delete(self, page_id: str) -> bool:
        """Delete the contact sheet of a page."""
        with store_errors("delete contacts"):
            deleted = self.repo.delete_by_page_id(page_id)
        self.cache.invalidate(self._cache_key(page_id))
        logger.info("Contacts deleted", page_id=page_id, deleted=deleted)
        return deleted


# Singleton instance, kept for the lifetime of the container
_contact_service: ContactService | None = None


def get_contact_service() -> ContactService:
    """Get the global ContactService instance.

    Returns:
        ContactService instance.
    """
    global _contact_service
    if _contact_service is None:
        _contact_service = ContactService()
    return _contact_service
