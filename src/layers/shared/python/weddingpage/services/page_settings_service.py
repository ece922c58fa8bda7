"""Page settings service.

Owns the lifecycle of a page's settings record: lazy bootstrap on first
read, partial saves, and the gap-filling seed applied when an account is
approved.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import structlog
from botocore.exceptions import ClientError

from weddingpage.models.account import Account
from weddingpage.models.base import utc_now
from weddingpage.models.page_settings import (
    APPROVAL_SEED_FIELDS,
    BGM_AUTOPLAY_FIELD,
    MUTABLE_FIELDS,
    PageSettings,
    build_default_settings,
)
from weddingpage.repositories.account import AccountRepository
from weddingpage.repositories.base import store_errors
from weddingpage.repositories.page_settings import PageSettingsRepository
from weddingpage.services.field_sanitizer import sanitize_settings
from weddingpage.services.image_url import public_image_url, storage_public_url
from weddingpage.utils.exceptions import ConflictError, StoreError

logger = structlog.get_logger()


@dataclass
class SeedResult:
    """Outcome of an approval seed."""

    settings: PageSettings | None
    applied: bool
    seeded_fields: list[str] = field(default_factory=list)


def _is_unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class PageSettingsService:
    """Reads and writes page settings records."""

    def __init__(
        self,
        settings_repo: PageSettingsRepository | None = None,
        account_repo: AccountRepository | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize page settings service.

        Args:
            settings_repo: Settings repository.
            account_repo: Account repository, used to seed new records.
            clock: Source of the current time.
        """
        self.settings_repo = settings_repo or PageSettingsRepository()
        self.account_repo = account_repo or AccountRepository()
        self.clock = clock

    def find(self, page_id: str) -> PageSettings | None:
        """Return the settings of a page without creating them."""
        with store_errors("read settings"):
            return self.settings_repo.get_by_page_id(page_id)

    def get_or_create(self, page_id: str) -> PageSettings:
        """Return the settings of a page, creating the defaults on first read.

        Two concurrent first reads both end up with the same record: the
        loser of the conditional insert re-reads the winner's row.

        Args:
            page_id: The page identifier.

        Returns:
            The stored settings.

        Raises:
            StoreError: If the store fails.
        """
        with store_errors("read settings"):
            settings = self.settings_repo.get_by_page_id(page_id)
        if settings:
            return settings

        defaults = build_default_settings(page_id, self._account_for(page_id))
        now = self.clock()
        defaults.created_at = now
        defaults.updated_at = now

        try:
            with store_errors("create settings"):
                created = self.settings_repo.create_settings(defaults)
            logger.info("Settings bootstrapped", page_id=page_id)
            return created
        except ConflictError:
            logger.info("Settings created concurrently, re-reading", page_id=page_id)

        with store_errors("read settings"):
            winner = self.settings_repo.get_by_page_id(page_id)
        if winner is None:
            raise StoreError(
                "Settings record vanished after a concurrent create",
                code="STORE_INCONSISTENT",
                details={"page_id": page_id},
            )
        return winner

    def save(self, page_id: str, fields: dict[str, Any]) -> PageSettings:
        """Persist a partial settings update.

        Fields absent from ``fields`` keep their stored values. A missing or
        null bgm_autoplay is carried forward from the stored record (false
        when there is none). A new image path without an explicit URL also
        sets the derived public URL. When the page has no record yet the
        defaults are written alongside, without overriding supplied fields.

        Args:
            page_id: The page identifier.
            fields: Sanitized settings fields.

        Returns:
            The record after the write.

        Raises:
            StoreError: If the store fails.
        """
        final = dict(fields)

        path = final.get("photo_section_image_path")
        if path and not final.get("photo_section_image_url"):
            url = storage_public_url(path)
            if url:
                final["photo_section_image_url"] = url

        with store_errors("read bgm_autoplay"):
            exists, stored = self.settings_repo.get_field(page_id, BGM_AUTOPLAY_FIELD)

        if final.get(BGM_AUTOPLAY_FIELD) is None:
            final[BGM_AUTOPLAY_FIELD] = bool(stored) if stored is not None else False

        defaults = {} if exists else self._defaults_for(page_id, exclude=final.keys())

        with store_errors("save settings"):
            settings = self.settings_repo.upsert_fields(page_id, final, self.clock(), defaults=defaults)

        logger.info("Settings saved", page_id=page_id, fields=sorted(final), bootstrapped=not exists)
        return settings

    def seed_on_approval(self, page_id: str, wedding_fields: dict[str, Any]) -> SeedResult:
        """Fill empty wedding fields from an approved account.

        Only wedding_date, groom_name_en and bride_name_en are considered.
        A field is written only when the stored value is null or empty and
        the incoming value is not; tenant edits are never overwritten.

        Args:
            page_id: The page identifier.
            wedding_fields: Values from the approved account.

        Returns:
            SeedResult describing what was written.

        Raises:
            ValidationError: If wedding_date is not an ISO date.
            StoreError: If the store fails.
        """
        incoming = {
            k: v
            for k, v in sanitize_settings(
                {k: wedding_fields.get(k) for k in APPROVAL_SEED_FIELDS}
            ).items()
            if not _is_unset(v)
        }

        with store_errors("read settings"):
            existing = self.settings_repo.get_by_page_id(page_id)

        if existing is None and incoming:
            seeded = build_default_settings(page_id).model_copy(update=incoming)
            now = self.clock()
            seeded.created_at = now
            seeded.updated_at = now
            try:
                with store_errors("create settings"):
                    self.settings_repo.create_settings(seeded)
                logger.info("Settings seeded on approval", page_id=page_id, fields=sorted(incoming))
                return SeedResult(seeded, True, sorted(incoming))
            except ConflictError:
                with store_errors("read settings"):
                    existing = self.settings_repo.get_by_page_id(page_id)

        gaps = {
            k: v
            for k, v in incoming.items()
            if existing is None or _is_unset(getattr(existing, k))
        }
        if not gaps:
            logger.info("Approval seed skipped, nothing to fill", page_id=page_id)
            return SeedResult(existing, False, [])

        settings = self.save(page_id, gaps)
        logger.info("Settings seeded on approval", page_id=page_id, fields=sorted(gaps))
        return SeedResult(settings, True, sorted(gaps))

    def to_response(self, settings: PageSettings) -> dict[str, Any]:
        """Serialize a record with its derived image URL."""
        data = settings.model_dump(mode="json")
        data["photo_section_image_public_url"] = public_image_url(settings)
        return data

    def _account_for(self, page_id: str) -> Account | None:
        """Best-effort lookup of the account that owns a page."""
        try:
            return self.account_repo.get_by_page_id(page_id)
        except ClientError as e:
            logger.warning("Account lookup failed, using bare defaults", page_id=page_id, error=str(e))
            return None

    def _defaults_for(self, page_id: str, exclude: Iterable[str]) -> dict[str, Any]:
        """Default field values for a record created by a partial write."""
        defaults = build_default_settings(page_id, self._account_for(page_id))
        return defaults.model_dump(
            mode="json",
            include=set(MUTABLE_FIELDS) - set(exclude),
            exclude_none=True,
        )
