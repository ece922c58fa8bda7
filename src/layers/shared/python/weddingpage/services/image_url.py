"""Derived public URL for the photo section image."""

import os
from datetime import datetime

import structlog

from weddingpage.models.page_settings import PageSettings

logger = structlog.get_logger()


def storage_public_url(path: str) -> str | None:
    """Join the public storage prefix with an object path.

    Args:
        path: Object path inside the public bucket.

    Returns:
        Public URL, or None when no prefix is configured.
    """
    prefix = os.environ.get("PUBLIC_STORAGE_BASE_URL", "").rstrip("/")
    if not prefix:
        logger.warning("PUBLIC_STORAGE_BASE_URL not configured", path=path)
        return None
    return f"{prefix}/{path.lstrip('/')}"


def cache_bust(url: str, updated_at: datetime) -> str:
    """Append a version parameter derived from a timestamp."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}v={int(updated_at.timestamp() * 1000)}"


def public_image_url(settings: PageSettings) -> str:
    """Compute the cache-busted public URL of the photo section image.

    An explicit URL wins over a stored path. The version marker changes
    whenever the record's updated_at changes.

    Args:
        settings: The settings record.

    Returns:
        The URL, or an empty string if the page has no image.
    """
    base = settings.photo_section_image_url or None
    if not base and settings.photo_section_image_path:
        base = storage_public_url(settings.photo_section_image_path)
    if not base:
        return ""
    return cache_bust(base, settings.updated_at)
