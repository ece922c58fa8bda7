"""Service classes for business logic."""

from weddingpage.services.account_teardown import teardown_account
from weddingpage.services.child_list_service import ChildListService
from weddingpage.services.contact_service import ContactService, get_contact_service
from weddingpage.services.date_token import format_date_token, parse_date_token
from weddingpage.services.field_sanitizer import sanitize_settings
from weddingpage.services.guestbook_service import GuestbookService
from weddingpage.services.identity_resolver import IdentityResolver
from weddingpage.services.image_url import public_image_url, storage_public_url
from weddingpage.services.page_settings_service import PageSettingsService, SeedResult
from weddingpage.services.rsvp_service import RsvpService, summarize_responses

__all__ = [
    "ChildListService",
    "ContactService",
    "GuestbookService",
    "IdentityResolver",
    "PageSettingsService",
    "RsvpService",
    "SeedResult",
    "format_date_token",
    "get_contact_service",
    "parse_date_token",
    "public_image_url",
    "sanitize_settings",
    "storage_public_url",
    "summarize_responses",
    "teardown_account",
]
