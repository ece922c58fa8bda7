"""Pydantic models for wedding page entities."""

from weddingpage.models.base import BaseModel, TimestampMixin
from weddingpage.models.account import (
    Account,
    AccountSource,
    ApprovalStatus,
    ApproveAccountRequest,
    DeleteAccountRequest,
    RESOLUTION_ORDER,
    Role,
)
from weddingpage.models.page_settings import (
    APPROVAL_SEED_FIELDS,
    BGM_AUTOPLAY_FIELD,
    MUTABLE_FIELDS,
    PageSettings,
    PageSettingsUpdate,
    SettingsWriteRequest,
    build_default_settings,
)
from weddingpage.models.child_item import (
    ChildItem,
    ChildItemInput,
    ChildListKind,
    ReplaceListRequest,
)
from weddingpage.models.contact import (
    CONTACT_FIELDS,
    ContactSheet,
    ContactSheetUpdate,
)
from weddingpage.models.rsvp import (
    Attendance,
    GuestSide,
    MealPlan,
    RsvpResponse,
    SubmitRsvpRequest,
)
from weddingpage.models.comment import (
    CreateCommentRequest,
    DeleteCommentRequest,
    GuestComment,
)

__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    # Account
    "Account",
    "AccountSource",
    "ApprovalStatus",
    "ApproveAccountRequest",
    "DeleteAccountRequest",
    "RESOLUTION_ORDER",
    "Role",
    # Page settings
    "APPROVAL_SEED_FIELDS",
    "BGM_AUTOPLAY_FIELD",
    "MUTABLE_FIELDS",
    "PageSettings",
    "PageSettingsUpdate",
    "SettingsWriteRequest",
    "build_default_settings",
    # Child lists
    "ChildItem",
    "ChildItemInput",
    "ChildListKind",
    "ReplaceListRequest",
    # Contacts
    "CONTACT_FIELDS",
    "ContactSheet",
    "ContactSheetUpdate",
    # RSVP
    "Attendance",
    "GuestSide",
    "MealPlan",
    "RsvpResponse",
    "SubmitRsvpRequest",
    # Guestbook
    "CreateCommentRequest",
    "DeleteCommentRequest",
    "GuestComment",
]
