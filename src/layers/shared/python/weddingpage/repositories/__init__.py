"""Repository classes for DynamoDB data access."""

from weddingpage.repositories.base import BaseRepository
from weddingpage.repositories.account import AccountRepository
from weddingpage.repositories.child_list import ChildListRepository
from weddingpage.repositories.comment import CommentRepository
from weddingpage.repositories.contact import ContactRepository
from weddingpage.repositories.page_settings import PageSettingsRepository
from weddingpage.repositories.rsvp import RsvpRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "ChildListRepository",
    "CommentRepository",
    "ContactRepository",
    "PageSettingsRepository",
    "RsvpRepository",
]
