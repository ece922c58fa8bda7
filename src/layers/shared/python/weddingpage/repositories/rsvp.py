"""RSVP response repository for DynamoDB operations."""

from weddingpage.models.rsvp import RsvpResponse
from weddingpage.repositories.base import BaseRepository


class RsvpRepository(BaseRepository[RsvpResponse]):
    """Repository for RsvpResponse entities stored under a page partition."""

    def __init__(self, table_name: str | None = None):
        """Initialize RSVP repository."""
        super().__init__(RsvpResponse, table_name)

    def list_by_page(self, page_id: str) -> list[RsvpResponse]:
        """List every response of a page, newest first."""
        items = self.query_all(f"PAGE#{page_id}", sk_begins_with="RSVP#")
        return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)

    def create_response(self, response: RsvpResponse) -> RsvpResponse:
        """Store a new response."""
        return self.create(response)

    def delete_all(self, page_id: str) -> int:
        """Delete every response of a page.

        Returns:
            Number of responses deleted.
        """
        items = self.query_all(f"PAGE#{page_id}", sk_begins_with="RSVP#")
        self.batch_delete([(item.get_pk(), item.get_sk()) for item in items])
        return len(items)
