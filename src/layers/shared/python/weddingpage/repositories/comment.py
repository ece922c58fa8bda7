"""Guestbook comment repository for DynamoDB operations."""

from weddingpage.models.comment import GuestComment
from weddingpage.repositories.base import BaseRepository


class CommentRepository(BaseRepository[GuestComment]):
    """Repository for GuestComment entities stored under a page partition."""

    def __init__(self, table_name: str | None = None):
        """Initialize comment repository."""
        super().__init__(GuestComment, table_name)

    def get_by_id(self, page_id: str, comment_id: str) -> GuestComment | None:
        """Get a comment of a page."""
        return self.get(f"PAGE#{page_id}", f"COMMENT#{comment_id}")

    def list_by_page(self, page_id: str) -> list[GuestComment]:
        """List every comment of a page, newest first."""
        items = self.query_all(f"PAGE#{page_id}", sk_begins_with="COMMENT#")
        return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)

    def create_comment(self, comment: GuestComment) -> GuestComment:
        """Store a new comment."""
        return self.create(comment)

    def delete_comment(self, page_id: str, comment_id: str) -> bool:
        """Delete a comment.

        Returns:
            True if deleted, False if not found.
        """
        return self.delete(f"PAGE#{page_id}", f"COMMENT#{comment_id}")

    def delete_all(self, page_id: str) -> int:
        """Delete every comment of a page.

        Returns:
            Number of comments deleted.
        """
        items = self.query_all(f"PAGE#{page_id}", sk_begins_with="COMMENT#")
        self.batch_delete([(item.get_pk(), item.get_sk()) for item in items])
        return len(items)
