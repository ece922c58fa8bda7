"""Guestbook: public comments protected by an author password."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from weddingpage.models.base import utc_now
from weddingpage.models.comment import CreateCommentRequest, DeleteCommentRequest, GuestComment
from weddingpage.repositories.base import store_errors
from weddingpage.repositories.comment import CommentRepository
from weddingpage.utils.exceptions import ForbiddenError, NotFoundError, ValidationError
from weddingpage.utils.passwords import hash_password, verify_password

logger = structlog.get_logger()

DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 50


@dataclass
class CommentPage:
    """One page of a guestbook listing."""

    items: list[GuestComment]
    count: int
    page: int
    items_per_page: int


class GuestbookService:
    """Posts, lists and deletes guestbook comments."""

    def __init__(
        self,
        repo: CommentRepository | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repo = repo or CommentRepository()
        self.clock = clock

    def post(self, payload: Any) -> GuestComment:
        """Post a comment.

        Raises:
            ValidationError: If a field is missing or too long.
            StoreError: If the store fails.
        """
        try:
            request = CreateCommentRequest.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e)

        now = self.clock()
        comment = GuestComment(
            page_id=request.page_id,
            name=request.name,
            comment=request.comment,
            password_hash=hash_password(request.password),
            created_at=now,
            updated_at=now,
        )

        with store_errors("create comment"):
            self.repo.create_comment(comment)

        logger.info("Comment posted", page_id=comment.page_id, comment_id=comment.id)
        return comment

    def list_page(self, page_id: str, page: int = 1, items_per_page: int = DEFAULT_PAGE_SIZE) -> CommentPage:
        """List one page of comments, newest first.

        Args:
            page_id: The wedding page.
            page: 1-based page number.
            items_per_page: Page size, at most MAX_PAGE_SIZE.

        Raises:
            ValidationError: If the paging values are out of range.
        """
        if page < 1 or not 1 <= items_per_page <= MAX_PAGE_SIZE:
            raise ValidationError(
                "Invalid pagination",
                errors=[
                    {"field": "page", "message": "Must be at least 1"},
                    {"field": "itemsPerPage", "message": f"Must be between 1 and {MAX_PAGE_SIZE}"},
                ],
            )

        with store_errors("list comments"):
            comments = self.repo.list_by_page(page_id)

        start = (page - 1) * items_per_page
        return CommentPage(
            items=comments[start : start + items_per_page],
            count=len(comments),
            page=page,
            items_per_page=items_per_page,
        )

    def delete(self, payload: Any) -> str:
        """Delete a comment when the author's password matches.

        Returns:
            The deleted comment's id.

        Raises:
            NotFoundError: If the comment does not exist on the page.
            ForbiddenError: If the password does not match.
        """
        try:
            request = DeleteCommentRequest.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e)

        with store_errors("read comment"):
            comment = self.repo.get_by_id(request.page_id, request.id)
        if not comment:
            raise NotFoundError("Comment", request.id)

        if not verify_password(request.password, comment.password_hash):
            logger.warning("Comment delete refused", page_id=request.page_id, comment_id=request.id)
            raise ForbiddenError("Password does not match")

        with store_errors("delete comment"):
            deleted = self.repo.delete_comment(request.page_id, request.id)
        if not deleted:
            raise NotFoundError("Comment", request.id)

        logger.info("Comment deleted", page_id=request.page_id, comment_id=request.id)
        return request.id
