"""RSVP submission and the couple's attendee overview."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from weddingpage.models.base import utc_now
from weddingpage.models.rsvp import (
    Attendance,
    GuestSide,
    MealPlan,
    RsvpResponse,
    SubmitRsvpRequest,
)
from weddingpage.repositories.base import store_errors
from weddingpage.repositories.rsvp import RsvpRepository
from weddingpage.utils.exceptions import ValidationError

logger = structlog.get_logger()


def summarize_responses(responses: list[RsvpResponse]) -> dict[str, int]:
    """Headcounts shown above the attendee list.

    Guest totals count whole parties (``guest_count``) of attending guests;
    the other figures count responses.
    """
    attending = [r for r in responses if r.relation_type == Attendance.ATTENDING.value]
    return {
        "total": len(responses),
        "attending": len(attending),
        "not_attending": len(responses) - len(attending),
        "groom_side": sum(1 for r in responses if r.guest_type == GuestSide.GROOM.value),
        "bride_side": sum(1 for r in responses if r.guest_type == GuestSide.BRIDE.value),
        "total_guests": sum(r.guest_count for r in attending),
        "meal_guests": sum(r.guest_count for r in attending if r.meal_time == MealPlan.YES.value),
    }


class RsvpService:
    """Stores guest responses and lists them for the couple."""

    def __init__(
        self,
        repo: RsvpRepository | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repo = repo or RsvpRepository()
        self.clock = clock

    def submit(self, payload: Any) -> RsvpResponse:
        """Store a guest's response.

        Raises:
            ValidationError: If a field is missing or consent was not given.
            StoreError: If the store fails.
        """
        try:
            request = SubmitRsvpRequest.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e)

        now = self.clock()
        response = RsvpResponse(
            **request.model_dump(exclude={"page_id"}),
            page_id=request.page_id,
            created_at=now,
            updated_at=now,
        )

        with store_errors("create rsvp"):
            self.repo.create_response(response)

        logger.info(
            "RSVP submitted",
            page_id=response.page_id,
            rsvp_id=response.id,
            attending=response.relation_type == Attendance.ATTENDING.value,
        )
        return response

    def list_responses(self, page_id: str, attending_only: bool = False) -> list[RsvpResponse]:
        """List a page's responses, newest first."""
        with store_errors("list rsvps"):
            responses = self.repo.list_by_page(page_id)
        if attending_only:
            responses = [r for r in responses if r.relation_type == Attendance.ATTENDING.value]
        return responses
