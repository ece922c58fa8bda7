"""RSVP responses submitted by wedding guests."""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, field_validator

from weddingpage.models.base import BaseModel, generate_ulid


class GuestSide(str, Enum):
    """Which family invited the guest."""

    GROOM = "신랑측"
    BRIDE = "신부측"


class Attendance(str, Enum):
    """Whether the guest will attend."""

    ATTENDING = "참석"
    NOT_ATTENDING = "미참석"


class MealPlan(str, Enum):
    """Whether the guest will stay for the meal."""

    YES = "식사 가능"
    NO = "식사 불가"


class RsvpFields(PydanticBaseModel):
    """Guest-supplied RSVP fields."""

    guest_name: str = Field(..., min_length=1, max_length=50)
    guest_type: GuestSide
    relation_type: Attendance
    meal_time: MealPlan
    guest_count: int = Field(default=1, ge=1, le=20, description="Party size including the guest")
    phone_number: str = Field(..., min_length=1, max_length=20)
    consent_personal_info: bool = False

    @field_validator("guest_name", "phone_number", mode="before")
    @classmethod
    def strip_text(cls, v):
        """Trim surrounding whitespace."""
        return v.strip() if isinstance(v, str) else v


class RsvpResponse(BaseModel, RsvpFields):
    """RSVP response entity.

    Key Pattern:
        PK: PAGE#{page_id}
        SK: RSVP#{id}

    Ids are ULIDs, so sort key order is submission order.
    """

    _pk_prefix: ClassVar[str] = "PAGE#"
    _sk_prefix: ClassVar[str] = "RSVP#"

    id: str = Field(default_factory=generate_ulid)
    page_id: str = Field(..., min_length=1)

    def get_pk(self) -> str:
        """Get partition key: PAGE#{page_id}."""
        return f"PAGE#{self.page_id}"

    def get_sk(self) -> str:
        """Get sort key: RSVP#{id}."""
        return f"RSVP#{self.id}"


class SubmitRsvpRequest(RsvpFields):
    """Request model for submitting an RSVP."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_default=True)

    page_id: str = Field(..., min_length=1, alias="pageId")

    @field_validator("consent_personal_info")
    @classmethod
    def require_consent(cls, v: bool) -> bool:
        """Guests must agree to the collection of their contact details."""
        if not v:
            raise ValueError("Consent to the collection of personal information is required")
        return v
