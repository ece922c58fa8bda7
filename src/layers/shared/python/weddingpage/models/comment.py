"""Guestbook comments left on a wedding page."""

from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel as PydanticBaseModel, ConfigDict, Field, field_validator

from weddingpage.models.base import BaseModel, generate_ulid

# bcrypt accepts at most 72 bytes of password
MAX_PASSWORD_BYTES = 72


class GuestComment(BaseModel):
    """Guestbook comment entity.

    Key Pattern:
        PK: PAGE#{page_id}
        SK: COMMENT#{id}

    The password only lets the author delete the comment; it is stored as a
    bcrypt hash and never returned.
    """

    _pk_prefix: ClassVar[str] = "PAGE#"
    _sk_prefix: ClassVar[str] = "COMMENT#"

    id: str = Field(default_factory=generate_ulid)
    page_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=50)
    comment: str = Field(..., min_length=1, max_length=1000)
    password_hash: str = Field(..., min_length=1)

    def get_pk(self) -> str:
        """Get partition key: PAGE#{page_id}."""
        return f"PAGE#{self.page_id}"

    def get_sk(self) -> str:
        """Get sort key: COMMENT#{id}."""
        return f"COMMENT#{self.id}"

    def to_public(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return self.model_dump(mode="json", exclude={"password_hash"})


def _check_password(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


Password = Annotated[str, Field(min_length=1), AfterValidator(_check_password)]


class CreateCommentRequest(PydanticBaseModel):
    """Request model for posting a comment."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page_id: str = Field(..., min_length=1, alias="pageId")
    name: str = Field(..., min_length=1, max_length=50)
    comment: str = Field(..., min_length=1, max_length=1000)
    password: Password

    @field_validator("name", "comment", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class DeleteCommentRequest(PydanticBaseModel):
    """Request model for deleting a comment."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page_id: str = Field(..., min_length=1, alias="pageId")
    id: str = Field(..., min_length=1)
    password: Password
