"""Ordered child list items (transport directions and info notices)."""

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, field_validator

from weddingpage.models.base import BaseModel, generate_ulid


class ChildListKind(str, Enum):
    """Ordered list sub-resources of a page."""

    TRANSPORT = "transport"
    INFO = "info"

    @property
    def sk_prefix(self) -> str:
        """Sort key prefix for rows of this kind."""
        return f"{self.value.upper()}#"


class ChildItem(BaseModel):
    """One row of an ordered child list.

    Key Pattern:
        PK: PAGE#{page_id}
        SK: {KIND}#{position:04d}
    """

    _pk_prefix: ClassVar[str] = "PAGE#"

    id: str = Field(default_factory=generate_ulid)
    page_id: str = Field(..., min_length=1)
    kind: ChildListKind
    title: str = ""
    description: str = ""
    display_order: int = Field(..., description="Render order; ties keep array position")
    position: int = Field(..., ge=0, description="Index in the submitted array")

    def get_pk(self) -> str:
        """Get partition key: PAGE#{page_id}."""
        return f"PAGE#{self.page_id}"

    def get_sk(self) -> str:
        """Get sort key: {KIND}#{position}."""
        return f"{ChildListKind(self.kind).sk_prefix}{self.position:04d}"

    def to_public(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return self.model_dump(mode="json", exclude={"kind", "position"})


class ChildItemInput(PydanticBaseModel):
    """A submitted list item."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str = ""
    description: str = ""
    display_order: int | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Null text becomes an empty string."""
        return "" if v is None else v


class ReplaceListRequest(PydanticBaseModel):
    """Body of a list replacement."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page_id: str | None = Field(None, alias="pageId")
    items: list[ChildItemInput]
    location_name: str | None = Field(None, alias="locationName")
    venue_address: str | None = None
