"""Base Pydantic models with DynamoDB serialization."""

import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Self

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field
from ulid import ULID


def generate_ulid() -> str:
    """Generate a new ULID string."""
    return str(ULID())


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def check_iso_date(value: str) -> str:
    """Require a YYYY-MM-DD calendar date; returns the value unchanged."""
    if not _ISO_DATE.fullmatch(value):
        raise ValueError("must be a date in YYYY-MM-DD format")
    date.fromisoformat(value)
    return value


def to_dynamodb_value(value: Any) -> Any:
    """Recursively convert a JSON-ready value for DynamoDB.

    Floats become Decimal (DynamoDB requirement) and datetimes ISO strings.
    None is kept so that explicit nulls can be written.
    """
    if isinstance(value, dict):
        return {k: to_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_dynamodb_value(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def from_dynamodb_value(value: Any) -> Any:
    """Recursively convert Decimals read from DynamoDB back to int/float."""
    if isinstance(value, dict):
        return {k: from_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamodb_value(item) for item in value]
    if isinstance(value, Decimal):
        if value % 1 == 0:
            return int(value)
        return float(value)
    return value


class TimestampMixin(PydanticBaseModel):
    """Mixin for created_at and updated_at timestamps."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class BaseModel(TimestampMixin):
    """Base model with DynamoDB serialization.

    All stored entity models inherit from this class. Key attributes
    (PK, SK, GSI keys) are not model fields; they are added on write and
    ignored on read.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        validate_default=True,
        extra="ignore",
    )

    def to_dynamodb(self) -> dict[str, Any]:
        """Serialize model to DynamoDB item format.

        Unset optional attributes (None) are omitted from the item.
        """
        data = self.model_dump(mode="json", by_alias=True)
        return {k: to_dynamodb_value(v) for k, v in data.items() if v is not None}

    @classmethod
    def from_dynamodb(cls, item: dict[str, Any]) -> Self:
        """Deserialize DynamoDB item to model instance.

        ISO timestamp strings are parsed by the datetime fields themselves.
        """
        return cls.model_validate(from_dynamodb_value(item))

    def get_pk(self) -> str:
        """Get the partition key for this entity."""
        raise NotImplementedError("Subclasses must implement get_pk()")

    def get_sk(self) -> str:
        """Get the sort key for this entity."""
        raise NotImplementedError("Subclasses must implement get_sk()")

    def get_keys(self) -> dict[str, str]:
        """Get both PK and SK as a dictionary."""
        return {"PK": self.get_pk(), "SK": self.get_sk()}

    def update_timestamp(self) -> None:
        """Update the updated_at timestamp to now."""
        self.updated_at = utc_now()
