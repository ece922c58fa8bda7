"""Account models owned by the identity subsystem.

The settings service only reads accounts (to resolve handles and seed new
pages); approval and teardown live in the user management handler.
"""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel as PydanticBaseModel, Field, field_validator

from weddingpage.models.base import BaseModel, check_iso_date, generate_ulid


class Role(str, Enum):
    """Account role."""

    ADMIN = "admin"
    USER = "user"

    @classmethod
    def parse(cls, value: "Role | str | None") -> "Role":
        """Parse a role claim; a missing role means a plain user.

        Raises:
            ValueError: If the role is not recognised.
        """
        if value is None or value == "":
            return cls.USER
        if isinstance(value, Role):
            return value
        return cls(str(value).strip().lower())


class ApprovalStatus(str, Enum):
    """Account approval state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AccountSource(str, Enum):
    """Account table an account lives in, in resolution order."""

    ADMIN_USER = "admin_user"
    NAVER = "naver"


# Handle lookups try sources in this order
RESOLUTION_ORDER = (AccountSource.ADMIN_USER, AccountSource.NAVER)


class Account(BaseModel):
    """Account entity.

    Key Pattern:
        PK: ACCOUNT#{source}
        SK: ACCOUNT#{id}
        GSI1PK: USER_URL#{source}#{user_url}
        GSI1SK: {wedding_date or "-"}#{id}
        GSI2PK: ACCOUNT_PAGE#{page_id}
        GSI2SK: {source}#{id}
    """

    _pk_prefix: ClassVar[str] = "ACCOUNT#"
    _sk_prefix: ClassVar[str] = "ACCOUNT#"

    id: str = Field(default_factory=generate_ulid)
    source: AccountSource = Field(default=AccountSource.ADMIN_USER)
    username: str = Field(..., min_length=1, max_length=255)
    name: str | None = None
    user_url: str | None = Field(None, max_length=100, description="Public handle")
    page_id: str | None = Field(None, description="Assigned page, at most one")
    wedding_date: str | None = Field(None, description="YYYY-MM-DD")
    groom_name_en: str | None = None
    bride_name_en: str | None = None
    approval_status: ApprovalStatus = Field(default=ApprovalStatus.PENDING)
    role: Role = Field(default=Role.USER)
    is_active: bool = False

    @field_validator("user_url")
    @classmethod
    def normalize_user_url(cls, v: str | None) -> str | None:
        """Strip whitespace; an empty handle means none."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("wedding_date")
    @classmethod
    def validate_wedding_date(cls, v: str | None) -> str | None:
        """Require YYYY-MM-DD calendar dates."""
        if not v:
            return None
        return check_iso_date(v)

    def get_pk(self) -> str:
        """Get partition key: ACCOUNT#{source}."""
        return f"ACCOUNT#{self.source}"

    def get_sk(self) -> str:
        """Get sort key: ACCOUNT#{id}."""
        return f"ACCOUNT#{self.id}"

    def get_gsi1_keys(self) -> dict[str, str] | None:
        """Get GSI1 keys for handle lookup (if the account has a handle)."""
        if not self.user_url:
            return None
        return {
            "GSI1PK": f"USER_URL#{self.source}#{self.user_url}",
            "GSI1SK": f"{self.wedding_date or '-'}#{self.id}",
        }

    def get_gsi2_keys(self) -> dict[str, str] | None:
        """Get GSI2 keys for page lookup (if a page is assigned)."""
        if not self.page_id:
            return None
        return {
            "GSI2PK": f"ACCOUNT_PAGE#{self.page_id}",
            "GSI2SK": f"{self.source}#{self.id}",
        }

    def wedding_fields(self) -> dict[str, str | None]:
        """Fields used to seed a page's settings."""
        return {
            "wedding_date": self.wedding_date,
            "groom_name_en": self.groom_name_en,
            "bride_name_en": self.bride_name_en,
        }


class ApproveAccountRequest(PydanticBaseModel):
    """Request model for approving or rejecting an account."""

    user_id: str = Field(..., alias="userId", min_length=1)
    source: AccountSource = Field(default=AccountSource.ADMIN_USER)
    status: ApprovalStatus
    page_id: str | None = Field(None, alias="pageId")

    model_config = {"populate_by_name": True}


class DeleteAccountRequest(PydanticBaseModel):
    """Request model for tearing down an account."""

    user_id: str = Field(..., alias="userId", min_length=1)
    source: AccountSource = Field(default=AccountSource.ADMIN_USER)

    model_config = {"populate_by_name": True}
