"""Wedding contact sheet shown by the contact/account disclosure widgets."""

from typing import ClassVar

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field

from weddingpage.models.base import BaseModel

# Each person on the sheet has a name, phone, bank and account number
CONTACT_PEOPLE = (
    "groom",
    "groom_father",
    "groom_mother",
    "bride",
    "bride_father",
    "bride_mother",
)
CONTACT_ATTRIBUTES = ("name", "phone", "bank", "account")

CONTACT_FIELDS = frozenset(
    f"{person}_{attr}" for person in CONTACT_PEOPLE for attr in CONTACT_ATTRIBUTES
)


class ContactFields(PydanticBaseModel):
    """Every mutable contact field, all optional."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    groom_name: str | None = None
    groom_phone: str | None = None
    groom_bank: str | None = None
    groom_account: str | None = None
    groom_father_name: str | None = None
    groom_father_phone: str | None = None
    groom_father_bank: str | None = None
    groom_father_account: str | None = None
    groom_mother_name: str | None = None
    groom_mother_phone: str | None = None
    groom_mother_bank: str | None = None
    groom_mother_account: str | None = None
    bride_name: str | None = None
    bride_phone: str | None = None
    bride_bank: str | None = None
    bride_account: str | None = None
    bride_father_name: str | None = None
    bride_father_phone: str | None = None
    bride_father_bank: str | None = None
    bride_father_account: str | None = None
    bride_mother_name: str | None = None
    bride_mother_phone: str | None = None
    bride_mother_bank: str | None = None
    bride_mother_account: str | None = None


class ContactSheet(BaseModel, ContactFields):
    """Contact sheet entity.

    Key Pattern:
        PK: PAGE#{page_id}
        SK: CONTACT
    """

    _pk_prefix: ClassVar[str] = "PAGE#"
    _sk_prefix: ClassVar[str] = "CONTACT"

    page_id: str = Field(..., min_length=1)

    def get_pk(self) -> str:
        """Get partition key: PAGE#{page_id}."""
        return f"PAGE#{self.page_id}"

    def get_sk(self) -> str:
        """Get sort key: CONTACT."""
        return "CONTACT"


class ContactSheetUpdate(ContactFields):
    """Write payload: unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)
