"""Page settings model - one record per wedding page."""

from typing import Any, ClassVar, Literal

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, field_validator

from weddingpage.models.account import Account
from weddingpage.models.base import BaseModel, check_iso_date

Toggle = Literal["on", "off"]

CONTENT_FIELDS = (
    "groom_name",
    "bride_name",
    "groom_name_kr",
    "bride_name_kr",
    "last_groom_name_kr",
    "last_bride_name_kr",
    "groom_name_en",
    "bride_name_en",
    "last_groom_name_en",
    "last_bride_name_en",
    "wedding_date",
    "wedding_hour",
    "wedding_minute",
    "venue_name",
    "venue_address",
    "venue_lat",
    "venue_lng",
    "transport_location_name",
)

PRESENTATION_FIELDS = (
    "photo_section_image_url",
    "photo_section_image_path",
    "photo_section_location",
    "photo_section_overlay_position",
    "photo_section_overlay_color",
    "photo_section_locale",
    "highlight_shape",
    "highlight_color",
    "highlight_text_color",
    "kko_img",
    "kko_title",
    "kko_date",
)

TOGGLE_FIELDS = (
    "gallery_type",
    "gallery_zoom",
    "bgm_url",
    "bgm_type",
    "bgm_autoplay",
    "rsvp",
    "comments",
    "info",
    "account",
)

# Write allowlist
MUTABLE_FIELDS = frozenset(CONTENT_FIELDS + PRESENTATION_FIELDS + TOGGLE_FIELDS)

# Fields the approval step may fill
APPROVAL_SEED_FIELDS = ("wedding_date", "groom_name_en", "bride_name_en")

# NOT NULL column
BGM_AUTOPLAY_FIELD = "bgm_autoplay"


class PageSettingsFields(PydanticBaseModel):
    """Every mutable settings field, all optional."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    # Names
    groom_name: str | None = None
    bride_name: str | None = None
    groom_name_kr: str | None = None
    bride_name_kr: str | None = None
    last_groom_name_kr: str | None = None
    last_bride_name_kr: str | None = None
    groom_name_en: str | None = None
    bride_name_en: str | None = None
    last_groom_name_en: str | None = None
    last_bride_name_en: str | None = None

    # Date and venue
    wedding_date: str | None = Field(None, description="YYYY-MM-DD")
    wedding_hour: str | None = None
    wedding_minute: str | None = None
    venue_name: str | None = None
    venue_address: str | None = None
    venue_lat: float | None = Field(None, allow_inf_nan=False)
    venue_lng: float | None = Field(None, allow_inf_nan=False)
    transport_location_name: str | None = None

    # Photo section
    photo_section_image_url: str | None = None
    photo_section_image_path: str | None = None
    photo_section_location: str | None = None
    photo_section_overlay_position: str | None = None
    photo_section_overlay_color: str | None = None
    photo_section_locale: str | None = None

    # Highlight
    highlight_shape: str | None = None
    highlight_color: str | None = None
    highlight_text_color: str | None = None

    # KakaoTalk share card
    kko_img: str | None = None
    kko_title: str | None = None
    kko_date: str | None = None

    # Feature toggles
    gallery_type: str | None = None
    gallery_zoom: Toggle | None = None
    bgm_url: str | None = None
    bgm_type: str | None = None
    bgm_autoplay: bool | None = None
    rsvp: Toggle | None = None
    comments: Toggle | None = None
    info: Toggle | None = None
    account: Toggle | None = None

    @field_validator("wedding_date", mode="before")
    @classmethod
    def normalize_wedding_date(cls, v: Any) -> Any:
        """Empty strings become null; anything else must be a YYYY-MM-DD string."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if not isinstance(v, str):
            raise ValueError("must be a date in YYYY-MM-DD format")
        return check_iso_date(v.strip())


class PageSettings(BaseModel, PageSettingsFields):
    """Page settings entity.

    Key Pattern:
        PK: PAGE#{page_id}
        SK: SETTINGS
    """

    _pk_prefix: ClassVar[str] = "PAGE#"
    _sk_prefix: ClassVar[str] = "SETTINGS"

    page_id: str = Field(..., min_length=1, description="Stable page identifier")
    bgm_autoplay: bool = Field(default=False, description="NOT NULL")

    def get_pk(self) -> str:
        """Get partition key: PAGE#{page_id}."""
        return f"PAGE#{self.page_id}"

    def get_sk(self) -> str:
        """Get sort key: SETTINGS."""
        return "SETTINGS"


class PageSettingsUpdate(PageSettingsFields):
    """Write payload: unknown keys are ignored, known keys are type-checked."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class SettingsWriteRequest(PydanticBaseModel):
    """Body of a settings update."""

    page_id: str | None = Field(None, alias="pageId")
    settings: dict[str, Any]

    model_config = ConfigDict(populate_by_name=True)


def build_default_settings(page_id: str, account: Account | None = None) -> PageSettings:
    """Build the default settings record for a new page.

    This is the only place defaults are defined; bootstrap and any reset
    path share it.

    Args:
        page_id: The page identifier.
        account: Account assigned to the page, used to seed wedding fields.

    Returns:
        Unsaved PageSettings.
    """
    seed = account.wedding_fields() if account else {}

    return PageSettings(
        page_id=page_id,
        wedding_date=seed.get("wedding_date"),
        groom_name_en=seed.get("groom_name_en"),
        bride_name_en=seed.get("bride_name_en"),
        wedding_hour="14",
        wedding_minute="00",
        photo_section_overlay_position="bottom",
        photo_section_overlay_color="#ffffff",
        photo_section_locale="en",
        highlight_shape="circle",
        highlight_color="#e0e0e0",
        highlight_text_color="black",
        gallery_type="thumbnail",
        gallery_zoom="off",
        bgm_url="",
        bgm_type="",
        bgm_autoplay=False,
        rsvp="off",
        comments="off",
        info="off",
        account="off",
    )
