"""Tests for the settings write allowlist."""

import pytest

from weddingpage.models.page_settings import MUTABLE_FIELDS
from weddingpage.services.field_sanitizer import sanitize_settings
from weddingpage.utils.exceptions import ValidationError


class TestSanitizeSettings:
    """Tests for sanitize_settings."""

    def test_drops_unknown_keys(self):
        result = sanitize_settings(
            {
                "rsvp": "on",
                "groom_name": "Minho",
                "is_admin": True,
                "PK": "PAGE#other",
                "page_id": "other",
            }
        )

        assert result == {"rsvp": "on", "groom_name": "Minho"}
        assert set(result) <= MUTABLE_FIELDS

    def test_keeps_only_present_keys(self):
        assert sanitize_settings({}) == {}
        assert sanitize_settings({"venue_name": "Grand Hall"}) == {"venue_name": "Grand Hall"}

    def test_empty_wedding_date_becomes_none(self):
        assert sanitize_settings({"wedding_date": ""}) == {"wedding_date": None}

    def test_explicit_null_is_kept(self):
        assert sanitize_settings({"kko_title": None}) == {"kko_title": None}

    def test_numbers_coerced_for_text_fields(self):
        result = sanitize_settings({"wedding_hour": 14, "wedding_minute": 30, "venue_lat": "37.5"})

        assert result == {"wedding_hour": "14", "wedding_minute": "30", "venue_lat": 37.5}

    def test_idempotent(self):
        payload = {
            "wedding_date": "",
            "wedding_hour": 9,
            "bgm_autoplay": "true",
            "highlight_color": "#ff0000",
            "unknown": "x",
        }

        once = sanitize_settings(payload)

        assert sanitize_settings(once) == once
        assert once["bgm_autoplay"] is True

    def test_invalid_toggle(self):
        with pytest.raises(ValidationError) as exc_info:
            sanitize_settings({"comments": "yes"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.errors[0]["field"] == "comments"

    @pytest.mark.parametrize("value", ["2026-02-30", "20261221", 20261221, "2026-1-5", "2026-12-21T10:00"])
    def test_invalid_wedding_date(self, value):
        with pytest.raises(ValidationError) as exc_info:
            sanitize_settings({"wedding_date": value})

        assert exc_info.value.errors[0]["field"] == "wedding_date"

    def test_wedding_date_is_trimmed(self):
        assert sanitize_settings({"wedding_date": " 2026-12-21 "}) == {"wedding_date": "2026-12-21"}

    @pytest.mark.parametrize("field", ["venue_lat", "venue_lng"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "-Infinity"])
    def test_non_finite_coordinates_rejected(self, field, value):
        with pytest.raises(ValidationError) as exc_info:
            sanitize_settings({field: value})

        assert exc_info.value.errors[0]["field"] == field

    @pytest.mark.parametrize("payload", [None, [], "rsvp=on", 3])
    def test_non_object_payload(self, payload):
        with pytest.raises(ValidationError):
            sanitize_settings(payload)
