"""Tests for the page settings API handler."""

import json

import pytest

PAGE_ID = "page-001"
OTHER_PAGE_ID = "page-999"


def _parse_body(response: dict) -> dict:
    """Parse JSON response body."""
    return json.loads(response["body"])


class TestGetSettings:
    """Tests for public settings reads."""

    def test_get_by_page_id_bootstraps(self, dynamodb_table, api_gateway_event):
        from api.page_settings import handler

        response = handler(api_gateway_event(query_params={"pageId": PAGE_ID}), None)

        assert response["statusCode"] == 200
        assert response["headers"]["Cache-Control"].startswith("no-store")
        body = _parse_body(response)
        assert body["success"] is True
        data = body["data"]
        assert data["page_id"] == PAGE_ID
        assert data["gallery_type"] == "thumbnail"
        assert data["bgm_autoplay"] is False
        assert data["photo_section_image_public_url"] == ""

    def test_get_by_handle_and_date(self, make_account, api_gateway_event):
        from api.page_settings import handler

        make_account(id="a1", user_url="kim", page_id="page-may", wedding_date="2026-05-01")
        make_account(id="a2", user_url="kim", page_id="page-dec", wedding_date="2026-12-21")

        response = handler(api_gateway_event(query_params={"userUrl": "kim", "date": "261221"}), None)

        assert response["statusCode"] == 200
        assert _parse_body(response)["data"]["page_id"] == "page-dec"

    def test_unknown_handle(self, dynamodb_table, api_gateway_event):
        from api.page_settings import handler

        response = handler(api_gateway_event(query_params={"userUrl": "nobody"}), None)

        assert response["statusCode"] == 404
        body = _parse_body(response)
        assert body["success"] is False
        assert body["code"] == "NOT_FOUND"

    def test_malformed_date_token(self, dynamodb_table, api_gateway_event):
        from api.page_settings import handler

        response = handler(api_gateway_event(query_params={"userUrl": "kim", "date": "260231"}), None)

        assert response["statusCode"] == 400

    def test_missing_identifier(self, dynamodb_table, api_gateway_event):
        from api.page_settings import handler

        response = handler(api_gateway_event(), None)

        assert response["statusCode"] == 400
        assert _parse_body(response)["code"] == "VALIDATION_ERROR"

    def test_invalid_token_on_read(self, dynamodb_table, api_gateway_event):
        from api.page_settings import handler

        event = api_gateway_event(query_params={"pageId": PAGE_ID}, token="garbage")

        assert handler(event, None)["statusCode"] == 401

    def test_identity_page_wins_on_read(self, dynamodb_table, api_gateway_event, user_token):
        from api.page_settings import handler

        event = api_gateway_event(query_params={"pageId": OTHER_PAGE_ID}, token=user_token)

        assert _parse_body(handler(event, None))["data"]["page_id"] == PAGE_ID

    def test_handle_read_ignores_identity_page(self, make_account, api_gateway_event, user_token):
        from api.page_settings import handler

        make_account(user_url="lee", page_id=OTHER_PAGE_ID)

        event = api_gateway_event(query_params={"userUrl": "lee"}, token=user_token)

        assert _parse_body(handler(event, None))["data"]["page_id"] == OTHER_PAGE_ID


class TestUpdateSettings:
    """Tests for settings writes."""

    def test_requires_token(self, dynamodb_table, api_gateway_event):
        from api.page_settings import handler

        event = api_gateway_event(method="POST", body={"pageId": PAGE_ID, "settings": {"rsvp": "on"}})

        assert handler(event, None)["statusCode"] == 401

    def test_user_writes_own_page(self, dynamodb_table, api_gateway_event, user_token):
        from api.page_settings import handler

        event = api_gateway_event(
            method="POST",
            body={
                "pageId": OTHER_PAGE_ID,
                "settings": {"rsvp": "on", "wedding_hour": 15, "is_admin": True},
            },
            token=user_token,
        )

        response = handler(event, None)

        assert response["statusCode"] == 200
        data = _parse_body(response)["data"]
        assert data["page_id"] == PAGE_ID
        assert data["rsvp"] == "on"
        assert data["wedding_hour"] == "15"
        assert "is_admin" not in data
        assert dynamodb_table.get_item(Key={"PK": f"PAGE#{OTHER_PAGE_ID}", "SK": "SETTINGS"}).get("Item") is None

    def test_put_preserves_bgm_autoplay(self, dynamodb_table, api_gateway_event, user_token):
        from api.page_settings import handler

        handler(api_gateway_event(method="PUT", body={"settings": {"bgm_autoplay": True}}, token=user_token), None)
        response = handler(
            api_gateway_event(method="PUT", body={"settings": {"comments": "on"}}, token=user_token),
            None,
        )

        data = _parse_body(response)["data"]
        assert data["bgm_autoplay"] is True
        assert data["comments"] == "on"

    def test_image_path_gets_public_url(self, dynamodb_table, api_gateway_event, user_token):
        from api.page_settings import handler

        event = api_gateway_event(
            method="POST",
            body={"settings": {"photo_section_image_path": "pages/p1/hero.jpg"}},
            token=user_token,
        )

        data = _parse_body(handler(event, None))["data"]

        assert data["photo_section_image_url"] == "https://cdn.example.com/public/pages/p1/hero.jpg"
        assert data["photo_section_image_public_url"].startswith(data["photo_section_image_url"] + "?v=")

    def test_user_without_page_forbidden(self, dynamodb_table, api_gateway_event, make_token):
        from api.page_settings import handler

        event = api_gateway_event(
            method="POST",
            body={"pageId": OTHER_PAGE_ID, "settings": {"rsvp": "on"}},
            token=make_token(page_id=None),
        )

        assert handler(event, None)["statusCode"] == 403

    def test_admin_writes_requested_page(self, dynamodb_table, api_gateway_event, admin_token):
        from api.page_settings import handler

        event = api_gateway_event(
            method="POST",
            query_params={"pageId": OTHER_PAGE_ID},
            body={"settings": {"rsvp": "on"}},
            token=admin_token,
        )

        assert _parse_body(handler(event, None))["data"]["page_id"] == OTHER_PAGE_ID

    def test_admin_without_page_id(self, dynamodb_table, api_gateway_event, admin_token):
        from api.page_settings import handler

        event = api_gateway_event(method="POST", body={"settings": {"rsvp": "on"}}, token=admin_token)

        assert handler(event, None)["statusCode"] == 400

    @pytest.mark.parametrize(
        "body",
        [
            {"pageId": PAGE_ID},
            {"settings": ["rsvp"]},
            {"settings": {"rsvp": "maybe"}},
            {"settings": {"wedding_date": 20261221}},
            '{"settings": {"venue_lat": NaN}}',
            "not json{",
        ],
    )
    def test_invalid_payload(self, dynamodb_table, api_gateway_event, user_token, body):
        from api.page_settings import handler

        event = api_gateway_event(method="POST", body=body, token=user_token)

        assert handler(event, None)["statusCode"] == 400


class TestRouting:
    """Tests for methods and preflight."""

    def test_options(self, api_gateway_event):
        from api.page_settings import handler

        response = handler(api_gateway_event(method="OPTIONS"), None)

        assert response["statusCode"] == 200
        assert "Access-Control-Allow-Origin" in response["headers"]

    def test_method_not_allowed(self, api_gateway_event, user_token):
        from api.page_settings import handler

        response = handler(api_gateway_event(method="DELETE", token=user_token), None)

        assert response["statusCode"] == 405

    def test_unexpected_error_is_500(self, dynamodb_table, api_gateway_event, monkeypatch):
        from api import page_settings

        def boom(*args, **kwargs):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(page_settings.PageSettingsService, "get_or_create", boom)

        response = page_settings.handler(api_gateway_event(query_params={"pageId": PAGE_ID}), None)

        assert response["statusCode"] == 500
        assert _parse_body(response)["error"] == "Internal server error"


class TestChildLists:
    """Tests for the transport and info sub-resources."""

    def test_transport_replace_and_get(self, dynamodb_table, api_gateway_event, user_token):
        from api.page_settings import handler

        post = api_gateway_event(
            method="POST",
            query_params={"transport": ""},
            body={
                "items": [
                    {"title": "Subway", "description": "Line 2, exit 3"},
                    {"title": "Bus", "description": None},
                ],
                "locationName": "Grand Hall",
                "venue_address": "123 Main St",
            },
            token=user_token,
        )
        response = handler(post, None)

        assert response["statusCode"] == 200
        data = _parse_body(response)["data"]
        assert [i["title"] for i in data["items"]] == ["Subway", "Bus"]
        assert data["transport_location_name"] == "Grand Hall"
        assert data["venue_address"] == "123 Main St"

        get = api_gateway_event(query_params={"transport": "", "pageId": PAGE_ID})
        data = _parse_body(handler(get, None))["data"]

        assert [i["title"] for i in data["items"]] == ["Subway", "Bus"]
        assert data["items"][1]["description"] == ""
        assert data["transport_location_name"] == "Grand Hall"

    def test_transport_keeps_bgm_autoplay(self, dynamodb_table, api_gateway_event, user_token):
        from api.page_settings import handler

        handler(api_gateway_event(method="POST", body={"settings": {"bgm_autoplay": True}}, token=user_token), None)
        handler(
            api_gateway_event(
                method="POST",
                query_params={"transport": ""},
                body={"items": [], "locationName": "Rose Hall"},
                token=user_token,
            ),
            None,
        )

        data = _parse_body(handler(api_gateway_event(query_params={"pageId": PAGE_ID}), None))["data"]
        assert data["bgm_autoplay"] is True
        assert data["transport_location_name"] == "Rose Hall"

    def test_info_replace_is_full(self, dynamodb_table, api_gateway_event, user_token):
        from api.page_settings import handler

        for titles in (["Parking", "Meal", "Gifts"], ["Parking only"]):
            handler(
                api_gateway_event(
                    method="PUT",
                    query_params={"info": ""},
                    body={"items": [{"title": t} for t in titles]},
                    token=user_token,
                ),
                None,
            )

        data = _parse_body(handler(api_gateway_event(query_params={"info": "", "pageId": PAGE_ID}), None))["data"]

        assert [i["title"] for i in data["items"]] == ["Parking only"]
        assert "transport_location_name" not in data

    def test_list_write_requires_items(self, dynamodb_table, api_gateway_event, user_token):
        from api.page_settings import handler

        event = api_gateway_event(method="POST", query_params={"info": ""}, body={}, token=user_token)

        assert handler(event, None)["statusCode"] == 400


class TestApprovalSeed:
    """Tests for the approval sub-resource."""

    def test_fills_empty_fields(self, dynamodb_table, api_gateway_event, admin_token):
        from api.page_settings import handler

        handler(
            api_gateway_event(
                method="POST",
                query_params={"pageId": PAGE_ID},
                body={"settings": {"groom_name_en": "Tenant Choice"}},
                token=admin_token,
            ),
            None,
        )

        response = handler(
            api_gateway_event(
                method="POST",
                query_params={"approval": "", "pageId": PAGE_ID},
                body={"settings": {"wedding_date": "2026-12-21", "groom_name_en": "Minho", "rsvp": "on"}},
                token=admin_token,
            ),
            None,
        )

        assert response["statusCode"] == 200
        data = _parse_body(response)["data"]
        assert data["applied"] is True
        assert data["seeded_fields"] == ["wedding_date"]
        assert data["settings"]["groom_name_en"] == "Tenant Choice"
        assert data["settings"]["rsvp"] == "off"

    def test_no_op(self, dynamodb_table, api_gateway_event, admin_token):
        from api.page_settings import handler

        response = handler(
            api_gateway_event(
                method="POST",
                query_params={"approval": "", "pageId": PAGE_ID},
                body={"settings": {"wedding_date": ""}},
                token=admin_token,
            ),
            None,
        )

        data = _parse_body(response)["data"]
        assert data == {"settings": None, "applied": False, "seeded_fields": []}

    def test_get_not_allowed(self, dynamodb_table, api_gateway_event):
        from api.page_settings import handler

        response = handler(api_gateway_event(query_params={"approval": "", "pageId": PAGE_ID}), None)

        assert response["statusCode"] == 405

    def test_admin_with_own_page_seeds_requested_page(
        self, dynamodb_table, api_gateway_event, make_token, settings_service
    ):
        from api.page_settings import handler

        token = make_token(user_id="admin-1", role="admin", page_id="admin-own-page")

        response = handler(
            api_gateway_event(
                method="POST",
                query_params={"approval": "", "pageId": "customer-page"},
                body={"settings": {"groom_name_en": "Minho", "bride_name_en": "Jiwoo"}},
                token=token,
            ),
            None,
        )

        assert response["statusCode"] == 200
        assert _parse_body(response)["data"]["settings"]["page_id"] == "customer-page"
        assert settings_service.find("customer-page").groom_name_en == "Minho"
        assert settings_service.find("admin-own-page") is None

    def test_requires_admin(self, dynamodb_table, api_gateway_event, user_token, settings_service):
        from api.page_settings import handler

        response = handler(
            api_gateway_event(
                method="POST",
                query_params={"approval": "", "pageId": PAGE_ID},
                body={"settings": {"groom_name_en": "Minho"}},
                token=user_token,
            ),
            None,
        )

        assert response["statusCode"] == 403
        assert settings_service.find(PAGE_ID) is None

    def test_requires_page_id(self, dynamodb_table, api_gateway_event, admin_token):
        from api.page_settings import handler

        response = handler(
            api_gateway_event(
                method="POST",
                query_params={"approval": ""},
                body={"settings": {"groom_name_en": "Minho"}},
                token=admin_token,
            ),
            None,
        )

        assert response["statusCode"] == 400
