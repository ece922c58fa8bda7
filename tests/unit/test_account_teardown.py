"""Tests for account teardown."""

from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from weddingpage.models.account import AccountSource
from weddingpage.models.child_item import ChildItemInput, ChildListKind
from weddingpage.repositories.account import AccountRepository
from weddingpage.repositories.page_settings import PageSettingsRepository
from weddingpage.services.account_teardown import teardown_account
from weddingpage.services.child_list_service import ChildListService
from weddingpage.services.contact_service import ContactService
from weddingpage.services.guestbook_service import GuestbookService
from weddingpage.services.rsvp_service import RsvpService

PAGE_ID = "page-001"


def _seed_page(settings_service):
    settings_service.get_or_create(PAGE_ID)
    lists = ChildListService()
    lists.replace_list(PAGE_ID, ChildListKind.TRANSPORT, [ChildItemInput(title="Subway")])
    lists.replace_list(PAGE_ID, ChildListKind.INFO, [ChildItemInput(title="Parking")])
    ContactService().save(PAGE_ID, {"groom_name": "Minho"})
    RsvpService().submit(
        {
            "pageId": PAGE_ID,
            "guest_name": "Kim Minji",
            "guest_type": "신랑측",
            "relation_type": "참석",
            "meal_time": "식사 가능",
            "phone_number": "010-1234-5678",
            "consent_personal_info": True,
        }
    )
    GuestbookService().post({"pageId": PAGE_ID, "name": "Minji", "comment": "Congrats", "password": "1234"})


class TestTeardownAccount:
    """Tests for teardown_account."""

    def test_deletes_account_and_page_data(self, make_account, settings_service, dynamodb_table):
        account = make_account(id="acc-1", user_url="kim", page_id=PAGE_ID)
        _seed_page(settings_service)

        report = teardown_account(account)

        assert report == {
            "deleted": ["account", "settings", "transport", "info", "contacts", "rsvps", "comments"],
            "failed": [],
        }
        assert dynamodb_table.scan()["Items"] == []

    def test_account_without_page(self, make_account):
        account = make_account(id="acc-1")

        report = teardown_account(account)

        assert report == {"deleted": ["account"], "failed": []}
        assert AccountRepository().get_by_id(AccountSource.ADMIN_USER, "acc-1") is None

    def test_failure_is_reported_and_rest_continues(self, make_account, settings_service, dynamodb_table):
        account = make_account(id="acc-1", page_id=PAGE_ID)
        _seed_page(settings_service)
        settings_repo = MagicMock(spec=PageSettingsRepository)
        settings_repo.delete_by_page_id.side_effect = ClientError(
            {"Error": {"Code": "InternalServerError", "Message": "boom"}},
            "DeleteItem",
        )

        report = teardown_account(account, settings_repo=settings_repo)

        assert report["failed"] == ["settings"]
        assert report["deleted"] == ["account", "transport", "info", "contacts", "rsvps", "comments"]
        remaining = dynamodb_table.scan()["Items"]
        assert [item["SK"] for item in remaining] == ["SETTINGS"]

    def test_guest_data_of_other_pages_is_kept(self, make_account, settings_service, dynamodb_table):
        account = make_account(id="acc-1", page_id=PAGE_ID)
        _seed_page(settings_service)
        GuestbookService().post({"pageId": "page-999", "name": "Jiwoo", "comment": "Hi", "password": "1234"})

        teardown_account(account)

        remaining = dynamodb_table.scan()["Items"]
        assert [(item["PK"], item["SK"][:8]) for item in remaining] == [("PAGE#page-999", "COMMENT#")]
