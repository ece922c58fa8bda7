"""Tests for child list replacement."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from weddingpage.models.child_item import ChildItemInput, ChildListKind
from weddingpage.repositories.child_list import ChildListRepository
from weddingpage.services.child_list_service import ChildListService
from weddingpage.utils.exceptions import StoreError

PAGE_ID = "page-001"


def _items(*titles: str, **orders: int) -> list[ChildItemInput]:
    return [ChildItemInput(title=t, description=f"{t} directions", display_order=orders.get(t)) for t in titles]


def _client_error() -> ClientError:
    return ClientError(
        {"Error": {"Code": "InternalServerError", "Message": "boom"}},
        "BatchWriteItem",
    )


class TestReplaceList:
    """Tests for ChildListService.replace_list."""

    def test_replace_and_list(self, dynamodb_table):
        service = ChildListService()

        service.replace_list(PAGE_ID, ChildListKind.TRANSPORT, _items("Subway", "Bus", "Car"))
        items = service.list_items(PAGE_ID, ChildListKind.TRANSPORT)

        assert [i.title for i in items] == ["Subway", "Bus", "Car"]
        assert [i.display_order for i in items] == [1, 2, 3]

    def test_full_replace(self, dynamodb_table):
        service = ChildListService()
        service.replace_list(PAGE_ID, ChildListKind.TRANSPORT, _items("Subway", "Bus", "Car"))

        service.replace_list(PAGE_ID, ChildListKind.TRANSPORT, _items("Shuttle"))

        items = service.list_items(PAGE_ID, ChildListKind.TRANSPORT)
        assert [i.title for i in items] == ["Shuttle"]

    def test_empty_list_clears(self, dynamodb_table):
        service = ChildListService()
        service.replace_list(PAGE_ID, ChildListKind.INFO, _items("Parking"))

        assert service.replace_list(PAGE_ID, ChildListKind.INFO, []) == []
        assert service.list_items(PAGE_ID, ChildListKind.INFO) == []

    def test_explicit_display_order(self, dynamodb_table):
        service = ChildListService()

        service.replace_list(PAGE_ID, ChildListKind.INFO, _items("A", "B", "C", A=3, B=1, C=2))

        items = service.list_items(PAGE_ID, ChildListKind.INFO)
        assert [i.title for i in items] == ["B", "C", "A"]

    def test_ties_keep_array_order(self, dynamodb_table):
        service = ChildListService()

        service.replace_list(PAGE_ID, ChildListKind.INFO, _items("First", "Second", First=1, Second=1))

        items = service.list_items(PAGE_ID, ChildListKind.INFO)
        assert [i.title for i in items] == ["First", "Second"]

    def test_kinds_are_independent(self, dynamodb_table):
        service = ChildListService()
        service.replace_list(PAGE_ID, ChildListKind.TRANSPORT, _items("Subway"))

        service.replace_list(PAGE_ID, ChildListKind.INFO, _items("Parking"))

        assert [i.title for i in service.list_items(PAGE_ID, ChildListKind.TRANSPORT)] == ["Subway"]

    def test_delete_failure_still_inserts(self):
        repo = MagicMock(spec=ChildListRepository)
        repo.delete_all.side_effect = _client_error()
        service = ChildListService(repo=repo)

        rows = service.replace_list(PAGE_ID, ChildListKind.TRANSPORT, _items("Subway"))

        repo.insert_all.assert_called_once()
        assert [r.title for r in rows] == ["Subway"]

    def test_insert_failure_raises(self):
        repo = MagicMock(spec=ChildListRepository)
        repo.delete_all.return_value = 2
        repo.insert_all.side_effect = _client_error()
        service = ChildListService(repo=repo)

        with pytest.raises(StoreError):
            service.replace_list(PAGE_ID, ChildListKind.TRANSPORT, _items("Subway"))

    def test_null_text_becomes_empty(self, dynamodb_table):
        service = ChildListService()

        service.replace_list(
            PAGE_ID,
            ChildListKind.INFO,
            [ChildItemInput.model_validate({"title": None, "description": None})],
        )

        item = service.list_items(PAGE_ID, ChildListKind.INFO)[0]
        assert item.title == ""
        assert item.description == ""
