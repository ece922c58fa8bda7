"""Base repository class for DynamoDB operations."""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

import boto3
import structlog
from botocore.exceptions import ClientError

from weddingpage.models.base import BaseModel, to_dynamodb_value
from weddingpage.utils.exceptions import ConflictError, StoreError

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)

# GSI name -> (partition key attribute, sort key attribute)
INDEX_KEYS = {
    "GSI1": ("GSI1PK", "GSI1SK"),
    "GSI2": ("GSI2PK", "GSI2SK"),
}


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate DynamoDB client errors into StoreError.

    Args:
        operation: Short description of the store operation.
    """
    try:
        yield
    except ClientError as e:
        raise StoreError.from_client_error(e, operation) from e


class BaseRepository(Generic[T]):
    """Base repository for DynamoDB single-table design.

    Provides common CRUD operations. ClientErrors are logged and re-raised;
    callers decide whether a failure is fatal.
    """

    def __init__(
        self,
        model_class: type[T],
        table_name: str | None = None,
    ):
        """Initialize repository.

        Args:
            model_class: The Pydantic model class for this repository.
            table_name: DynamoDB table name. Defaults to TABLE_NAME env var.
        """
        self.model_class = model_class
        self.table_name = table_name or os.environ.get("TABLE_NAME", "wedding-pages-dev")
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Get DynamoDB resource (lazy initialization)."""
        if self._dynamodb is None:
            self._dynamodb = boto3.resource("dynamodb")
        return self._dynamodb

    @property
    def table(self):
        """Get DynamoDB table (lazy initialization)."""
        if self._table is None:
            self._table = self.dynamodb.Table(self.table_name)
        return self._table

    def _build_key(self, pk: str, sk: str) -> dict[str, str]:
        """Build key dictionary for DynamoDB operations."""
        return {"PK": pk, "SK": sk}

    def get(self, pk: str, sk: str) -> T | None:
        """Get an item by its primary key.

        Args:
            pk: Partition key value.
            sk: Sort key value.

        Returns:
            Model instance or None if not found.
        """
        try:
            response = self.table.get_item(
                Key=self._build_key(pk, sk),
                ConsistentRead=True,
            )
            item = response.get("Item")

            if not item:
                return None

            return self.model_class.from_dynamodb(item)

        except ClientError as e:
            logger.error("DynamoDB get_item failed", error=str(e), pk=pk, sk=sk)
            raise

    def put(
        self,
        item: T,
        condition_expression: str | None = None,
        gsi_keys: dict[str, str] | None = None,
    ) -> T:
        """Put an item into DynamoDB.

        Args:
            item: Model instance to save.
            condition_expression: Optional condition expression.
            gsi_keys: Optional GSI key values to add.

        Returns:
            The saved model instance.

        Raises:
            ConflictError: If the condition expression fails.
        """
        try:
            db_item = item.to_dynamodb()
            db_item.update(item.get_keys())

            if gsi_keys:
                db_item.update(gsi_keys)

            kwargs: dict[str, Any] = {"Item": db_item}
            if condition_expression:
                kwargs["ConditionExpression"] = condition_expression

            self.table.put_item(**kwargs)

            logger.debug(
                "Item saved",
                pk=db_item["PK"],
                sk=db_item["SK"],
                model=self.model_class.__name__,
            )

            return item

        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ConflictError("Item already exists")
            logger.error("DynamoDB put_item failed", error=str(e))
            raise

    def create(self, item: T, gsi_keys: dict[str, str] | None = None) -> T:
        """Create a new item (fails if exists).

        Args:
            item: Model instance to create.
            gsi_keys: Optional GSI key values.

        Returns:
            The created model instance.

        Raises:
            ConflictError: If item already exists.
        """
        return self.put(
            item,
            condition_expression="attribute_not_exists(PK)",
            gsi_keys=gsi_keys,
        )

    def update_fields(
        self,
        pk: str,
        sk: str,
        fields: dict[str, Any],
        set_if_missing: dict[str, Any] | None = None,
    ) -> T:
        """Set the given attributes on an item, creating it if needed.

        Only the supplied attributes change; everything else on the item is
        left untouched.

        Args:
            pk: Partition key value.
            sk: Sort key value.
            fields: Attributes to overwrite.
            set_if_missing: Attributes written only when not yet present.

        Returns:
            The item after the update.
        """
        names: dict[str, str] = {}
        values: dict[str, Any] = {}
        clauses: list[str] = []

        for i, (name, value) in enumerate(fields.items()):
            names[f"#f{i}"] = name
            values[f":f{i}"] = to_dynamodb_value(value)
            clauses.append(f"#f{i} = :f{i}")

        for i, (name, value) in enumerate((set_if_missing or {}).items()):
            names[f"#m{i}"] = name
            values[f":m{i}"] = to_dynamodb_value(value)
            clauses.append(f"#m{i} = if_not_exists(#m{i}, :m{i})")

        if not clauses:
            raise ValueError("update_fields requires at least one attribute")

        try:
            response = self.table.update_item(
                Key=self._build_key(pk, sk),
                UpdateExpression="SET " + ", ".join(clauses),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
            logger.debug("Item fields updated", pk=pk, sk=sk, fields=list(fields))
            return self.model_class.from_dynamodb(response["Attributes"])

        except ClientError as e:
            logger.error("DynamoDB update_item failed", error=str(e), pk=pk, sk=sk)
            raise

    def delete(self, pk: str, sk: str) -> bool:
        """Delete an item.

        Args:
            pk: Partition key value.
            sk: Sort key value.

        Returns:
            True if deleted, False if not found.
        """
        try:
            self.table.delete_item(
                Key=self._build_key(pk, sk),
                ConditionExpression="attribute_exists(PK)",
            )
            logger.debug("Item deleted", pk=pk, sk=sk)
            return True

        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            logger.error("DynamoDB delete_item failed", error=str(e))
            raise

    def query(
        self,
        pk: str,
        sk_begins_with: str | None = None,
        index_name: str | None = None,
        limit: int | None = None,
        scan_forward: bool = True,
        last_key: dict | None = None,
    ) -> tuple[list[T], dict | None]:
        """Query items by partition key.

        Args:
            pk: Partition key value.
            sk_begins_with: Sort key prefix for begins_with condition.
            index_name: Optional GSI name (GSI1 or GSI2).
            limit: Maximum items to return.
            scan_forward: Sort direction (True = ascending).
            last_key: Last evaluated key for pagination.

        Returns:
            Tuple of (items, last_evaluated_key).
        """
        pk_attr, sk_attr = INDEX_KEYS[index_name] if index_name else ("PK", "SK")

        key_condition = "#pk = :pk"
        names = {"#pk": pk_attr}
        values: dict[str, Any] = {":pk": pk}
        if sk_begins_with:
            key_condition += " AND begins_with(#sk, :sk_prefix)"
            names["#sk"] = sk_attr
            values[":sk_prefix"] = sk_begins_with

        kwargs: dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ExpressionAttributeNames": names,
            "ExpressionAttributeValues": values,
            "ScanIndexForward": scan_forward,
        }

        if index_name:
            kwargs["IndexName"] = index_name
        if limit:
            kwargs["Limit"] = limit
        if last_key:
            kwargs["ExclusiveStartKey"] = last_key

        try:
            response = self.table.query(**kwargs)

            items = [self.model_class.from_dynamodb(item) for item in response.get("Items", [])]
            last_evaluated_key = response.get("LastEvaluatedKey")

            return items, last_evaluated_key

        except ClientError as e:
            logger.error("DynamoDB query failed", error=str(e), pk=pk, index=index_name)
            raise

    def query_all(self, pk: str, sk_begins_with: str | None = None) -> list[T]:
        """Query every item under a partition, following pagination."""
        items: list[T] = []
        last_key = None
        while True:
            page, last_key = self.query(pk, sk_begins_with=sk_begins_with, last_key=last_key)
            items.extend(page)
            if not last_key:
                return items

    def batch_write(self, items: list[T]) -> None:
        """Batch write multiple items.

        Args:
            items: List of model instances to save.
        """
        if not items:
            return

        try:
            with self.table.batch_writer() as batch:
                for item in items:
                    db_item = item.to_dynamodb()
                    db_item.update(item.get_keys())
                    batch.put_item(Item=db_item)

            logger.debug("Batch write completed", count=len(items))

        except ClientError as e:
            logger.error("DynamoDB batch_write failed", error=str(e))
            raise

    def batch_delete(self, keys: list[tuple[str, str]]) -> None:
        """Batch delete items by (pk, sk).

        Args:
            keys: List of (pk, sk) tuples.
        """
        if not keys:
            return

        try:
            with self.table.batch_writer() as batch:
                for pk, sk in keys:
                    batch.delete_item(Key=self._build_key(pk, sk))

            logger.debug("Batch delete completed", count=len(keys))

        except ClientError as e:
            logger.error("DynamoDB batch_delete failed", error=str(e))
            raise
