"""DynamoDB service wrapper for document operations.

This is the only module that talks to the document store. Resource services
receive a DynamoDBService and stay unaware of boto3 request shapes.
"""

from typing import Any

import boto3
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from ..config import get_settings

# Module-level singleton for connection reuse
_dynamodb_service_instance: "DynamoDBService | None" = None


def get_dynamodb_service(table_prefix: str | None = None) -> "DynamoDBService":
    """Process-wide DynamoDBService, created on first use.

    ``table_prefix`` only matters on that first call.
    """
    global _dynamodb_service_instance
    if _dynamodb_service_instance is None:
        _dynamodb_service_instance = DynamoDBService(table_prefix)
    return _dynamodb_service_instance


def reset_dynamodb_service() -> None:
    """Forget the shared instance so the next call builds a new one (tests)."""
    global _dynamodb_service_instance
    _dynamodb_service_instance = None


def _projection(fields: list[str] | None) -> dict[str, Any]:
    """Build ProjectionExpression kwargs with placeholders for every name.

    Placeholders are needed because TMF attribute names such as ``@type``
    are not valid in raw expressions.
    """
    if not fields:
        return {}
    names = {f"#p{i}": field for i, field in enumerate(dict.fromkeys(fields))}
    return {
        "ProjectionExpression": ", ".join(names),
        "ExpressionAttributeNames": names,
    }


class DynamoDBService:
    """Service for DynamoDB operations with prefixed table names."""

    def __init__(self, table_prefix: str | None = None) -> None:
        """Initialize DynamoDB service.

        Args:
            table_prefix: Table name prefix. Defaults to the configured one.
        """
        self.name_prefix = table_prefix or get_settings().table_prefix
        self._dynamodb = boto3.resource("dynamodb")
        self._client = boto3.client("dynamodb")
        self._serializer = TypeSerializer()

    def table_name(self, table: str) -> str:
        """Physical name of a logical table."""
        return f"{self.name_prefix}-{table}"

    def _get_table(self, table: str) -> Any:
        return self._dynamodb.Table(self.table_name(table))

    def get_item(
        self,
        table: str,
        key: dict[str, Any],
        fields: list[str] | None = None,
    ) -> dict[str, Any] | None:
        """Get a single item by key.

        Args:
            table: Table name without prefix
            key: Primary key dict
            fields: Optional attribute projection

        Returns:
            Item dict or None if not found
        """
        response = self._get_table(table).get_item(Key=key, **_projection(fields))
        item: dict[str, Any] | None = response.get("Item")
        return item

    def put_item(
        self,
        table: str,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> bool:
        """Write a whole item, optionally conditionally.

        Args:
            table: Table name without prefix
            item: Item to store
            condition_expression: Optional condition for write

        Returns:
            True if successful, False if condition failed
        """
        try:
            kwargs: dict[str, Any] = {"Item": item}
            if condition_expression:
                kwargs["ConditionExpression"] = condition_expression

            self._get_table(table).put_item(**kwargs)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            raise

    def update_item(
        self,
        table: str,
        key: dict[str, Any],
        update_expression: str,
        expression_attribute_values: dict[str, Any],
        expression_attribute_names: dict[str, str] | None = None,
        condition_expression: str | None = None,
    ) -> dict[str, Any] | None:
        """Run a raw UpdateItem returning the new image.

        Args:
            table: Table name without prefix
            key: Primary key dict
            update_expression: DynamoDB update expression
            expression_attribute_values: Values for expression
            expression_attribute_names: Names for expression (for reserved words)
            condition_expression: Optional condition for update

        Returns:
            Updated attributes or None if condition failed
        """
        try:
            kwargs: dict[str, Any] = {
                "Key": key,
                "UpdateExpression": update_expression,
                "ExpressionAttributeValues": expression_attribute_values,
                "ReturnValues": "ALL_NEW",
            }
            if expression_attribute_names:
                kwargs["ExpressionAttributeNames"] = expression_attribute_names
            if condition_expression:
                kwargs["ConditionExpression"] = condition_expression

            response = self._get_table(table).update_item(**kwargs)
            attrs: dict[str, Any] | None = response.get("Attributes")
            return attrs
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return None
            raise

    def update_attributes(
        self,
        table: str,
        key: dict[str, Any],
        attributes: dict[str, Any],
    ) -> dict[str, Any] | None:
        """SET the given attributes on an existing item.

        Only the supplied attributes are written; everything else on the
        item is left as stored.

        Args:
            table: Table name without prefix
            key: Primary key dict (single attribute)
            attributes: Attribute values to set, keyed by attribute name

        Returns:
            The full item after the update, or None if it does not exist
        """
        names: dict[str, str] = {}
        values: dict[str, Any] = {}
        assignments: list[str] = []
        for i, (name, value) in enumerate(attributes.items()):
            names[f"#a{i}"] = name
            values[f":v{i}"] = value
            assignments.append(f"#a{i} = :v{i}")

        key_name = next(iter(key))
        names["#key"] = key_name
        return self.update_item(
            table,
            key,
            "SET " + ", ".join(assignments),
            values,
            expression_attribute_names=names,
            condition_expression="attribute_exists(#key)",
        )

    def delete_item(
        self,
        table: str,
        key: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Delete an item by key.

        Args:
            table: Table name without prefix
            key: Primary key dict (single attribute)

        Returns:
            The deleted item, or None if it did not exist
        """
        key_name = next(iter(key))
        try:
            response = self._get_table(table).delete_item(
                Key=key,
                ConditionExpression="attribute_exists(#key)",
                ExpressionAttributeNames={"#key": key_name},
                ReturnValues="ALL_OLD",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return None
            raise
        attrs: dict[str, Any] | None = response.get("Attributes")
        return attrs

    def scan(
        self,
        table: str,
        filter_expression: Any | None = None,
        fields: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        """Scan a whole table, following continuation keys.

        Args:
            table: Table name without prefix
            filter_expression: Boto3 Attr condition (optional)
            fields: Optional attribute projection

        Returns:
            List of items in store order
        """
        kwargs: dict[str, Any] = _projection(fields)
        if filter_expression is not None:
            kwargs["FilterExpression"] = filter_expression

        items: list[dict[str, Any]] = []
        table_resource = self._get_table(table)
        while True:
            response = table_resource.scan(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key

    def transact_write(
        self,
        items: list[dict[str, Any]],
    ) -> bool:
        """Run TransactWriteItems; all writes apply or none do.

        Args:
            items: List of TransactWriteItem dicts

        Returns:
            True if successful, False if transaction failed
        """
        try:
            self._client.transact_write_items(TransactItems=items)  # type: ignore[arg-type]
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] == "TransactionCanceledException":
                return False
            raise

    # Unique-constraint helpers

    def _serialize(self, item: dict[str, Any]) -> dict[str, Any]:
        """Convert a plain item to low-level client attribute values."""
        return {k: self._serializer.serialize(v) for k, v in item.items()}

    def put_unique(
        self,
        table: str,
        item: dict[str, Any],
        key_name: str,
        guard_table: str,
        guard_key: dict[str, Any],
    ) -> bool:
        """Insert an item together with a uniqueness guard item.

        The guard table is keyed by the unique attribute; both writes
        succeed or neither does.

        Args:
            table: Table name without prefix
            item: Item to store
            key_name: Primary key attribute of ``table``
            guard_table: Guard table name without prefix
            guard_key: Guard item, e.g. ``{"email": ..., "id": ...}``

        Returns:
            True if stored, False if the unique value is already taken
        """
        guard_key_name = next(iter(guard_key))
        return self.transact_write(
            [
                {
                    "Put": {
                        "TableName": self.table_name(table),
                        "Item": self._serialize(item),
                        "ConditionExpression": "attribute_not_exists(#key)",
                        "ExpressionAttributeNames": {"#key": key_name},
                    }
                },
                {
                    "Put": {
                        "TableName": self.table_name(guard_table),
                        "Item": self._serialize(guard_key),
                        "ConditionExpression": "attribute_not_exists(#key)",
                        "ExpressionAttributeNames": {"#key": guard_key_name},
                    }
                },
            ]
        )

    def delete_unique(
        self,
        table: str,
        key: dict[str, Any],
        guard_table: str,
        guard_key: dict[str, Any],
    ) -> bool:
        """Delete an item and its uniqueness guard item together.

        Args:
            table: Table name without prefix
            key: Primary key dict of the item
            guard_table: Guard table name without prefix
            guard_key: Primary key dict of the guard item

        Returns:
            True if deleted, False if the item no longer exists
        """
        key_name = next(iter(key))
        return self.transact_write(
            [
                {
                    "Delete": {
                        "TableName": self.table_name(table),
                        "Key": self._serialize(key),
                        "ConditionExpression": "attribute_exists(#key)",
                        "ExpressionAttributeNames": {"#key": key_name},
                    }
                },
                {
                    "Delete": {
                        "TableName": self.table_name(guard_table),
                        "Key": self._serialize(guard_key),
                    }
                },
            ]
        )
