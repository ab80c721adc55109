"""DynamoDB table layout.

Every table has a single string hash key. The ``*-callbacks`` and
``*-emails`` tables hold uniqueness guard items only.
"""

from typing import Any

TABLE_KEYS: dict[str, str] = {
    "payment-methods": "id",
    "listeners": "id",
    "listener-callbacks": "callback",
    "users": "id",
    "user-emails": "email",
}


def table_definitions(prefix: str) -> list[dict[str, Any]]:
    """CreateTable request bodies for every table under ``prefix``."""
    return [
        {
            "TableName": f"{prefix}-{table}",
            "KeySchema": [{"AttributeName": key, "KeyType": "HASH"}],
            "AttributeDefinitions": [{"AttributeName": key, "AttributeType": "S"}],
            "BillingMode": "PAY_PER_REQUEST",
        }
        for table, key in TABLE_KEYS.items()
    ]


def create_tables(client: Any, prefix: str) -> list[str]:
    """Create all tables that do not exist yet.

    Args:
        client: boto3 DynamoDB client
        prefix: Table name prefix

    Returns:
        Names of the tables created
    """
    existing = set(client.list_tables().get("TableNames", []))
    created: list[str] = []
    for definition in table_definitions(prefix):
        if definition["TableName"] in existing:
            continue
        client.create_table(**definition)
        created.append(definition["TableName"])
    return created
