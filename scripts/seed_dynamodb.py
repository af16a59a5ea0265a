"""Create LinguaQA DynamoDB tables and seed the default quality settings.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from decimal import Decimal
from typing import Any

import boto3

from linguaqa.persistence.dynamodb_backend import SORT_KEY, TABLES

DEFAULT_SETTINGS: dict[str, Any] = {
    "PK": "QUALITYSETTINGS#default",
    "SK": SORT_KEY,
    "id": "default",
    "setting_key": "default",
    "dispute_period_days": 7,
    "probation_threshold": 70,
    "lqa_weight": 4,
    "qs_multiplier": 20,
    "auto_accept_enabled": True,
    "lqa_error_weights": {
        "Critical": 10,
        "Major": 5,
        "Minor": 2,
        "Preferential": Decimal("0.5"),
    },
}


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create one table per entity. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for base in TABLES.values():
        table_name = f"{base}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def seed_settings(ddb: Any, suffix: str = "") -> None:
    """Write the default QualitySettings record unless one already exists."""
    tbl = ddb.Table(f"{TABLES['QualitySettings']}{suffix}")
    if tbl.scan(Limit=1).get("Items"):
        print("  QualitySettings already present, skipping")
        return
    tbl.put_item(Item=DEFAULT_SETTINGS)
    print("  Seeded default QualitySettings")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for LinguaQA")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    print("Seeding settings...")
    seed_settings(ddb, suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
