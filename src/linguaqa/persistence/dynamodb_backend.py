"""DynamoDB backend implementing IEntityStore with conditional updates."""

from __future__ import annotations

import uuid
from decimal import Decimal
from functools import reduce
from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from linguaqa.core.exceptions import ConcurrentUpdateError, NotFoundError, StoreError
from linguaqa.models.quality import (
    AUDIT_ENTITY,
    FREELANCER_ENTITY,
    REPORT_ENTITY,
    SETTINGS_ENTITY,
    USER_ENTITY,
)

# Entity name -> base table name (suffix appended per environment)
TABLES: dict[str, str] = {
    REPORT_ENTITY: "linguaqa-quality-reports",
    FREELANCER_ENTITY: "linguaqa-freelancers",
    SETTINGS_ENTITY: "linguaqa-quality-settings",
    USER_ENTITY: "linguaqa-users",
    AUDIT_ENTITY: "linguaqa-admin-audit-log",
}

SORT_KEY = "RECORD"


def _to_dynamodb(obj: Any) -> Any:
    """Convert floats to Decimal for DynamoDB."""
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _to_dynamodb(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_to_dynamodb(i) for i in obj]
    return obj


def _from_dynamodb(obj: Any) -> Any:
    """Convert Decimal values in a DynamoDB item to int/float."""
    if isinstance(obj, Decimal):
        return int(obj) if obj == int(obj) else float(obj)
    if isinstance(obj, dict):
        return {k: _from_dynamodb(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_from_dynamodb(i) for i in obj]
    return obj


def _strip_keys(item: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in _from_dynamodb(item).items() if k not in ("PK", "SK")}


class DynamoDBEntityStore:
    """Production IEntityStore: one table per entity, PK=<ENTITY>#<id>, SK=RECORD."""

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def _table(self, entity: str):
        try:
            base = TABLES[entity]
        except KeyError:
            raise StoreError(f"Unknown entity {entity!r}") from None
        return self._ddb.Table(f"{base}{self._table_suffix}")

    @staticmethod
    def _pk(entity: str, record_id: str) -> str:
        return f"{entity.upper()}#{record_id}"

    # ---- IEntityStore methods ----

    def get(self, entity: str, record_id: str) -> dict[str, Any] | None:
        try:
            resp = self._table(entity).get_item(Key={"PK": self._pk(entity, record_id), "SK": SORT_KEY})
        except ClientError as exc:
            raise StoreError(f"DynamoDB get {entity} {record_id!r} failed: {exc}") from exc
        item = resp.get("Item")
        return _strip_keys(item) if item else None

    def filter(self, entity: str, **criteria: Any) -> list[dict[str, Any]]:
        """Scan with equality filters. Paginates through LastEvaluatedKey."""
        tbl = self._table(entity)
        kwargs: dict[str, Any] = {}
        if criteria:
            conditions = [Attr(k).eq(_to_dynamodb(v)) for k, v in criteria.items()]
            kwargs["FilterExpression"] = reduce(lambda a, b: a & b, conditions)
        items: list[dict[str, Any]] = []
        try:
            while True:
                resp = tbl.scan(**kwargs)
                items.extend(resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    break
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise StoreError(f"DynamoDB scan of {entity} failed: {exc}") from exc
        return [_strip_keys(i) for i in items]

    def create(self, entity: str, data: dict[str, Any]) -> dict[str, Any]:
        record = dict(data)
        record.setdefault("id", uuid.uuid4().hex)
        item = {"PK": self._pk(entity, record["id"]), "SK": SORT_KEY, **_to_dynamodb(record)}
        try:
            self._table(entity).put_item(Item=item)
        except ClientError as exc:
            raise StoreError(f"DynamoDB put {entity} {record['id']!r} failed: {exc}") from exc
        return record

    def update(
        self,
        entity: str,
        record_id: str,
        partial: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Apply ``partial`` only if the record exists and matches ``expected``."""
        names: dict[str, str] = {}
        values: dict[str, Any] = {}
        sets: list[str] = []
        for i, (key, value) in enumerate(partial.items()):
            names[f"#f{i}"] = key
            values[f":v{i}"] = _to_dynamodb(value)
            sets.append(f"#f{i} = :v{i}")

        conditions = ["attribute_exists(PK)"]
        for i, (key, value) in enumerate((expected or {}).items()):
            names[f"#c{i}"] = key
            values[f":c{i}"] = _to_dynamodb(value)
            conditions.append(f"#c{i} = :c{i}")

        try:
            resp = self._table(entity).update_item(
                Key={"PK": self._pk(entity, record_id), "SK": SORT_KEY},
                UpdateExpression="SET " + ", ".join(sets),
                ConditionExpression=" AND ".join(conditions),
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                if self.get(entity, record_id) is None:
                    raise NotFoundError(entity, record_id) from exc
                raise ConcurrentUpdateError(entity, record_id, expected) from exc
            raise StoreError(f"DynamoDB update {entity} {record_id!r} failed: {exc}") from exc
        return _strip_keys(resp["Attributes"])
