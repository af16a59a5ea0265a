"""Unit tests for DynamoDBEntityStore using moto."""

from __future__ import annotations

from decimal import Decimal

import boto3
import pytest
from moto import mock_aws

from linguaqa.core.exceptions import ConcurrentUpdateError, NotFoundError, StoreError
from linguaqa.models.quality import FREELANCER_ENTITY, REPORT_ENTITY, USER_ENTITY
from linguaqa.persistence.dynamodb_backend import SORT_KEY, TABLES, DynamoDBEntityStore
from tests.fakes import report_record, user_record

TABLE_SUFFIX = "-test"
REGION = "us-east-1"


# ---------- fixtures ----------

@pytest.fixture
def aws():
    with mock_aws():
        ddb = boto3.resource("dynamodb", region_name=REGION)
        client = boto3.client("dynamodb", region_name=REGION)
        for name in TABLES.values():
            client.create_table(
                TableName=f"{name}{TABLE_SUFFIX}",
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
        yield ddb


@pytest.fixture
def store(aws):
    return DynamoDBEntityStore(table_suffix=TABLE_SUFFIX, region=REGION)


# ---------- get / create ----------

class TestGetAndCreate:
    def test_round_trips_record_without_key_attributes(self, store):
        store.create(REPORT_ENTITY, report_record(lqa_score=87.5))
        record = store.get(REPORT_ENTITY, "r1")
        assert record["lqa_score"] == 87.5
        assert record["version"] == 0
        assert "PK" not in record and "SK" not in record

    def test_item_layout(self, store, aws):
        store.create(FREELANCER_ENTITY, {"id": "f1", "full_name": "Ayse Demir"})
        item = aws.Table(f"linguaqa-freelancers{TABLE_SUFFIX}").get_item(
            Key={"PK": "FREELANCER#f1", "SK": SORT_KEY},
        )["Item"]
        assert item["full_name"] == "Ayse Demir"

    def test_floats_stored_as_decimal(self, store, aws):
        store.create(REPORT_ENTITY, report_record(qs_score=4.5))
        item = aws.Table(f"linguaqa-quality-reports{TABLE_SUFFIX}").get_item(
            Key={"PK": "QUALITYREPORT#r1", "SK": SORT_KEY},
        )["Item"]
        assert item["qs_score"] == Decimal("4.5")

    def test_assigns_id(self, store):
        created = store.create(USER_ENTITY, {"email": "x@elturco.example", "role": "admin"})
        assert store.get(USER_ENTITY, created["id"])["email"] == "x@elturco.example"

    def test_missing_returns_none(self, store):
        assert store.get(REPORT_ENTITY, "nope") is None

    def test_unknown_entity(self, store):
        with pytest.raises(StoreError):
            store.get("Invoice", "i1")


# ---------- filter ----------

class TestFilter:
    def test_equality_criteria(self, store):
        store.create(USER_ENTITY, user_record("admin1", "admin"))
        store.create(USER_ENTITY, user_record("pm1", "project_manager"))
        store.create(USER_ENTITY, user_record("admin2", "admin"))
        admins = store.filter(USER_ENTITY, role="admin")
        assert sorted(u["id"] for u in admins) == ["admin1", "admin2"]

    def test_multiple_criteria(self, store):
        store.create(REPORT_ENTITY, report_record("r1", status="finalized"))
        store.create(REPORT_ENTITY, report_record("r2", status="draft"))
        store.create(REPORT_ENTITY, report_record("r3", freelancer_id="f2", status="finalized"))
        found = store.filter(REPORT_ENTITY, freelancer_id="f1", status="finalized")
        assert [r["id"] for r in found] == ["r1"]

    def test_no_criteria_returns_all(self, store):
        store.create(REPORT_ENTITY, report_record("r1"))
        store.create(REPORT_ENTITY, report_record("r2"))
        assert len(store.filter(REPORT_ENTITY)) == 2


# ---------- update ----------

class TestUpdate:
    def test_applies_partial(self, store):
        store.create(REPORT_ENTITY, report_record())
        updated = store.update(REPORT_ENTITY, "r1", {"status": "pending_translator_review", "version": 1})
        assert updated["status"] == "pending_translator_review"
        assert updated["lqa_score"] == 88
        assert store.get(REPORT_ENTITY, "r1")["version"] == 1

    def test_matching_precondition(self, store):
        store.create(REPORT_ENTITY, report_record(status="pending_translator_review", version=3))
        updated = store.update(
            REPORT_ENTITY, "r1", {"status": "translator_accepted", "version": 4},
            expected={"status": "pending_translator_review", "version": 3},
        )
        assert updated["version"] == 4

    def test_stale_precondition_raises_and_keeps_record(self, store):
        store.create(REPORT_ENTITY, report_record(status="translator_accepted"))
        with pytest.raises(ConcurrentUpdateError):
            store.update(
                REPORT_ENTITY, "r1", {"status": "translator_disputed"},
                expected={"status": "pending_translator_review"},
            )
        assert store.get(REPORT_ENTITY, "r1")["status"] == "translator_accepted"

    def test_missing_record(self, store):
        with pytest.raises(NotFoundError):
            store.update(REPORT_ENTITY, "nope", {"status": "finalized"})
