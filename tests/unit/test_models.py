"""Tests for quality report and settings models."""

from __future__ import annotations

from datetime import datetime, timezone

import pydantic
import pytest

from linguaqa.core.config import QualityDefaults
from linguaqa.models.quality import QualityReport, QualitySettings, ReportStatus
from tests.fakes import report_record


def test_report_round_trips_through_record():
    report = QualityReport.model_validate(report_record(status="finalized"))
    assert report.status is ReportStatus.FINALIZED
    assert report.is_eligible
    assert report.to_record()["status"] == "finalized"


def test_naive_dates_are_treated_as_utc():
    report = QualityReport.model_validate(report_record(review_deadline="2026-03-09T09:00:00"))
    assert report.review_deadline == datetime(2026, 3, 9, 9, tzinfo=timezone.utc)


@pytest.mark.parametrize("field,value", [("lqa_score", 101), ("lqa_score", -1), ("qs_score", 5.5)])
def test_scores_are_range_checked(field, value):
    with pytest.raises(pydantic.ValidationError):
        QualityReport.model_validate(report_record(**{field: value}))


def test_error_count_must_be_positive():
    with pytest.raises(pydantic.ValidationError):
        QualityReport.model_validate(report_record(lqa_errors=[
            {"error_type": "Accuracy", "severity": "Major", "count": 0},
        ]))


class TestQualitySettings:
    def test_missing_record_uses_defaults(self):
        settings = QualitySettings.from_record(None, QualityDefaults())
        assert (settings.dispute_period_days, settings.probation_threshold) == (7, 70)
        assert (settings.lqa_weight, settings.qs_multiplier) == (4, 20)

    def test_record_overrides_and_ignores_nulls(self):
        settings = QualitySettings.from_record(
            {"id": "s1", "probation_threshold": 80, "lqa_weight": None, "unknown": 1},
            QualityDefaults(),
        )
        assert settings.probation_threshold == 80
        assert settings.lqa_weight == 4

    def test_partial_error_weights_are_filled(self):
        settings = QualitySettings(lqa_error_weights={"Critical": 25})
        assert settings.lqa_error_weights["Critical"] == 25
        assert settings.lqa_error_weights["Preferential"] == 0.5

    def test_rejects_non_positive_weight(self):
        with pytest.raises(pydantic.ValidationError):
            QualitySettings(lqa_weight=0)


def test_missing_created_date_stays_unset():
    record = report_record()
    del record["created_date"]
    assert QualityReport.model_validate(record).created_date is None
