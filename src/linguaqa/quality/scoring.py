"""ScoreAggregator: turns eligible reports plus policy into LQA / QS / combined scores.

Everything here is pure. QS (0-5) is averaged raw and rescaled once by
``qs_multiplier`` before it is blended with the 0-100 LQA scale.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from pydantic import BaseModel

from linguaqa.models.quality import LqaError, QualityReport, QualitySettings


class ScoreSummary(BaseModel):
    """Aggregated scores for a set of reports. Any field may be absent."""

    avg_lqa: Optional[float] = None
    avg_qs: Optional[float] = None
    combined: Optional[float] = None
    report_count: int = 0


def eligible(reports: Iterable[QualityReport]) -> list[QualityReport]:
    """Keep only finalized / translator-accepted reports."""
    return [r for r in reports if r.is_eligible]


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def combine(avg_lqa: Optional[float], avg_qs: Optional[float], settings: QualitySettings) -> Optional[float]:
    """Blend LQA and QS averages into the combined score."""
    if avg_lqa is not None and avg_qs is not None:
        return (avg_lqa * settings.lqa_weight + avg_qs * settings.qs_multiplier) / (settings.lqa_weight + 1)
    if avg_lqa is not None:
        return avg_lqa
    if avg_qs is not None:
        return avg_qs * settings.qs_multiplier
    return None


class ScoreAggregator:
    """Computes average LQA, average QS and the combined score."""

    @staticmethod
    def compute(reports: Iterable[QualityReport], settings: QualitySettings) -> ScoreSummary:
        pool = eligible(reports)
        # Sorted sums keep the float result independent of input order
        lqa = sorted(r.lqa_score for r in pool if r.lqa_score is not None)
        qs = sorted(r.qs_score for r in pool if r.qs_score is not None)
        avg_lqa = _mean(lqa)
        avg_qs = _mean(qs)
        return ScoreSummary(
            avg_lqa=avg_lqa,
            avg_qs=avg_qs,
            combined=combine(avg_lqa, avg_qs, settings),
            report_count=len(pool),
        )


def lqa_score_from_errors(
    errors: Iterable[LqaError],
    words_reviewed: Optional[int],
    error_weights: dict[str, float],
) -> Optional[float]:
    """Derive an LQA score from weighted error counts per 1000 words.

    Severities without a configured weight count as 1. The score floors at 0
    and is rounded to one decimal.
    """
    if not words_reviewed:
        return None
    penalty = sum(e.count * error_weights.get(str(e.severity), 1) for e in errors)
    per_thousand = penalty / words_reviewed * 1000
    return round(max(0.0, 100 - per_thousand), 1)


def value_index(combined: Optional[float], rate: Optional[float]) -> Optional[float]:
    """Quality-for-money metric: combined squared over rate x 100."""
    if not combined or not rate or rate <= 0:
        return None
    return round(combined ** 2 / (rate * 100), 2)
