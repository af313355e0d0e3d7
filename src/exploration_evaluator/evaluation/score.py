"""
Precision, recall and F1 of an evaluated exploration.

Undefined ratios (for instance no hits and no bad hypotheses at all) are
NaN and stay NaN; only the comparison decides how such scores rank.
"""

from __future__ import annotations

import functools
import math

from pydantic import BaseModel, ConfigDict, Field, computed_field


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0 or math.isnan(numerator) or math.isnan(denominator):
        return math.nan
    return numerator / denominator


class Score(BaseModel):
    """
    Precision/recall/F1 triple.

    Precision is tp/(tp+fp), recall is tp/(tp+fn) and F1 their harmonic mean.
    """

    model_config = ConfigDict(frozen=True)

    precision: float = Field(..., description="Share of used hypotheses that are good")
    recall: float = Field(..., description="Share of all good hypotheses that were used")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def f1(self) -> float:
        """Harmonic mean of precision and recall."""
        return _ratio(2 * self.precision * self.recall, self.precision + self.recall)

    def compare(self, other: Score) -> int:
        """
        Compare by F1.

        If both F1 values are NaN, the larger of precision and recall decides.
        A NaN F1 always ranks below a defined one.
        """
        is_nan = math.isnan(self.f1)
        other_is_nan = math.isnan(other.f1)

        if is_nan and other_is_nan:
            return _compare_floats(_max(self.precision, self.recall), _max(other.precision, other.recall))
        if is_nan:
            return -1
        if other_is_nan:
            return 1
        return _compare_floats(self.f1, other.f1)

    def __lt__(self, other: Score) -> bool:
        return self.compare(other) < 0

    def __gt__(self, other: Score) -> bool:
        return self.compare(other) > 0

    def __str__(self) -> str:
        return (
            f"P: {self.precision * 100:.2f}%, "
            f"R: {self.recall * 100:.2f}%, "
            f"F1: {self.f1 * 100:.2f}%"
        )


def _max(a: float, b: float) -> float:
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return max(a, b)


def _compare_floats(a: float, b: float) -> int:
    # NaN ranks above every number and equal to itself
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) - math.isnan(b)
    return (a > b) - (a < b)


score_sort_key = functools.cmp_to_key(Score.compare)


def score_from_counts(hit: int, bad: int, all_possible_hits: int) -> Score:
    """
    Build a score from hit counts.

    Args:
        hit: Distinct good hypotheses used.
        bad: Distinct bad hypotheses used.
        all_possible_hits: Distinct good hypotheses known at all.
    """
    return Score(precision=_ratio(hit, hit + bad), recall=_ratio(hit, all_possible_hits))
