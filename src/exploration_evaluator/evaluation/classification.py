"""
Classification of hypotheses by a human judge.

Every classification carries a tri-state verdict: the two confident
classifications map to GOOD and BAD, the two "rather" classifications stay
UNDECIDED and are excluded from hit and bad counts.
"""

from __future__ import annotations

from enum import Enum


class Verdict(str, Enum):
    """Whether a classified hypothesis counts as good."""

    GOOD = "good"
    BAD = "bad"
    UNDECIDED = "undecided"


class Classification(Enum):
    """The possible answers of a judge."""

    CORRECT = (Verdict.GOOD, "c", 2)
    RATHER_CORRECT = (Verdict.UNDECIDED, "rc", 1)
    RATHER_WRONG = (Verdict.UNDECIDED, "rw", -1)
    WRONG = (Verdict.BAD, "w", -2)

    def __init__(self, verdict: Verdict, short_id: str, weight: int) -> None:
        self.verdict = verdict
        self.short_id = short_id
        self.weight = weight

    @classmethod
    def from_short_id(cls, text: str) -> Classification | None:
        """
        Get a classification by its short id.

        Args:
            text: User input such as "c" or "RW".

        Returns:
            The classification, or None if nothing matches.
        """
        key = (text or "").strip().lower()
        for cls_ in cls:
            if cls_.short_id == key:
                return cls_
        return None

    @classmethod
    def from_weight(cls, weight: int) -> Classification:
        """Get a classification by its signed weight."""
        for cls_ in cls:
            if cls_.weight == weight:
                return cls_
        raise ValueError(f"Illegal weight: {weight}")

    @classmethod
    def question(cls) -> str:
        """Prompt listing every classification with its short id."""
        return ", ".join(f"{c.name} ({c.short_id})" for c in cls)


def verdict_of(classification: Classification | None) -> Verdict:
    """Verdict of a classification; unknown hypotheses are undecided."""
    if classification is None:
        return Verdict.UNDECIDED
    return classification.verdict
