"""
Pydantic schemas for exploration results.

An exploration result is a tree of layer entries. Every entry holds the
hypotheses sets proposed at that depth and the selections of the parent's
hypotheses that were carried forward into it. The JSON documents use
camelCase names; attributes are snake_case.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class HypothesisRange(str, Enum):
    """Scope a hypotheses set refers to."""

    ELEMENT = "ELEMENT"
    COMPLETE_STRUCTURE = "COMPLETE_STRUCTURE"


class Hypothesis(BaseModel):
    """One candidate interpretation, identified by its value."""

    model_config = ConfigDict(populate_by_name=True)

    value: str = Field(..., description="Canonical content of the candidate")
    confidence: float = Field(
        default=math.nan,
        description="Confidence of the producing pipeline (NaN if unknown)",
    )

    @field_validator("confidence", mode="before")
    @classmethod
    def _read_confidence(cls, v: Any) -> Any:
        if v is None:
            return math.nan
        if isinstance(v, str):
            return float(v)
        return v

    @field_serializer("confidence", when_used="json")
    def _write_confidence(self, v: float) -> float | str:
        return "NaN" if math.isnan(v) else v

    def fingerprint(self) -> Hypothesis:
        """Copy of this hypothesis with its confidence blanked."""
        return self.model_copy(update={"confidence": math.nan})

    def same_value(self, other: Hypothesis) -> bool:
        """Identity used for judging: the value only, never the confidence."""
        return self.value == other.value


class HypothesesSet(BaseModel):
    """Competing hypotheses proposed together for one scope."""

    model_config = ConfigDict(populate_by_name=True)

    hypotheses: list[Hypothesis] = Field(
        default_factory=list,
        description="Hypotheses sorted by confidence (descending)",
    )
    hypotheses_range: HypothesisRange = Field(
        default=HypothesisRange.COMPLETE_STRUCTURE,
        alias="hypothesesRange",
    )
    element_of_hypotheses: str | None = Field(
        default=None,
        alias="elementOfHypotheses",
        description="Token of the sentence the hypotheses refer to",
    )
    only_one_hypothesis_valid: bool = Field(
        default=False,
        alias="onlyOneHypothesisValid",
    )

    @property
    def associated_word(self) -> str | None:
        """The token of the set if it is tied to a single element."""
        if self.hypotheses_range == HypothesisRange.ELEMENT:
            return self.element_of_hypotheses
        return None


class Selection(BaseModel):
    """Hypotheses of the parent that were chosen to continue into a child."""

    model_config = ConfigDict(populate_by_name=True)

    selected_hypotheses: list[Hypothesis] = Field(
        default_factory=list,
        alias="selectedHypotheses",
    )


class LayerEntry(BaseModel):
    """A node of the exploration tree."""

    model_config = ConfigDict(populate_by_name=True)

    children: list[LayerEntry] = Field(default_factory=list)
    hypotheses_sets: list[HypothesesSet] = Field(
        default_factory=list,
        alias="hypotheses",
    )
    selections_from_before: list[Selection] | None = Field(
        default=None,
        alias="selectionsFromBefore",
    )

    @field_validator("children", "hypotheses_sets", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_leaf(self) -> bool:
        """Check whether the entry has no children."""
        return not self.children


class ExplorationResult(BaseModel):
    """Root document produced by the exploration pipeline."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", description="Identifier of the exploration (may be the text)")
    input_text: str = Field(default="", alias="inputText", description="Sentence that was explored")
    exploration_root: LayerEntry = Field(..., alias="explorationRoot")


LayerEntry.model_rebuild()
