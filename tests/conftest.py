"""
Shared fixtures: small exploration trees in their JSON form.
"""

import json
from pathlib import Path
from typing import Any

import pytest

from exploration_evaluator.exploration import ExplorationResult


def _hyp(value: str, confidence: float) -> dict[str, Any]:
    return {"value": value, "confidence": confidence}


@pytest.fixture
def branching_document() -> dict[str, Any]:
    """
    Two-layer tree.

    The root proposes A and B for the word "open". A is carried into the
    first child, B into the second. Both children are leaves and propose
    X again independently.
    """
    return {
        "id": "sentence-1",
        "inputText": "open the fridge",
        "explorationRoot": {
            "hypotheses": [
                {
                    "hypotheses": [_hyp("A", 0.9), _hyp("B", 0.5)],
                    "hypothesesRange": "ELEMENT",
                    "elementOfHypotheses": "open",
                    "onlyOneHypothesisValid": False,
                }
            ],
            "children": [
                {
                    "selectionsFromBefore": [{"selectedHypotheses": [_hyp("A", 0.9)]}],
                    "hypotheses": [
                        {
                            "hypotheses": [_hyp("X", 0.8), _hyp("Y", 0.8), _hyp("Z", 0.1)],
                            "hypothesesRange": "COMPLETE_STRUCTURE",
                        }
                    ],
                    "children": [],
                },
                {
                    "selectionsFromBefore": [{"selectedHypotheses": [_hyp("B", 0.5)]}],
                    "hypotheses": [
                        {
                            "hypotheses": [_hyp("X", 0.3), _hyp("W", 0.2)],
                            "hypothesesRange": "COMPLETE_STRUCTURE",
                        }
                    ],
                    "children": [],
                },
            ],
        },
    }


@pytest.fixture
def branching_exploration(branching_document: dict[str, Any]) -> ExplorationResult:
    return ExplorationResult.model_validate(branching_document)


@pytest.fixture
def branching_verdicts() -> dict[str, str]:
    """Verdicts for every value of the branching tree."""
    return {"A": "c", "B": "w", "X": "c", "Y": "rc", "Z": "w", "W": "w"}


@pytest.fixture
def write_exploration(tmp_path: Path):
    """Write a document to a JSON file below tmp_path."""

    def _write(document: dict[str, Any], name: str = "exploration.json", directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(document), encoding="utf-8")
        return target

    return _write
