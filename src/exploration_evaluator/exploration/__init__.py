"""
Exploration module: the hypothesis tree produced by the exploration pipeline.
"""

from exploration_evaluator.exploration.loader import find_number_of_layers, load_exploration
from exploration_evaluator.exploration.schemas import (
    ExplorationResult,
    HypothesesSet,
    Hypothesis,
    HypothesisRange,
    LayerEntry,
    Selection,
)

__all__ = [
    "ExplorationResult",
    "HypothesesSet",
    "Hypothesis",
    "HypothesisRange",
    "LayerEntry",
    "Selection",
    "find_number_of_layers",
    "load_exploration",
]
