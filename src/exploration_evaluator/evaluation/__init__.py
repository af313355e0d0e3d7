"""
Evaluation module: judging hypotheses and scoring explorations.
"""

from exploration_evaluator.evaluation.classification import Classification, Verdict, verdict_of
from exploration_evaluator.evaluation.hit_counter import HitCounter, LayerCount
from exploration_evaluator.evaluation.score import Score, score_from_counts, score_sort_key
from exploration_evaluator.evaluation.selector import LeafHypothesisSelector
from exploration_evaluator.evaluation.session import (
    Candidate,
    EvaluationSession,
    SessionState,
    WorkItem,
    build_worklist,
    default_store_path,
    open_session,
)
from exploration_evaluator.evaluation.store import ClassificationStore, StoreDocument

__all__ = [
    "Candidate",
    "Classification",
    "ClassificationStore",
    "EvaluationSession",
    "HitCounter",
    "LayerCount",
    "LeafHypothesisSelector",
    "Score",
    "SessionState",
    "StoreDocument",
    "Verdict",
    "WorkItem",
    "build_worklist",
    "default_store_path",
    "open_session",
    "score_from_counts",
    "score_sort_key",
    "verdict_of",
]
