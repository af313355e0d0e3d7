"""
Tests for counting hits and bad hypotheses.
"""

import pytest

from exploration_evaluator.config import SelectionPolicy
from exploration_evaluator.errors import LayerOutOfRangeError
from exploration_evaluator.evaluation import (
    Classification,
    ClassificationStore,
    EvaluationSession,
    HitCounter,
    LayerCount,
    LeafHypothesisSelector,
)
from exploration_evaluator.exploration import ExplorationResult
from exploration_evaluator.io import ScriptedJudge


class TestHitCounter:
    """Tests for the scoring walk."""

    @pytest.fixture
    def judged_store(self, branching_exploration: ExplorationResult, branching_verdicts) -> ClassificationStore:
        store = ClassificationStore(2)
        EvaluationSession(branching_exploration, store).run(ScriptedJudge(branching_verdicts))
        return store

    def test_selections_and_leaves(self, judged_store: ClassificationStore, branching_exploration: ExplorationResult) -> None:
        counts = HitCounter(judged_store).count(branching_exploration)
        # Layer 0: A carried on (good), B carried on (bad).
        # Layer 1: both leaves select X (good, counted once); Y ties with X but is undecided.
        assert counts == [LayerCount(hit=1, bad=1), LayerCount(hit=1, bad=0)]

    def test_pseudo_hypothesis_mode(self, judged_store: ClassificationStore, branching_exploration: ExplorationResult) -> None:
        counts = HitCounter(judged_store).count(branching_exploration, pseudo_hypothesis=True)
        # Every entry is scored like a leaf with a budget of three; selections are ignored.
        assert counts == [LayerCount(hit=1, bad=1), LayerCount(hit=1, bad=2)]

    def test_accepts_root_entry(self, judged_store: ClassificationStore, branching_exploration: ExplorationResult) -> None:
        counter = HitCounter(judged_store)
        assert counter.count(branching_exploration.exploration_root) == counter.count(branching_exploration)

    def test_wider_leaf_budget(self, judged_store: ClassificationStore, branching_exploration: ExplorationResult) -> None:
        selector = LeafHypothesisSelector(SelectionPolicy(max_hypotheses_per_leaf=3))
        counts = HitCounter(judged_store, selector).count(branching_exploration)
        assert counts[1] == LayerCount(hit=1, bad=2)

    def test_nothing_classified(self, branching_exploration: ExplorationResult) -> None:
        assert HitCounter(ClassificationStore(2)).count(branching_exploration) == []

    def test_pads_layers_without_observations(self) -> None:
        exploration = ExplorationResult.model_validate(
            {
                "explorationRoot": {
                    "hypotheses": [{"hypotheses": [{"value": "R", "confidence": 0.5}]}],
                    "children": [{"hypotheses": [{"hypotheses": [{"value": "L", "confidence": 0.5}]}]}],
                }
            }
        )
        store = ClassificationStore(2)
        store.record(1, exploration.exploration_root.children[0].hypotheses_sets[0].hypotheses[0], Classification.WRONG)

        assert HitCounter(store).count(exploration) == [LayerCount(0, 0), LayerCount(0, 1)]

    def test_tree_deeper_than_store(self) -> None:
        exploration = ExplorationResult.model_validate(
            {"explorationRoot": {"children": [{"hypotheses": [{"hypotheses": [{"value": "L"}]}]}]}}
        )
        with pytest.raises(LayerOutOfRangeError):
            HitCounter(ClassificationStore(1)).count(exploration)


def test_end_to_end_single_hit() -> None:
    exploration = ExplorationResult.model_validate(
        {
            "id": "e2e",
            "inputText": "go",
            "explorationRoot": {
                "hypotheses": [{"hypotheses": [{"value": "X", "confidence": 0.9}]}],
                "children": [{"selectionsFromBefore": [{"selectedHypotheses": [{"value": "X", "confidence": 0.9}]}]}],
            },
        }
    )
    store = ClassificationStore(2)
    judge = ScriptedJudge({"X": Classification.CORRECT})

    EvaluationSession(exploration, store).run(judge)

    assert judge.asked == [(0, "X", None)]
    assert HitCounter(store).count(exploration) == [LayerCount(hit=1, bad=0)]
    assert store.good_count(0) == 1
