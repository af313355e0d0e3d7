"""
Selection of the hypotheses that count at a leaf.

At a leaf (or for every entry in pseudo-hypothesis mode) the scoring does not
know which hypotheses were carried on, so it takes the best ones of every
hypotheses set. Ties in confidence are never cut in the middle.
"""

from __future__ import annotations

import math

from exploration_evaluator.config import SelectionPolicy
from exploration_evaluator.exploration.schemas import HypothesesSet, Hypothesis, LayerEntry


def _equal_confidence(a: float, b: float) -> bool:
    return a == b or (math.isnan(a) and math.isnan(b))


class LeafHypothesisSelector:
    """Top-k-with-ties selection over hypotheses sorted by confidence."""

    def __init__(self, policy: SelectionPolicy | None = None) -> None:
        self._policy = policy or SelectionPolicy()

    @property
    def policy(self) -> SelectionPolicy:
        """Get the selection policy."""
        return self._policy

    def budget(self, hypotheses_set: HypothesesSet, pseudo_hypothesis: bool = False) -> int:
        """Number of hypotheses a set contributes before tie extension."""
        if hypotheses_set.only_one_hypothesis_valid:
            return 1
        if pseudo_hypothesis:
            return self._policy.max_hypotheses_per_pseudo_hyp
        return self._policy.max_hypotheses_per_leaf

    def select(self, hypotheses_set: HypothesesSet, pseudo_hypothesis: bool = False) -> list[Hypothesis]:
        """
        Select the hypotheses of one set.

        The first `budget` hypotheses are taken, followed by every hypothesis
        whose confidence equals the confidence of the last one taken. With a
        confidence floor, selection stops at the first hypothesis at or below
        the floor.

        Args:
            hypotheses_set: Set with hypotheses sorted by confidence (descending).
            pseudo_hypothesis: Use the pseudo-hypothesis budget.

        Returns:
            The selected hypotheses in their original order.
        """
        ordered = hypotheses_set.hypotheses
        if not ordered:
            return []

        max_hypotheses = self.budget(hypotheses_set, pseudo_hypothesis)
        floor = self._policy.skip_if_confidence_less
        score = ordered[0].confidence

        selected: list[Hypothesis] = []
        for i, hypothesis in enumerate(ordered):
            if i >= max_hypotheses and not _equal_confidence(score, hypothesis.confidence):
                break
            score = hypothesis.confidence
            if floor is not None and not math.isnan(score) and score <= floor:
                break
            selected.append(hypothesis)
        return selected

    def select_for_node(self, node: LayerEntry, pseudo_hypothesis: bool = False) -> list[Hypothesis]:
        """Selected hypotheses of every set of a node, set by set."""
        result: list[Hypothesis] = []
        for hypotheses_set in node.hypotheses_sets:
            result.extend(self.select(hypotheses_set, pseudo_hypothesis))
        return result
