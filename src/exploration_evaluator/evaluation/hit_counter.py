"""
Hit counting.

Walks an exploration tree after judging and counts, per layer, how many
distinct good (hit) and bad hypotheses the exploration ended up using.
A parent's hypothesis is used if it was selected to continue into a child;
at leaves (and everywhere in pseudo-hypothesis mode) the best hypotheses of
each set are used instead.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from exploration_evaluator.evaluation.classification import Verdict, verdict_of
from exploration_evaluator.evaluation.selector import LeafHypothesisSelector
from exploration_evaluator.evaluation.store import ClassificationStore
from exploration_evaluator.exploration.schemas import ExplorationResult, Hypothesis, LayerEntry

logger = logging.getLogger(__name__)


class LayerCount(NamedTuple):
    """Distinct hit and bad hypotheses of one layer."""

    hit: int
    bad: int


class HitCounter:
    """Counts correct and incorrect classified hypotheses of an exploration."""

    def __init__(
        self,
        store: ClassificationStore,
        selector: LeafHypothesisSelector | None = None,
    ) -> None:
        self._store = store
        self._selector = selector or LeafHypothesisSelector()

    def count(
        self,
        exploration: ExplorationResult | LayerEntry,
        pseudo_hypothesis: bool = False,
    ) -> list[LayerCount]:
        """
        Count hits and bad hypotheses per layer (distinct by value).

        Args:
            exploration: The exploration result (or its root entry).
            pseudo_hypothesis: Score every entry like a leaf and ignore selections.

        Returns:
            One count per layer up to the deepest layer with any observation;
            empty if nothing classified was used.
        """
        root = exploration.exploration_root if isinstance(exploration, ExplorationResult) else exploration

        hits: list[tuple[int, Hypothesis]] = []
        bad: list[tuple[int, Hypothesis]] = []
        self._walk(0, root, pseudo_hypothesis, hits, bad)

        layers = [layer for layer, _ in hits] + [layer for layer, _ in bad]
        if not layers:
            return []

        result: list[LayerCount] = []
        for layer in range(max(layers) + 1):
            result.append(
                LayerCount(
                    hit=ClassificationStore.count_distinct(h for at, h in hits if at == layer),
                    bad=ClassificationStore.count_distinct(h for at, h in bad if at == layer),
                )
            )
        logger.debug(f"Counted hits per layer: {result}")
        return result

    def _collect(
        self,
        layer: int,
        hypothesis: Hypothesis,
        hits: list[tuple[int, Hypothesis]],
        bad: list[tuple[int, Hypothesis]],
    ) -> None:
        verdict = verdict_of(self._store.classification_of(layer, hypothesis))
        if verdict is Verdict.GOOD:
            hits.append((layer, hypothesis))
        elif verdict is Verdict.BAD:
            bad.append((layer, hypothesis))

    def _walk(
        self,
        layer: int,
        step: LayerEntry,
        pseudo_hypothesis: bool,
        hits: list[tuple[int, Hypothesis]],
        bad: list[tuple[int, Hypothesis]],
    ) -> None:
        # Hypotheses of the parent that were carried into this entry
        if step.selections_from_before is not None and not pseudo_hypothesis:
            for selection in step.selections_from_before:
                for hypothesis in selection.selected_hypotheses:
                    self._collect(layer - 1, hypothesis, hits, bad)

        # Leaf: use the generated hypotheses instead of selections
        if step.is_leaf or pseudo_hypothesis:
            for hypothesis in self._selector.select_for_node(step, pseudo_hypothesis):
                self._collect(layer, hypothesis, hits, bad)

        for child in step.children:
            self._walk(layer + 1, child, pseudo_hypothesis, hits, bad)
