"""
Statistics over evaluated explorations.

Scores every exploration of an evaluation target against the classification
store, ranks them by their total score and writes text and CSV reports next
to the store file.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from pydantic import BaseModel, Field

from exploration_evaluator.config import Settings, get_settings
from exploration_evaluator.evaluation.hit_counter import HitCounter, LayerCount
from exploration_evaluator.evaluation.score import Score, score_from_counts, score_sort_key
from exploration_evaluator.evaluation.selector import LeafHypothesisSelector
from exploration_evaluator.evaluation.store import ClassificationStore
from exploration_evaluator.exploration.schemas import ExplorationResult

logger = logging.getLogger(__name__)


class ScoredInput(BaseModel):
    """Scores of one exploration."""

    name: str = Field(..., description="Name of the scored input (usually the file name)")
    input_text: str = Field(default="", description="Explored sentence")
    counts: list[LayerCount] = Field(default_factory=list, description="Hits and bad hypotheses per layer")
    layer_scores: list[Score] = Field(default_factory=list, description="Score per layer")
    total: Score = Field(..., description="Score over all layers")

    @property
    def total_hits(self) -> int:
        """Sum of hits over all layers."""
        return sum(c.hit for c in self.counts)

    @property
    def total_bad(self) -> int:
        """Sum of bad hypotheses over all layers."""
        return sum(c.bad for c in self.counts)


def all_possible_hits_per_layer(store: ClassificationStore) -> list[int]:
    """Distinct good hypotheses of every layer of the store."""
    return [store.good_count(layer) for layer in range(store.number_of_layers)]


def score_input(
    name: str,
    exploration: ExplorationResult,
    hit_counter: HitCounter,
    possible_per_layer: Sequence[int],
    pseudo_hypothesis: bool = False,
) -> ScoredInput:
    """
    Score one exploration.

    Args:
        name: Name of the input.
        exploration: The exploration to score.
        hit_counter: Counter bound to the classification store.
        possible_per_layer: Good hypotheses known per layer.
        pseudo_hypothesis: Count in pseudo-hypothesis mode.

    Returns:
        Per-layer scores and the total score.
    """
    counts = hit_counter.count(exploration, pseudo_hypothesis)
    layer_scores = [
        score_from_counts(count.hit, count.bad, possible_per_layer[layer]) for layer, count in enumerate(counts)
    ]
    total = score_from_counts(
        sum(c.hit for c in counts),
        sum(c.bad for c in counts),
        sum(possible_per_layer),
    )
    return ScoredInput(
        name=name,
        input_text=exploration.input_text,
        counts=counts,
        layer_scores=layer_scores,
        total=total,
    )


def rank(rows: Iterable[ScoredInput]) -> list[ScoredInput]:
    """Order by total score (best first); equal scores by name, descending."""
    by_name = sorted(rows, key=lambda row: row.name, reverse=True)
    return sorted(by_name, key=lambda row: score_sort_key(row.total), reverse=True)


def path_score(input_text: str) -> str:
    """Rating embedded in the text of a rated path, e.g. "text (0.25)"."""
    start = input_text.find("(")
    end = input_text.find(")")
    if start == -1 or end == -1 or start + 1 >= end:
        return ""
    try:
        return f"{float(input_text[start + 1:end]):.4f}"
    except ValueError:
        return ""


def _write_text_reports(rows: Sequence[ScoredInput], target_base: Path) -> None:
    summary: list[str] = []
    details: list[str] = []
    for row in rows:
        summary.append(f"{row.name} Score: {row.total}")
        details.append(f"{row.name} Score: {row.total}")
        details.append("\tDetails:")
        details.extend(f"\t{score}" for score in row.layer_scores)

    for suffix, lines in ((".stats.txt", summary), (".stats-details.txt", details)):
        target = target_base.with_name(target_base.name + suffix)
        try:
            target.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write file {target}: {e}")


def _write_csv_report(rows: Sequence[ScoredInput], target_base: Path, number_of_layers: int) -> None:
    target = target_base.with_name(target_base.name + ".stats.csv")
    sentence = rows[0].input_text if rows else ""

    header = ["Scenario", "Score"]
    header += [f"Layer-{layer} # Hit" for layer in range(number_of_layers)] + ["# Hit"]
    header += [f"Layer-{layer} # Bad" for layer in range(number_of_layers)] + ["# Bad"]

    try:
        with target.open("w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh, delimiter=";", lineterminator="\n")
            writer.writerow([sentence])
            writer.writerow(header + [""])
            for row in rows:
                padding = [""] * max(0, number_of_layers - len(row.counts))
                line = [row.name, path_score(row.input_text)]
                line += [str(c.hit) for c in row.counts] + padding + [str(row.total_hits)]
                line += [str(c.bad) for c in row.counts] + padding + [str(row.total_bad)]
                writer.writerow(line + [""])
    except OSError as e:
        logger.error(f"Cannot write file {target}: {e}")


def write_reports(rows: Sequence[ScoredInput], target_base: Path | str, number_of_layers: int) -> None:
    """
    Write the reports of an evaluation target.

    Creates `<base>.stats.txt` (ranked totals), `<base>.stats-details.txt`
    (ranked totals with per-layer scores) and `<base>.stats.csv` (hit and bad
    counts per input). Write failures are logged and skipped.
    """
    target_base = Path(target_base)
    _write_text_reports(rank(rows), target_base)
    _write_csv_report(rows, target_base, number_of_layers)
    logger.info(f"Wrote statistics for {len(rows)} inputs to {target_base}.stats.*")


def generate_stats(
    inputs: Iterable[tuple[str, ExplorationResult]],
    store: ClassificationStore,
    target_base: Path | str,
    settings: Settings | None = None,
) -> list[ScoredInput]:
    """
    Score every input against the store and write the reports.

    Inputs whose name contains the no-hyp marker are counted in
    pseudo-hypothesis mode.

    Returns:
        The scored inputs, ranked best first.
    """
    settings = settings or get_settings()
    hit_counter = HitCounter(store, LeafHypothesisSelector(settings.selection_policy()))
    possible = all_possible_hits_per_layer(store)

    rows = [
        score_input(name, exploration, hit_counter, possible, settings.no_hyp_marker in name)
        for name, exploration in inputs
    ]
    write_reports(rows, target_base, store.number_of_layers)
    return rank(rows)
