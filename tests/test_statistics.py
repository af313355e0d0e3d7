"""
Tests for statistics over evaluated explorations.
"""

import math
from pathlib import Path

import pytest

from exploration_evaluator.evaluation import (
    ClassificationStore,
    EvaluationSession,
    HitCounter,
    LayerCount,
    Score,
)
from exploration_evaluator.exploration import ExplorationResult
from exploration_evaluator.io import ScriptedJudge
from exploration_evaluator.reporting import (
    ScoredInput,
    all_possible_hits_per_layer,
    generate_stats,
    rank,
    score_input,
)
from exploration_evaluator.reporting.statistics import path_score


@pytest.fixture
def judged_store(branching_exploration: ExplorationResult, branching_verdicts) -> ClassificationStore:
    store = ClassificationStore(2)
    EvaluationSession(branching_exploration, store).run(ScriptedJudge(branching_verdicts))
    return store


def test_all_possible_hits(judged_store: ClassificationStore) -> None:
    assert all_possible_hits_per_layer(judged_store) == [1, 1]


def test_score_input(judged_store: ClassificationStore, branching_exploration: ExplorationResult) -> None:
    row = score_input("s1.json", branching_exploration, HitCounter(judged_store), [1, 1])

    assert row.counts == [LayerCount(1, 1), LayerCount(1, 0)]
    assert row.layer_scores[0].precision == 0.5
    assert row.layer_scores[1].f1 == 1.0
    assert row.total.precision == pytest.approx(2 / 3)
    assert row.total.recall == 1.0
    assert row.total_hits == 2
    assert row.total_bad == 1


def _row(name: str, precision: float, recall: float) -> ScoredInput:
    return ScoredInput(name=name, total=Score(precision=precision, recall=recall))


def test_rank_by_total_then_name() -> None:
    rows = [
        _row("a.json", 0.5, 0.5),
        _row("b.json", math.nan, math.nan),
        _row("c.json", 1.0, 1.0),
        _row("d.json", 0.5, 0.5),
    ]
    assert [row.name for row in rank(rows)] == ["c.json", "d.json", "a.json", "b.json"]


@pytest.mark.parametrize(
    ("text", "expected"),
    [("open the fridge (0.25)", "0.2500"), ("open the fridge", ""), ("odd () text", ""), ("a (b) c", "")],
)
def test_path_score(text: str, expected: str) -> None:
    assert path_score(text) == expected


def test_generate_stats_writes_reports(
    tmp_path: Path,
    judged_store: ClassificationStore,
    branching_exploration: ExplorationResult,
) -> None:
    base = tmp_path / "scenario.eval.json"
    inputs = [("scenario-no-hyp.json", branching_exploration), ("s1.json", branching_exploration)]

    ranked = generate_stats(inputs, judged_store, base)

    assert [row.name for row in ranked] == ["s1.json", "scenario-no-hyp.json"]
    assert ranked[1].counts == [LayerCount(1, 1), LayerCount(1, 2)]

    summary = (tmp_path / "scenario.eval.json.stats.txt").read_text(encoding="utf-8").splitlines()
    assert summary[0] == "s1.json Score: P: 66.67%, R: 100.00%, F1: 80.00%"
    assert summary[1].startswith("scenario-no-hyp.json Score: P: 40.00%")

    details = (tmp_path / "scenario.eval.json.stats-details.txt").read_text(encoding="utf-8")
    assert "\tDetails:\n\tP: 50.00%, R: 100.00%, F1: 66.67%\n" in details

    csv_lines = (tmp_path / "scenario.eval.json.stats.csv").read_text(encoding="utf-8").splitlines()
    assert csv_lines[0] == "open the fridge"
    assert csv_lines[1] == "Scenario;Score;Layer-0 # Hit;Layer-1 # Hit;# Hit;Layer-0 # Bad;Layer-1 # Bad;# Bad;"
    assert csv_lines[2] == "scenario-no-hyp.json;;1;1;2;1;2;3;"
    assert csv_lines[3] == "s1.json;;1;1;2;1;0;1;"


def test_csv_pads_short_inputs(tmp_path: Path) -> None:
    exploration = ExplorationResult.model_validate(
        {"inputText": "s", "explorationRoot": {"hypotheses": [{"hypotheses": [{"value": "Q"}]}], "children": [{}]}}
    )
    store = ClassificationStore(3)
    generate_stats([("x.json", exploration)], store, tmp_path / "t")

    csv_lines = (tmp_path / "t.stats.csv").read_text(encoding="utf-8").splitlines()
    assert csv_lines[2] == "x.json;;;;;0;;;;0;"
