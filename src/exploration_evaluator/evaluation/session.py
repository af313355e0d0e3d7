"""
Evaluation session.

Flattens an exploration tree into the order in which hypotheses are shown
to a judge and serves them one at a time. Hypotheses that are already
classified are skipped, and hypotheses whose value was classified elsewhere
on the same layer take over that classification without asking again.
Running a session twice against the same store asks nothing the second time.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from exploration_evaluator.config import Settings, get_settings
from exploration_evaluator.errors import StorePersistenceError
from exploration_evaluator.evaluation.classification import Classification
from exploration_evaluator.evaluation.store import ClassificationStore
from exploration_evaluator.exploration.loader import find_number_of_layers, load_exploration
from exploration_evaluator.exploration.schemas import (
    ExplorationResult,
    HypothesesSet,
    Hypothesis,
    LayerEntry,
)

if TYPE_CHECKING:
    from exploration_evaluator.io.judge import Judge

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle of a session."""

    BUILDING = "building"
    ACTIVE = "active"
    DONE = "done"


class WorkItem(NamedTuple):
    """A hypothesis waiting for a judgment."""

    layer: int
    hypotheses_set: HypothesesSet
    hypothesis: Hypothesis


class Candidate(NamedTuple):
    """A hypothesis that needs a verdict from the judge."""

    layer: int
    hypothesis: Hypothesis
    associated_word: str | None


def build_worklist(root: LayerEntry) -> list[WorkItem]:
    """
    Flatten the tree depth-first into the judging order.

    Every entry contributes its sets in order (and within a set the
    hypotheses in order) before its children are visited.
    """
    items: list[WorkItem] = []

    def visit(layer: int, step: LayerEntry) -> None:
        for hypotheses_set in step.hypotheses_sets:
            for hypothesis in hypotheses_set.hypotheses:
                items.append(WorkItem(layer, hypotheses_set, hypothesis))
        for child in step.children:
            visit(layer + 1, child)

    visit(0, root)
    return items


class EvaluationSession:
    """
    Serves the unjudged hypotheses of one exploration.

    Callers repeatedly take `find_next()`, obtain a classification and hand it
    back with `submit()`, until `find_next()` returns None.
    """

    def __init__(
        self,
        exploration: ExplorationResult,
        store: ClassificationStore,
        store_path: Path | str | None = None,
    ) -> None:
        """
        Initialize the session and build its worklist.

        Args:
            exploration: The exploration to judge.
            store: Store receiving the classifications.
            store_path: Where `save()` writes the store.
        """
        self._state = SessionState.BUILDING
        self._exploration = exploration
        self._store = store
        self._store_path = Path(store_path) if store_path is not None else None
        self._pending: deque[WorkItem] = deque(build_worklist(exploration.exploration_root))
        self._skipped = 0
        self._state = SessionState.ACTIVE if self._pending else SessionState.DONE
        logger.debug(f"Built worklist of {len(self._pending)} hypotheses for '{exploration.id}'")

    @property
    def state(self) -> SessionState:
        """Get the session state."""
        return self._state

    @property
    def store(self) -> ClassificationStore:
        """Get the classification store."""
        return self._store

    @property
    def store_path(self) -> Path | None:
        """Get the location the store is saved to."""
        return self._store_path

    @property
    def exploration_id(self) -> str:
        """Get the id of the exploration (may be the text)."""
        return self._exploration.id

    @property
    def sentence(self) -> str:
        """Get the explored sentence shown to the judge."""
        return self._exploration.input_text

    @property
    def pending(self) -> int:
        """Number of work items not looked at yet."""
        return len(self._pending)

    @property
    def skipped(self) -> int:
        """Number of work items that were already classified."""
        return self._skipped

    def find_next(self) -> Candidate | None:
        """
        Find the next hypothesis to classify.

        Returns:
            The candidate (layer starting at 0, the hypothesis and the word
            of an element-scoped set), or None if nothing is left to judge.
        """
        while self._pending:
            item = self._pending.popleft()

            if self._store.classification_of(item.layer, item.hypothesis) is not None:
                self._skipped += 1
                continue

            return Candidate(item.layer, item.hypothesis, item.hypotheses_set.associated_word)

        self._state = SessionState.DONE
        return None

    def submit(self, layer: int, hypothesis: Hypothesis, classification: Classification) -> None:
        """
        Provide the classification of a hypothesis.

        Args:
            layer: Layer of the hypothesis.
            hypothesis: The classified hypothesis.
            classification: The judgment.
        """
        self._store.record(layer, hypothesis, classification)

    def run(self, judge: Judge) -> int:
        """
        Ask the judge for every unjudged hypothesis.

        Args:
            judge: Source of the classifications.

        Returns:
            The number of hypotheses the judge was asked about.
        """
        asked = 0
        while (candidate := self.find_next()) is not None:
            classification = judge.classify(
                candidate.layer,
                candidate.hypothesis,
                candidate.associated_word,
                self.sentence,
            )
            self.submit(candidate.layer, candidate.hypothesis, classification)
            asked += 1

        logger.info(
            f"Finished '{self.exploration_id}': {asked} asked, "
            f"{self._skipped} already known"
        )
        return asked

    def save(self, path: Path | str | None = None) -> Path:
        """
        Write the store of this session.

        Args:
            path: Target file (defaults to the session's store path).

        Returns:
            The file written.
        """
        target = Path(path) if path is not None else self._store_path
        if target is None:
            raise StorePersistenceError("No location to save the classification store to")
        self._store.save(target)
        return target


def default_store_path(exploration_path: Path | str, settings: Settings | None = None) -> Path:
    """Store file next to an exploration file."""
    settings = settings or get_settings()
    exploration_path = Path(exploration_path)
    return exploration_path.with_name(exploration_path.name + settings.eval_file_suffix)


def open_session(
    exploration_path: Path | str,
    store_path: Path | str | None = None,
    settings: Settings | None = None,
) -> EvaluationSession:
    """
    Load an exploration and the store it is judged into.

    A missing store file is replaced by a fresh store sized to the depth of
    the exploration tree.

    Raises:
        ExplorationLoadError: If the exploration cannot be read.
        StorePersistenceError: If an existing store cannot be read.
    """
    exploration = load_exploration(exploration_path)
    if store_path is None:
        store_path = default_store_path(exploration_path, settings)
    store = ClassificationStore.open(store_path, find_number_of_layers(exploration))
    return EvaluationSession(exploration, store, store_path)
