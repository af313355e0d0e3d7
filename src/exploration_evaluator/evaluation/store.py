"""
Classification store.

Holds the judgments of a human per layer of the exploration tree. A
hypothesis is stored as a fingerprint (its confidence blanked), so lookups
match on the hypothesis value only. The store is loaded once per evaluation
target, mutated while judging and written back in full at the end.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from exploration_evaluator.errors import LayerOutOfRangeError, StorePersistenceError
from exploration_evaluator.evaluation.classification import Classification, Verdict
from exploration_evaluator.exploration.schemas import Hypothesis

logger = logging.getLogger(__name__)


class StoreDocument(BaseModel):
    """On-disk shape of a classification store."""

    model_config = ConfigDict(populate_by_name=True)

    classification_per_layer: list[dict[str, list[Hypothesis]]] = Field(
        default_factory=list,
        alias="classificationPerLayer",
        description="One mapping of classification name to fingerprints per layer",
    )


class ClassificationStore:
    """
    Per-layer judgments of hypotheses.

    The number of layers is fixed at creation. Every layer maps a
    classification to the ordered list of fingerprints classified that way.
    A value is expected under at most one classification per layer; the
    store does not enforce this and lookups return the first match.
    """

    def __init__(self, number_of_layers: int) -> None:
        """
        Create an empty store.

        Args:
            number_of_layers: Depth of the exploration tree.
        """
        if number_of_layers < 0:
            raise ValueError(f"Number of layers must not be negative: {number_of_layers}")
        self._layers: list[dict[Classification, list[Hypothesis]]] = [{} for _ in range(number_of_layers)]

    @property
    def number_of_layers(self) -> int:
        """Get the number of layers."""
        return len(self._layers)

    def _layer(self, layer: int) -> dict[Classification, list[Hypothesis]]:
        if not 0 <= layer < len(self._layers):
            raise LayerOutOfRangeError(layer, len(self._layers))
        return self._layers[layer]

    def classification_of(self, layer: int, hypothesis: Hypothesis) -> Classification | None:
        """
        Get the classification of a hypothesis.

        Args:
            layer: Layer of the hypothesis.
            hypothesis: The hypothesis (its confidence is ignored).

        Returns:
            The classification, or None if the hypothesis is unknown.
        """
        fingerprint = hypothesis.fingerprint()
        buckets = self._layer(layer)
        for cls in Classification:
            for stored in buckets.get(cls, ()):
                if stored.same_value(fingerprint):
                    return cls
        return None

    def find_similar(self, layer: int, hypothesis: Hypothesis) -> Hypothesis | None:
        """Find a stored fingerprint with the same value, in any classification."""
        buckets = self._layer(layer)
        for cls in Classification:
            for stored in buckets.get(cls, ()):
                if stored.value == hypothesis.value:
                    return stored
        return None

    def record(self, layer: int, hypothesis: Hypothesis, classification: Classification) -> None:
        """
        Store the classification of a hypothesis.

        Args:
            layer: Layer of the hypothesis.
            hypothesis: The classified hypothesis.
            classification: The judgment.
        """
        self._layer(layer).setdefault(classification, []).append(hypothesis.fingerprint())
        logger.debug(f"Recorded layer {layer}: {hypothesis.value!r} -> {classification.name}")

    @staticmethod
    def count_distinct(hypotheses: Iterable[Hypothesis]) -> int:
        """Number of different values among the hypotheses."""
        return len({h.value for h in hypotheses})

    def _count_with_verdict(self, layer: int, verdict: Verdict) -> int:
        buckets = self._layer(layer)
        return self.count_distinct(
            h for cls, hyps in buckets.items() if cls.verdict is verdict for h in hyps
        )

    def good_count(self, layer: int) -> int:
        """Count the distinct hypotheses of a layer classified as good."""
        return self._count_with_verdict(layer, Verdict.GOOD)

    def bad_count(self, layer: int) -> int:
        """Count the distinct hypotheses of a layer classified as bad."""
        return self._count_with_verdict(layer, Verdict.BAD)

    def snapshot(self) -> list[dict[Classification, tuple[Hypothesis, ...]]]:
        """Read-only copy of the stored fingerprints per layer."""
        return [{cls: tuple(hyps) for cls, hyps in layer.items()} for layer in self._layers]

    # Persistence

    def to_document(self) -> StoreDocument:
        """Convert the store into its serializable document."""
        return StoreDocument(
            classification_per_layer=[
                {cls.name: list(layer[cls]) for cls in Classification if layer.get(cls)}
                for layer in self._layers
            ]
        )

    @classmethod
    def from_document(cls, document: StoreDocument) -> ClassificationStore:
        """Rebuild a store from its serialized document."""
        store = cls(len(document.classification_per_layer))
        for index, layer in enumerate(document.classification_per_layer):
            for name, hyps in layer.items():
                try:
                    classification = Classification[name]
                except KeyError:
                    raise ValueError(f"Unknown classification '{name}' in layer {index}") from None
                store._layers[index].setdefault(classification, []).extend(h.fingerprint() for h in hyps)
        return store

    def save(self, path: Path | str) -> None:
        """
        Write the whole store to a JSON file.

        Raises:
            StorePersistenceError: If the file cannot be written.
        """
        path = Path(path)
        try:
            path.write_text(self.to_document().model_dump_json(by_alias=True, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorePersistenceError(f"Cannot write classification store {path}: {e}", path=path) from e
        logger.info(f"Saved classification store ({self.number_of_layers} layers) to {path}")

    @classmethod
    def load(cls, path: Path | str) -> ClassificationStore:
        """
        Read a store from a JSON file.

        Raises:
            StorePersistenceError: If the file is unreadable or malformed.
        """
        path = Path(path)
        try:
            document = StoreDocument.model_validate_json(path.read_text(encoding="utf-8"))
            store = cls.from_document(document)
        except OSError as e:
            raise StorePersistenceError(f"Cannot read classification store {path}: {e}", path=path) from e
        except (ValidationError, ValueError) as e:
            raise StorePersistenceError(f"Malformed classification store {path}: {e}", path=path) from e
        logger.info(f"Loaded classification store ({store.number_of_layers} layers) from {path}")
        return store

    @classmethod
    def open(cls, path: Path | str, number_of_layers: int) -> ClassificationStore:
        """
        Load the store at `path`, or create a fresh one if it does not exist.

        The layer count of a loaded store is taken as is.
        """
        path = Path(path)
        if path.exists():
            return cls.load(path)
        logger.info(f"No classification store at {path}, starting with {number_of_layers} empty layers")
        return cls(number_of_layers)
