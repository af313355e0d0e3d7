"""
Exceptions raised by the evaluator.
"""

from pathlib import Path


class EvaluatorError(Exception):
    """Base class for evaluator failures."""


class ExplorationLoadError(EvaluatorError):
    """Exception raised when an exploration result cannot be read."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class StorePersistenceError(EvaluatorError):
    """Exception raised when a classification store cannot be loaded or saved."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


class LayerOutOfRangeError(EvaluatorError, IndexError):
    """A layer index outside of the store was used. This is a caller error."""

    def __init__(self, layer: int, number_of_layers: int) -> None:
        super().__init__(f"Layer {layer} is out of range (store has {number_of_layers} layers)")
        self.layer = layer
        self.number_of_layers = number_of_layers


class JudgingAborted(EvaluatorError):
    """The judge stopped answering before the worklist was exhausted."""
