"""
Reading exploration results from disk.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from exploration_evaluator.errors import ExplorationLoadError
from exploration_evaluator.exploration.schemas import ExplorationResult

logger = logging.getLogger(__name__)


def load_exploration(path: Path | str) -> ExplorationResult:
    """
    Load an exploration result from a JSON file.

    Args:
        path: Location of the exploration document.

    Returns:
        The parsed exploration result.

    Raises:
        ExplorationLoadError: If the file is unreadable or malformed.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ExplorationLoadError(f"Cannot read exploration file {path}: {e}", path=path) from e

    try:
        exploration = ExplorationResult.model_validate_json(raw)
    except ValidationError as e:
        raise ExplorationLoadError(f"Malformed exploration file {path}: {e}", path=path) from e

    logger.debug(f"Loaded exploration '{exploration.id}' from {path}")
    return exploration


def find_number_of_layers(exploration: ExplorationResult) -> int:
    """Depth of the tree, following the first child of every entry."""
    depth = 1
    step = exploration.exploration_root
    while step.children:
        depth += 1
        step = step.children[0]
    return depth
