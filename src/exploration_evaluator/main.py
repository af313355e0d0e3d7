"""
Main entry point for the exploration evaluator.

Judges the hypotheses of one exploration file, or of every exploration file
of a directory against a shared classification store.
"""

import argparse
import logging
import sys
from pathlib import Path

from exploration_evaluator.config import Settings, get_settings
from exploration_evaluator.errors import (
    ExplorationLoadError,
    JudgingAborted,
    StorePersistenceError,
)
from exploration_evaluator.evaluation.session import default_store_path, open_session
from exploration_evaluator.evaluation.store import ClassificationStore
from exploration_evaluator.exploration.loader import load_exploration
from exploration_evaluator.io.judge import Judge, TextJudge
from exploration_evaluator.reporting.statistics import generate_stats

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure application logging."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="exploration-evaluator",
        description="Classify the hypotheses of exploration results",
    )
    p.add_argument("path", nargs="?", help="Exploration file or directory of exploration files")
    p.add_argument("--store", help="Classification store file (defaults next to the input)")
    p.add_argument(
        "--report",
        action="store_true",
        help="Write statistics after judging",
    )
    return p


def discover_explorations(directory: Path, settings: Settings) -> list[Path]:
    """
    Exploration files of a directory in judging order.

    Plain explorations come first (sorted by name); the `<dir>-no-hyp.json`
    file, if present, comes last.
    """
    no_hyp_suffix = f"-{settings.no_hyp_marker}.json"
    files = sorted(
        f
        for f in directory.iterdir()
        if f.is_file()
        and f.name.endswith(".json")
        and not f.name.endswith(settings.eval_file_suffix)
        and not f.name.endswith(no_hyp_suffix)
    )
    no_hyp = directory / f"{directory.name}{no_hyp_suffix}"
    if no_hyp.exists():
        files.append(no_hyp)
    return files


def evaluate(
    exploration_path: Path,
    store_path: Path | None,
    judge: Judge,
    settings: Settings,
) -> bool:
    """
    Judge one exploration and save the store.

    Returns:
        False if the exploration or its store could not be loaded.

    Raises:
        JudgingAborted: If the judge stopped answering; nothing is saved.
    """
    logger.info(f"FILE: {exploration_path.name}")
    try:
        session = open_session(exploration_path, store_path, settings)
    except (ExplorationLoadError, StorePersistenceError) as e:
        logger.error(f"Cannot load file: {e}")
        return False

    session.run(judge)

    try:
        session.save()
    except StorePersistenceError as e:
        logger.error(f"Error while saving file: {e}")
    return True


def report(directory: Path, store_path: Path, settings: Settings) -> None:
    """Write statistics for every exploration of a directory."""
    try:
        store = ClassificationStore.load(store_path)
    except StorePersistenceError as e:
        logger.error(f"Cannot load file: {e}")
        return

    inputs = []
    for f in sorted(directory.iterdir()):
        if not f.is_file() or not f.name.endswith(".json") or f.name.endswith(settings.eval_file_suffix):
            continue
        try:
            inputs.append((f.name, load_exploration(f)))
        except ExplorationLoadError as e:
            logger.error(f"Cannot load file: {e}")

    generate_stats(inputs, store, store_path, settings)


def report_file(exploration_path: Path, store_path: Path, settings: Settings) -> None:
    """Write statistics for a single exploration."""
    try:
        store = ClassificationStore.load(store_path)
        exploration = load_exploration(exploration_path)
    except (ExplorationLoadError, StorePersistenceError) as e:
        logger.error(f"Cannot load file: {e}")
        return

    generate_stats([(exploration_path.name, exploration)], store, store_path, settings)


def run(argv: list[str] | None = None, judge: Judge | None = None) -> int:
    """
    Run the evaluator.

    Returns:
        The process exit code.
    """
    settings = get_settings()
    args = build_parser().parse_args(argv)
    judge = judge or TextJudge()

    raw_path = args.path
    if not raw_path:
        print("INFO: You can also provide the file for evaluation as argument ..")
        raw_path = input("What is the input file?\n").strip()
    path = Path(raw_path).expanduser()
    store_path = Path(args.store).expanduser() if args.store else None

    if not path.is_dir():
        if not evaluate(path, store_path, judge, settings):
            return 1
        if args.report:
            report_file(path, store_path or default_store_path(path, settings), settings)
        return 0

    store_path = store_path or path / f"{path.name}{settings.eval_file_suffix}"
    explorations = discover_explorations(path, settings)
    if not explorations:
        logger.error(f"No exploration files in {path}")
        return 2

    for exploration_path in explorations:
        evaluate(exploration_path, store_path, judge, settings)

    if args.report:
        report(path, store_path, settings)
    return 0


def main() -> None:
    """Main entry point for the application."""
    setup_logging()

    try:
        sys.exit(run(sys.argv[1:]))
    except (KeyboardInterrupt, JudgingAborted) as e:
        print(f"\nEvaluation terminated, unsaved classifications are lost. {e}".rstrip())
        sys.exit(0)
    except Exception as e:
        logging.error(f"Application error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
