"""
Reporting module: scores and statistics files of evaluated explorations.
"""

from exploration_evaluator.reporting.statistics import (
    ScoredInput,
    all_possible_hits_per_layer,
    generate_stats,
    rank,
    score_input,
    write_reports,
)

__all__ = [
    "ScoredInput",
    "all_possible_hits_per_layer",
    "generate_stats",
    "rank",
    "score_input",
    "write_reports",
]
