"""
IO module for judge interfaces.

Provides the terminal judge and a scripted judge for replaying verdicts.
"""

from exploration_evaluator.io.judge import Judge, ScriptedJudge, TextJudge

__all__ = ["Judge", "ScriptedJudge", "TextJudge"]
