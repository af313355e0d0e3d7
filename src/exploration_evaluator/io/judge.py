"""
Judges deciding on hypotheses.

A judge is shown one hypothesis at a time and answers with a
classification. The terminal judge asks a human; the scripted judge answers
from a prepared mapping.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping

from exploration_evaluator.errors import JudgingAborted
from exploration_evaluator.evaluation.classification import Classification
from exploration_evaluator.exploration.schemas import Hypothesis

logger = logging.getLogger(__name__)


def describe_candidate(layer: int, hypothesis: Hypothesis, associated_word: str | None) -> str:
    """One-line description of a hypothesis for the judge."""
    if associated_word is None:
        return f"Layer: {layer}, Hypothesis: {hypothesis.value}"
    return f'Layer: {layer}, Word: "{associated_word}", Hypothesis: {hypothesis.value}'


class Judge(ABC):
    """Abstract base class for judges."""

    @abstractmethod
    def classify(
        self,
        layer: int,
        hypothesis: Hypothesis,
        associated_word: str | None,
        sentence: str,
    ) -> Classification:
        """
        Obtain a classification for a hypothesis.

        Args:
            layer: Layer of the hypothesis (starting at 0).
            hypothesis: The hypothesis to judge.
            associated_word: Word of the sentence the hypothesis refers to, if any.
            sentence: The explored sentence.

        Returns:
            The classification.

        Raises:
            JudgingAborted: If no classification can be obtained.
        """
        ...


class TextJudge(Judge):
    """
    Command-line judge.

    Shows the hypothesis on the terminal and asks until a valid short id
    is entered.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        """
        Initialize the text judge.

        Args:
            input_fn: Reads one line of user input.
            output: Displays a line of text.
        """
        self._input = input_fn
        self._output = output

    def classify(
        self,
        layer: int,
        hypothesis: Hypothesis,
        associated_word: str | None,
        sentence: str,
    ) -> Classification:
        self._output("----------------------")
        self._output(f'Next hypothesis for sentence "{sentence}" is:\n')
        self._output(describe_candidate(layer, hypothesis, associated_word))

        classification: Classification | None = None
        while classification is None:
            self._output(Classification.question())
            try:
                answer = self._input("> ")
            except EOFError:
                raise JudgingAborted("Input closed before the hypothesis was classified") from None
            classification = Classification.from_short_id(answer)
        return classification


class ScriptedJudge(Judge):
    """
    Judge answering from a mapping of hypothesis value to classification.

    Useful for replaying known judgments and for tests. Every hypothesis it
    is asked about is kept in `asked`.
    """

    def __init__(
        self,
        verdicts: Mapping[str, Classification | str],
        default: Classification | None = None,
    ) -> None:
        self._verdicts: dict[str, Classification] = {}
        for value, verdict in verdicts.items():
            if isinstance(verdict, str):
                parsed = Classification.from_short_id(verdict)
                if parsed is None:
                    raise ValueError(f"Unknown classification id '{verdict}' for {value!r}")
                verdict = parsed
            self._verdicts[value] = verdict
        self._default = default
        self.asked: list[tuple[int, str, str | None]] = []

    def classify(
        self,
        layer: int,
        hypothesis: Hypothesis,
        associated_word: str | None,
        sentence: str,
    ) -> Classification:
        self.asked.append((layer, hypothesis.value, associated_word))
        classification = self._verdicts.get(hypothesis.value, self._default)
        if classification is None:
            raise JudgingAborted(f"No scripted classification for {hypothesis.value!r}")
        logger.debug(f"Scripted verdict for {hypothesis.value!r}: {classification.name}")
        return classification
