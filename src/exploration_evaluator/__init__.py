"""
Exploration evaluator.

Lets a human classify the hypotheses of hierarchical exploration results
once, keeps the classifications per layer and scores explorations by the
good and bad hypotheses they used.
"""

__version__ = "0.1.0"
