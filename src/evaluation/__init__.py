"""
Evaluation module for automated players.

Runs players through successive rounds and reports results.
"""
from .evaluator import Evaluator, RoundStats

__all__ = [
    "Evaluator",
    "RoundStats",
]
