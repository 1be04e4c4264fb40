"""
Calculator Runtime Package

Evaluates parsed expression trees and formats their results.

Author: xwest
"""

from .evaluator import Evaluator, QuitRequested, evaluate, evaluate_string, format_result

__all__ = [
    "Evaluator",
    "QuitRequested",
    "evaluate",
    "evaluate_string",
    "format_result",
]
