"""
Port: Evaluator
Responsibility: computing the value of an ExprAST tree at a fixed precision.
"""
from fractions import Fraction
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class Evaluator(Protocol):
    def eval_expr(self, ast: ExprAST) -> Fraction:
        """
        Evaluates an expression tree to a single value.
        The result is always representable at the configured working
        precision; integer results are exact.
        Raises an EvaluationError subclass on failure (fail-fast: the
        first failing sub-expression wins).
        """
        ...
