"""
Port: ExpressionParser
Responsibility: turning preprocessed text into an ExprAST tree.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, text: str) -> ExprAST:
        """
        Parses a single infix expression.
        Parentheses are flattened; they never appear as nodes.
        Raises ExpressionSyntaxError on malformed input.
        """
        ...
