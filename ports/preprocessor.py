"""
Port: Preprocessor
Responsibility: rewriting shorthand notation into text the parser accepts.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class Preprocessor(Protocol):
    def preprocess(self, raw: str) -> str:
        """
        Rewrites one input line before parsing:
          - operator aliases ("~" → "!", "**" → "^")
          - named constants → their literal digits
          - unit suffixes ("1K") → unit annotations ("1.(K)")
        Pure and total: never raises.
        """
        ...
