"""
Port: Formatter
Responsibility: rendering an evaluated value as display strings.
"""
from fractions import Fraction
from typing import Protocol, runtime_checkable


@runtime_checkable
class Formatter(Protocol):
    def format(self, value: Fraction) -> list[str]:
        """
        Returns [decimal, hex, binary] for displayable integers,
        or a single decimal float string otherwise.
        """
        ...
