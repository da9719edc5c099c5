"""
Adapter: RadixFormatter
Implements port Formatter.

Integers (up to max_display_bits) are shown three times:
  1,234,567        decimal, grouped by 3 with ","
  0x12_d687        hex, grouped by 4 with "_"
  0b1_00101101_... binary, grouped by 8 with "_"

Negative integers use two's complement in the hex/binary forms when they
fit a 32-bit or 64-bit register; wider ones get a leading "-".
Everything else is one plain decimal float string.
"""
from __future__ import annotations

from fractions import Fraction

from adapters.evaluator.numeric import is_integer, to_decimal_string
from config import PRECISION_BITS, SHOW_MAX_BITS

_REGISTER_WIDTHS = (32, 64)


def separate(num: str, sep: str, n: int) -> str:
    """
    Insert `sep` every `n` digits counting from the right.
    A leading "-" is never separated from the digit it qualifies.
    """
    out: list[str] = []
    for i, c in enumerate(reversed(num)):
        if i > 0 and i % n == 0 and c != "-":
            out.append(sep)
        out.append(c)
    return "".join(reversed(out))


def twos_complement(value: int) -> tuple[str, int]:
    """Return (sign, magnitude) used by the hex and binary forms."""
    if value >= 0:
        return "", value
    for width in _REGISTER_WIDTHS:
        if value.bit_length() <= width:
            return "", value + (1 << width)
    return "-", -value


class RadixFormatter:
    """Renders evaluated values in decimal, hex and binary."""

    def __init__(
        self,
        precision_bits: int = PRECISION_BITS,
        max_display_bits: int = SHOW_MAX_BITS,
    ) -> None:
        self._bits = precision_bits
        self._max_display_bits = max_display_bits

    # -- Formatter protocol ------------------------------------------------

    def format(self, value: Fraction) -> list[str]:
        if is_integer(value) and int(value).bit_length() <= self._max_display_bits:
            return self.format_integer(int(value))
        return [to_decimal_string(value, self._bits)]

    # -- Public helpers ----------------------------------------------------

    @staticmethod
    def format_integer(v: int) -> list[str]:
        minus, magnitude = twos_complement(v)
        return [
            separate(str(v), ",", 3),
            minus + "0x" + separate(format(magnitude, "x"), "_", 4),
            minus + "0b" + separate(format(magnitude, "b"), "_", 8),
        ]
