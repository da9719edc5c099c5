"""
Adapter: SuffixPreprocessor
Implements port Preprocessor.

Rewrites, in this order (later steps rely on earlier ones):
  1. operator aliases:  "~" → "!",  "**" → "^"
  2. named constants:   pi → 3.14159…  (whole words only)
  3. unit suffixes:     "1K" → "1.(K)",  "(1+2) M" → "(1+2).(M)"

The suffix is only rewritten when it directly follows a number literal or a
closing parenthesis and is not the start of a longer identifier, so "tan",
"x1K" and "0x1f" stay untouched.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

_ALIASES: tuple[tuple[str, str], ...] = (
    ("~", "!"),
    ("**", "^"),
)

# Number literal shapes a unit may be attached to
_NUMBER = (
    r"(?<![\w.])"
    r"(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+"
    r"|(?:\d[\d_]*(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)


def _suffix_pattern(units: Iterable[str]) -> re.Pattern[str] | None:
    # Longest first so multi-letter units win over their prefixes
    tokens = sorted(units, key=len, reverse=True)
    if not tokens:
        return None
    alternation = "|".join(re.escape(t) for t in tokens)
    return re.compile(
        rf"(?P<operand>{_NUMBER}|\))(?P<blank>[ \t]*)(?P<unit>{alternation})(?!\w)"
    )


class SuffixPreprocessor:
    """Text rewriter driven by the constant and unit tables."""

    def __init__(
        self,
        units: Iterable[str],
        constants: Mapping[str, str] | None = None,
    ) -> None:
        self._suffix_re = _suffix_pattern(units)
        self._constants = dict(constants or {})
        self._constant_re = (
            re.compile(r"\b(" + "|".join(map(re.escape, self._constants)) + r")\b")
            if self._constants else None
        )

    # -- Preprocessor protocol ---------------------------------------------

    def preprocess(self, raw: str) -> str:
        s = raw
        for alias, canonical in _ALIASES:
            s = s.replace(alias, canonical)

        if self._constant_re is not None:
            s = self._constant_re.sub(lambda m: self._constants[m.group(1)], s)

        if self._suffix_re is not None:
            s = self._suffix_re.sub(r"\g<operand>\g<blank>.(\g<unit>)", s)

        return s
