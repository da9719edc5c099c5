"""
Arbitrary-precision binary float arithmetic on top of Fraction.

A value is a Fraction that is exactly representable with `bits` mantissa
bits: sign * m * 2**e with m < 2**bits. Every operation computes the exact
Fraction result and then rounds it to the working precision with
round-half-to-even, which matches an IEEE-style binary float of that width
(without overflow: the exponent is unbounded).

Rounding and rendering work on the integer numerator and denominator with
shifts and a single division, so their cost stays linear in the width of
the value.
"""
from __future__ import annotations

import math
import re
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_EVEN, Context, Decimal
from fractions import Fraction

from config import MAX_INTEGER_BITS
from contracts import IntegerOverflow, MalformedLiteral

_PREFIXES = ("0x", "0X", "0b", "0B", "0o", "0O")

_DECIMAL_RE = re.compile(r"(?P<int>\d*)(?:\.(?P<frac>\d*))?(?:[eE](?P<exp>[+-]?\d+))?")

_LOG2_10 = math.log2(10)

# Extra digits carried when locating a value between its binary neighbours
_GUARD_DIGITS = 25


def _divide(num: int, den: int, shift: int) -> tuple[int, int, int]:
    """Quotient and remainder of num / (den * 2**shift), plus the divisor used."""
    if shift < 0:
        q, r = divmod(num << -shift, den)
        return q, r, den
    if den == 1:
        return num >> shift, num & ((1 << shift) - 1), 1 << shift
    divisor = den << shift
    q, r = divmod(num, divisor)
    return q, r, divisor


def _round_ratio(num: int, den: int, bits: int) -> tuple[int, int, bool]:
    """
    Round num / den (both positive) to mantissa * 2**shift with a `bits`-bit
    mantissa, ties to even. The flag tells whether no rounding was needed.
    """
    # num / den / 2**shift lands in [2**(bits-1), 2**(bits+1)) for this guess
    shift = num.bit_length() - den.bit_length() - bits
    q, r, divisor = _divide(num, den, shift)
    if q >> bits:
        shift += 1
        q, r, divisor = _divide(num, den, shift)
    if r == 0:
        return q, shift, True
    twice = 2 * r
    if twice > divisor or (twice == divisor and q & 1):
        q += 1
    return q, shift, False


def _scaled(mantissa: int, shift: int) -> Fraction:
    if shift >= 0:
        return Fraction(mantissa << shift)
    return Fraction(mantissa, 1 << -shift)


def round_to_precision(value: Fraction, bits: int) -> Fraction:
    """Round value to `bits` significant binary digits, ties to even."""
    if value == 0:
        return Fraction(0)
    mantissa, shift, exact = _round_ratio(abs(value.numerator), value.denominator, bits)
    if exact:
        return value
    result = _scaled(mantissa, shift)
    return result if value > 0 else -result


def to_int(value: Fraction) -> int:
    """Truncate toward zero; exact for integer values."""
    return math.trunc(value)


def is_integer(value: Fraction) -> bool:
    return value.denominator == 1


def parse_literal(text: str, bits: int, max_integer_bits: int = MAX_INTEGER_BITS) -> Fraction:
    """
    Parse a number literal: "0x1f", "0b101", "0o17" or a decimal form such
    as "42", "12.", ".5", "1.5e-3". Underscores separate digits.

    Plain integers follow Python's literal rules, so "08" is rejected.
    Raises MalformedLiteral for anything else, and IntegerOverflow when the
    written exponent alone would need more than `max_integer_bits` bits.
    """
    try:
        if text.startswith(_PREFIXES):
            return round_to_precision(Fraction(int(text, 0)), bits)

        match = _DECIMAL_RE.fullmatch(text.replace("_", ""))
        if match is None or not (match["int"] or match["frac"]):
            raise MalformedLiteral(text)
        if match["frac"] is None and match["exp"] is None:
            return round_to_precision(Fraction(int(text, 0)), bits)

        frac = match["frac"] or ""
        mantissa = int(match["int"] + frac)
        written = int(match["exp"] or 0)
    except ValueError:
        raise MalformedLiteral(text) from None

    if mantissa == 0:
        return Fraction(0)
    if abs(written) * _LOG2_10 > max_integer_bits:
        raise IntegerOverflow(f"exponent of {text} exceeds {max_integer_bits} bits")
    exponent = written - len(frac)
    if exponent >= 0:
        return round_to_precision(Fraction(mantissa * 10 ** exponent), bits)
    q, shift, _ = _round_ratio(mantissa, 10 ** -exponent, bits)
    return _scaled(q, shift)


def decimal_digits(bits: int) -> int:
    """Number of significant decimal digits needed to show `bits` bits."""
    return math.ceil(bits * math.log10(2))


def _context(digits: int) -> Context:
    return Context(prec=digits, rounding=ROUND_HALF_EVEN, Emax=MAX_EMAX, Emin=MIN_EMIN)


def _split(value: Fraction, bits: int) -> tuple[int, int]:
    """|value| as m * 2**e with 2**(bits-1) <= m < 2**bits."""
    m, e, _ = _round_ratio(abs(value.numerator), value.denominator, bits)
    if m >> bits:
        m, e = m >> 1, e + 1
    return m, e


def to_decimal_string(value: Fraction, bits: int) -> str:
    """
    Shortest decimal string that rounds back to the same value at `bits`
    precision, in Decimal's default notation ("0.25", "1.5E+100").

    The value and the midpoints to its binary neighbours are computed in
    Decimal with guard digits; the first candidate that falls strictly
    between the midpoints wins.
    """
    if value == 0:
        return "0"
    m, e = _split(value, bits)

    wide = _context(decimal_digits(bits) + _GUARD_DIGITS)
    half_ulp = wide.power(Decimal(2), e - 1)
    centre = wide.multiply(Decimal(2 * m), half_ulp)
    high = wide.multiply(Decimal(2 * m + 1), half_ulp)
    if m == 1 << (bits - 1):
        # Below a power of two the binary spacing halves
        low = wide.multiply(Decimal(4 * m - 1), wide.power(Decimal(2), e - 2))
    else:
        low = wide.multiply(Decimal(2 * m - 1), half_ulp)

    limit = decimal_digits(bits) + 1
    for digits in range(1, limit + 1):
        ctx = _context(digits)
        d = ctx.plus(centre)
        if low < d < high:
            break
    text = str(d.normalize(ctx))
    return text if value > 0 else "-" + text
