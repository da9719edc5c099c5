from fractions import Fraction

import pytest

from adapters.formatter.radix_formatter import RadixFormatter, separate, twos_complement


def test_format_small_integer():
    assert RadixFormatter().format(Fraction(4)) == ["4", "0x4", "0b100"]


def test_format_groups_digits():
    assert RadixFormatter().format(Fraction(1024)) == ["1,024", "0x400", "0b100_00000000"]
    assert RadixFormatter().format(Fraction(0xDEADBEEF))[:2] == ["3,735,928,559", "0xdead_beef"]


def test_format_negative_within_32_bits_uses_twos_complement():
    assert RadixFormatter().format(Fraction(-1)) == [
        "-1",
        "0xffff_ffff",
        "0b11111111_11111111_11111111_11111111",
    ]
    assert RadixFormatter().format(Fraction(-(2**31)))[1] == "0x8000_0000"


def test_format_negative_within_64_bits_uses_64_bit_register():
    lines = RadixFormatter().format(Fraction(-(2**40)))

    assert lines[0] == "-1,099,511,627,776"
    assert lines[1] == "0xffff_ff00_0000_0000"
    assert lines[2].startswith("0b11111111_11111111_11111111_00000000_")
    assert RadixFormatter().format(Fraction(-(2**32)))[1] == "0xffff_ffff_0000_0000"


def test_format_negative_wider_than_64_bits_keeps_sign():
    lines = RadixFormatter().format(Fraction(-(2**70)))

    assert lines[1] == "-0x40_0000_0000_0000_0000"
    assert lines[2].startswith("-0b1000000_00000000_")


def test_format_integer_beyond_display_width_falls_back_to_float():
    assert len(RadixFormatter().format(Fraction(2**299))) == 3

    lines = RadixFormatter().format(Fraction(2**300))

    assert len(lines) == 1
    assert lines[0].startswith("2.037035976334486")
    assert lines[0].endswith("E+90")


def test_format_display_width_is_configurable():
    assert len(RadixFormatter(max_display_bits=64).format(Fraction(2**64))) == 1
    assert len(RadixFormatter(max_display_bits=64).format(Fraction(2**63))) == 3


def test_format_fraction_as_single_decimal_string():
    assert RadixFormatter().format(Fraction(3, 2)) == ["1.5"]
    assert RadixFormatter().format(Fraction(-1, 8)) == ["-0.125"]


def test_separate_never_detaches_sign():
    assert separate("-123", ",", 3) == "-123"
    assert separate("-123456", ",", 3) == "-123,456"
    assert separate("1234567", ",", 3) == "1,234,567"


@pytest.mark.parametrize("digits", ["0", "12", "123", "1234", "-1234567", "1" * 40])
def test_separate_is_reversible(digits):
    assert separate(digits, ",", 3).replace(",", "") == digits


def test_twos_complement():
    assert twos_complement(5) == ("", 5)
    assert twos_complement(-1) == ("", 2**32 - 1)
    assert twos_complement(-(2**40)) == ("", 2**64 - 2**40)
    assert twos_complement(-(2**64)) == ("-", 2**64)
