import pytest

from adapters.expression_parser.precedence_parser import PrecedenceParser
from contracts import (
    BinOpNode,
    CallNode,
    ExpressionSyntaxError,
    IdentifierNode,
    LiteralNode,
    UnaryOpNode,
    UnitNode,
)


def _lit(text: str) -> LiteralNode:
    return LiteralNode(text=text)


def test_parser_applies_multiplicative_precedence():
    tree = PrecedenceParser().parse("1+2*3")

    assert tree == BinOpNode(
        op="+",
        left=_lit("1"),
        right=BinOpNode(op="*", left=_lit("2"), right=_lit("3")),
    )


def test_parser_is_left_associative():
    tree = PrecedenceParser().parse("8-3-2")

    assert tree == BinOpNode(
        op="-",
        left=BinOpNode(op="-", left=_lit("8"), right=_lit("3")),
        right=_lit("2"),
    )


def test_parser_puts_power_on_additive_level():
    tree = PrecedenceParser().parse("2^3*2")

    assert tree == BinOpNode(
        op="^",
        left=_lit("2"),
        right=BinOpNode(op="*", left=_lit("3"), right=_lit("2")),
    )


def test_parser_shift_binds_like_multiplication():
    tree = PrecedenceParser().parse("1+1<<4")

    assert tree == BinOpNode(
        op="+",
        left=_lit("1"),
        right=BinOpNode(op="<<", left=_lit("1"), right=_lit("4")),
    )


def test_parser_flattens_parentheses_and_nests_unary():
    tree = PrecedenceParser().parse("-(!x)")

    assert tree == UnaryOpNode(
        op="-",
        operand=UnaryOpNode(op="!", operand=IdentifierNode(name="x")),
    )


def test_parser_keeps_literal_text_verbatim():
    parser = PrecedenceParser()

    assert parser.parse("12.") == _lit("12.")
    assert parser.parse("1e+5") == _lit("1e+5")
    assert parser.parse(".5") == _lit(".5")
    assert parser.parse("0xFF") == _lit("0xFF")
    assert parser.parse("12abc") == _lit("12abc")


def test_parser_reads_unit_annotation():
    parser = PrecedenceParser()

    assert parser.parse("1.(K)") == UnitNode(operand=_lit("1"), unit=IdentifierNode(name="K"))
    assert parser.parse("(1+2).(M)") == UnitNode(
        operand=BinOpNode(op="+", left=_lit("1"), right=_lit("2")),
        unit=IdentifierNode(name="M"),
    )


def test_parser_reads_calls():
    parser = PrecedenceParser()

    assert parser.parse("sqrt(4)") == CallNode(
        callee=IdentifierNode(name="sqrt"), args=[_lit("4")],
    )
    assert parser.parse("2(K)") == CallNode(callee=_lit("2"), args=[IdentifierNode(name="K")])
    assert parser.parse("f()") == CallNode(callee=IdentifierNode(name="f"), args=[])
    assert parser.parse("f(1, 2)").args == [_lit("1"), _lit("2")]


@pytest.mark.parametrize(
    "text",
    ["", "   ", "1+", "(1", "1)", "2 $ 3", "1 . 2", "f(1,", "*2"],
)
def test_parser_rejects_malformed_input(text):
    with pytest.raises(ExpressionSyntaxError):
        PrecedenceParser().parse(text)


def test_parser_reports_error_position():
    with pytest.raises(ExpressionSyntaxError) as info:
        PrecedenceParser().parse("1 + $")

    assert info.value.position == 4
