"""
Adapter: ASTEvaluator
Implements port Evaluator: a recursive walk of ExprAST at a fixed binary precision.

Values are Fractions rounded to `precision_bits` after every operation
(see numeric.py), so integer results stay exact while 1/3 behaves like a
wide binary float.

  + - * /          float arithmetic at working precision
  % ^ << >> & |    integer-only: both operands are truncated toward zero
  sqrt sin cos tan evaluated in double precision (math module)
"""
from __future__ import annotations

import logging
import math
import operator
from collections.abc import Mapping
from fractions import Fraction
from types import MappingProxyType
from typing import Callable

from adapters.evaluator.numeric import parse_literal, round_to_precision, to_int
from config import MAX_INTEGER_BITS, PRECISION_BITS
from contracts import (
    BinOpNode,
    CallNode,
    DivisionByZero,
    ExprAST,
    FunctionDomainError,
    IdentifierNode,
    IntegerOverflow,
    InvalidBinaryOperator,
    InvalidCall,
    InvalidUnaryOperator,
    InvalidUnitTarget,
    LiteralNode,
    MissingArguments,
    UnaryOpNode,
    UnitNode,
    UnknownFunction,
    UnknownIdentifier,
    UnknownUnit,
)

logger = logging.getLogger("line_calc.evaluator")

# Shift counts are taken as unsigned 64-bit words: q mod 2**64
_SHIFT_WORD = 1 << 64


def _safe_div(a: Fraction, b: Fraction) -> Fraction:
    if b == 0:
        raise DivisionByZero("division by zero")
    return a / b


def _mod(p: int, q: int) -> int:
    # Euclidean modulus: the result is always in [0, |q|)
    if q == 0:
        raise DivisionByZero("modulo by zero")
    return p % abs(q)


def _pow(p: int, q: int, max_bits: int) -> int:
    if q <= 0:
        return 1
    # |p|**q needs more than max_bits bits exactly when q * log2|p| >= max_bits
    if abs(p) > 1 and (q >= max_bits or q * math.log2(abs(p)) >= max_bits):
        raise IntegerOverflow(f"power result exceeds {max_bits} bits")
    return p ** q


def _lsh(p: int, q: int, max_bits: int) -> int:
    n = q % _SHIFT_WORD
    if p != 0 and p.bit_length() + n > max_bits:
        raise IntegerOverflow(f"shift result exceeds {max_bits} bits")
    return p << n


def _rsh(p: int, q: int, max_bits: int) -> int:
    n = q % _SHIFT_WORD
    if n >= p.bit_length():
        return -1 if p < 0 else 0
    return p >> n


# Operators on the float value
_FLOAT_OPS: dict[str, Callable[[Fraction, Fraction], Fraction]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _safe_div,
}

# Integer-only operators (p, q, max_bits)
_INT_OPS: dict[str, Callable[[int, int, int], int]] = {
    "%":  lambda p, q, _: _mod(p, q),
    "^":  _pow,
    "<<": _lsh,
    ">>": _rsh,
    "&":  lambda p, q, _: p & q,
    "|":  lambda p, q, _: p | q,
}

_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sqrt": math.sqrt,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
}


class ASTEvaluator:
    """Fixed-precision evaluator over read-only identifier and unit tables."""

    def __init__(
        self,
        precision_bits: int = PRECISION_BITS,
        units: Mapping[str, int] | None = None,
        identifiers: Mapping[str, str] | None = None,
        max_integer_bits: int = MAX_INTEGER_BITS,
    ) -> None:
        self._bits = precision_bits
        self._max_int_bits = max_integer_bits
        self._units = MappingProxyType(dict(units or {}))
        self._identifiers = MappingProxyType({
            name: parse_literal(text, precision_bits, max_integer_bits)
            for name, text in (identifiers or {}).items()
        })

    # -- Evaluator protocol ------------------------------------------------

    def eval_expr(self, ast: ExprAST) -> Fraction:
        """Evaluates the tree recursively; the first error stops evaluation."""
        return self._eval(ast)

    # -- Private ----------------------------------------------------------

    def _round(self, value: Fraction) -> Fraction:
        return round_to_precision(value, self._bits)

    def _eval(self, node: ExprAST) -> Fraction:
        if isinstance(node, LiteralNode):
            return parse_literal(node.text, self._bits, self._max_int_bits)

        if isinstance(node, IdentifierNode):
            try:
                return self._identifiers[node.name]
            except KeyError:
                raise UnknownIdentifier(node.name) from None

        if isinstance(node, UnaryOpNode):
            return self._unary(node.op, self._eval(node.operand))

        if isinstance(node, BinOpNode):
            left = self._eval(node.left)
            right = self._eval(node.right)
            return self._binary(node.op, left, right)

        if isinstance(node, CallNode):
            return self._call(node)

        if isinstance(node, UnitNode):
            return self._unit(node.operand, node.unit)

        raise TypeError(f"Unknown AST node type: {type(node)}")

    def _unary(self, op: str, x: Fraction) -> Fraction:
        if op == "+":
            return x
        if op == "-":
            return -x
        if op == "!":
            # Unbounded ones' complement of the truncated integer
            return self._round(Fraction(~to_int(x)))
        raise InvalidUnaryOperator(op)

    def _binary(self, op: str, x: Fraction, y: Fraction) -> Fraction:
        fn = _FLOAT_OPS.get(op)
        if fn is not None:
            return self._round(fn(x, y))

        int_fn = _INT_OPS.get(op)
        if int_fn is None:
            raise InvalidBinaryOperator(op)
        try:
            result = int_fn(to_int(x), to_int(y), self._max_int_bits)
        except IntegerOverflow:
            logger.debug("Rejected %r on operands %s, %s", op, x, y)
            raise
        return self._round(Fraction(result))

    def _call(self, node: CallNode) -> Fraction:
        if not node.args:
            raise MissingArguments("call without arguments")

        callee = node.callee
        if isinstance(callee, IdentifierNode):
            args = [self._eval(arg) for arg in node.args]
            return self._function(callee.name, args)

        if isinstance(callee, LiteralNode):
            # "2(K)": the literal is the operand, the argument is the unit
            return self._unit(callee, node.args[0])

        raise InvalidCall("only functions and numbers can be called")

    def _function(self, name: str, args: list[Fraction]) -> Fraction:
        fn = _FUNCTIONS.get(name)
        if fn is None:
            raise UnknownFunction(name)
        # Transcendentals run in double precision; extra arguments are ignored
        try:
            return self._round(Fraction(fn(float(args[0]))))
        except (ValueError, OverflowError):
            raise FunctionDomainError(name) from None

    def _unit(self, operand: ExprAST, unit: ExprAST) -> Fraction:
        if not isinstance(unit, IdentifierNode):
            raise InvalidUnitTarget("unit must be a name")

        x = self._eval(operand)

        magnitude = self._units.get(unit.name)
        if magnitude is None:
            raise UnknownUnit(unit.name)
        if magnitude >= 0:
            return self._round(x * magnitude)
        return self._round(x / -magnitude)
