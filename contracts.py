"""
contracts.py — Single source of truth for all LineCalc data types.
Every module imports shared types ONLY from here: the expression tree,
the answer model and the error hierarchy.
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── Expression tree ─────────────────────────────

class LiteralNode(BaseModel):
    node_type: Literal["literal"] = "literal"
    text: str  # literal text as typed, e.g. "0x1f", "1.5e3", "12."


class IdentifierNode(BaseModel):
    node_type: Literal["identifier"] = "identifier"
    name: str


class UnaryOpNode(BaseModel):
    node_type: Literal["unary"] = "unary"
    op: str
    operand: "ExprAST"


class BinOpNode(BaseModel):
    node_type: Literal["binop"] = "binop"
    op: str
    left: "ExprAST"
    right: "ExprAST"


class CallNode(BaseModel):
    node_type: Literal["call"] = "call"
    callee: "ExprAST"           # IdentifierNode for functions, LiteralNode for "1.(K)"
    args: list["ExprAST"] = Field(default_factory=list)


class UnitNode(BaseModel):
    node_type: Literal["unit"] = "unit"
    operand: "ExprAST"
    unit: "ExprAST"             # must be an IdentifierNode to be evaluated


ExprAST = Union[LiteralNode, IdentifierNode, UnaryOpNode, BinOpNode, CallNode, UnitNode]
UnaryOpNode.model_rebuild()
BinOpNode.model_rebuild()
CallNode.model_rebuild()
UnitNode.model_rebuild()


# ─────────────────────────── Answer ──────────────────────────────────────

class Answer(BaseModel):
    text: str                   # line as typed
    preprocessed: str           # preprocessor output, parser input
    lines: list[str]            # 1-3 display strings
    is_integer: bool = True     # False for the float branch


# ─────────────────────────── Errors ──────────────────────────────────────

class CalcError(Exception):
    """Base class of every error a line evaluation can end with."""


class ExpressionSyntaxError(CalcError):
    """Raised by the parser; carries the offending position when known."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position


class EvaluationError(CalcError):
    pass


class _NamedError(EvaluationError):
    template = "{name}"

    def __init__(self, name: str) -> None:
        super().__init__(self.template.format(name=name))
        self.name = name


class MalformedLiteral(_NamedError):
    template = "malformed literal {name!r}"


class UnknownIdentifier(_NamedError):
    template = "unknown identifier {name!r}"


class UnknownFunction(_NamedError):
    template = "unknown function {name!r}"


class UnknownUnit(_NamedError):
    template = "unknown unit {name!r}"


class InvalidUnaryOperator(_NamedError):
    template = "invalid unary operator {name!r}"


class InvalidBinaryOperator(_NamedError):
    template = "invalid binary operator {name!r}"


class InvalidUnitTarget(EvaluationError):
    pass


class InvalidCall(EvaluationError):
    pass


class DivisionByZero(EvaluationError):
    pass


class MissingArguments(EvaluationError):
    pass


class FunctionDomainError(_NamedError):
    template = "argument out of domain for {name}()"


class IntegerOverflow(EvaluationError):
    pass
