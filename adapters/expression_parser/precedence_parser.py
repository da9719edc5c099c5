"""
Adapter: PrecedenceParser
Implements port ExpressionParser.

Precedence climbing parser:
  expr    = unary (BINOP unary)*
  unary   = ('+'|'-'|'!') unary | postfix
  postfix = primary ( '(' args ')' | '.' '(' expr ')' )*
  primary = NUMBER | IDENT | '(' expr ')'

Binary operators, all left-associative:
  50: *  /  %  <<  >>  &
  40: +  -  |  ^

The postfix forms carry unit annotations: "1.(K)" and "(1+2).(K)" from the
preprocessor become UnitNode, a typed "2(K)" is a call on the literal "2".
"""
from __future__ import annotations

import re
from typing import NamedTuple

from contracts import (
    BinOpNode,
    CallNode,
    ExprAST,
    ExpressionSyntaxError,
    IdentifierNode,
    LiteralNode,
    UnaryOpNode,
    UnitNode,
)

# ──────────────────────────────────────────────────────────────────────────────
# Tokenizer
# ──────────────────────────────────────────────────────────────────────────────

_TOKEN_RE = re.compile(
    r'(?P<number>0[xXbBoO]\w*'                  # prefixed integer (no dot)
    r'|(?:\d\w*(?:\.(?!\()\w*)?|\.\d\w*)'       # decimal number, "12." allowed
    r'(?:(?<=[eE])[+-]\d\w*)?)'                 # exponent sign, e.g. "1e+5"
    r'|(?P<ident>[A-Za-z_]\w*)'
    r'|(?P<op><<|>>|[-+*/%^&|!(),.])'
    r'|(?P<space>\s+)'
)

_UNARY_OPS = frozenset({"+", "-", "!"})

# Left binding power of binary operators
_LEFT_BP: dict[str, int] = {
    "*": 50, "/": 50, "%": 50, "<<": 50, ">>": 50, "&": 50,
    "+": 40, "-": 40, "|": 40, "^": 40,
}


class _Token(NamedTuple):
    kind: str   # "number" | "ident" | "op"
    text: str
    pos: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ExpressionSyntaxError(
                f"unexpected character {text[pos]!r} at {pos}", position=pos,
            )
        kind = m.lastgroup
        if kind != "space":
            tokens.append(_Token(kind, m.group(), pos))
        pos = m.end()
    return tokens


# ──────────────────────────────────────────────────────────────────────────────
# Precedence climbing parser
# ──────────────────────────────────────────────────────────────────────────────

class _Parser:
    def __init__(self, tokens: list[_Token], length: int) -> None:
        self._tokens = tokens
        self._pos = 0
        self._end = length

    def _peek(self, offset: int = 0) -> _Token | None:
        i = self._pos + offset
        return self._tokens[i] if i < len(self._tokens) else None

    def _peek_op(self, offset: int = 0) -> str | None:
        tok = self._peek(offset)
        return tok.text if tok is not None and tok.kind == "op" else None

    def _consume(self) -> _Token:
        tok = self._peek()
        if tok is None:
            raise ExpressionSyntaxError("unexpected end of expression", position=self._end)
        self._pos += 1
        return tok

    def _expect(self, op: str) -> None:
        tok = self._consume()
        if tok.kind != "op" or tok.text != op:
            raise ExpressionSyntaxError(
                f"expected {op!r}, got {tok.text!r} at {tok.pos}", position=tok.pos,
            )

    def parse(self) -> ExprAST:
        node = self._expr(0)
        tok = self._peek()
        if tok is not None:
            raise ExpressionSyntaxError(
                f"unexpected token {tok.text!r} at {tok.pos}", position=tok.pos,
            )
        return node

    def _expr(self, min_bp: int) -> ExprAST:
        left = self._unary()
        while True:
            op = self._peek_op()
            if op is None or op not in _LEFT_BP:
                break
            bp = _LEFT_BP[op]
            if bp <= min_bp:
                break
            self._consume()
            # Left-assoc: the right operand only takes tighter operators
            right = self._expr(bp)
            left = BinOpNode(op=op, left=left, right=right)
        return left

    def _unary(self) -> ExprAST:
        op = self._peek_op()
        if op in _UNARY_OPS:
            self._consume()
            return UnaryOpNode(op=op, operand=self._unary())
        return self._postfix(self._primary())

    def _postfix(self, node: ExprAST) -> ExprAST:
        while True:
            op = self._peek_op()
            if op == "(":
                self._consume()
                node = CallNode(callee=node, args=self._args())
            elif op == "." and self._peek_op(1) == "(":
                self._consume()
                self._consume()
                unit = self._expr(0)
                self._expect(")")
                node = UnitNode(operand=node, unit=unit)
            else:
                return node

    def _args(self) -> list[ExprAST]:
        args: list[ExprAST] = []
        if self._peek_op() == ")":
            self._consume()
            return args
        while True:
            args.append(self._expr(0))
            if self._peek_op() == ",":
                self._consume()
                continue
            self._expect(")")
            return args

    def _primary(self) -> ExprAST:
        tok = self._consume()
        if tok.kind == "number":
            return LiteralNode(text=tok.text)
        if tok.kind == "ident":
            return IdentifierNode(name=tok.text)
        if tok.text == "(":
            node = self._expr(0)
            self._expect(")")
            return node
        raise ExpressionSyntaxError(
            f"unexpected token {tok.text!r} at {tok.pos}", position=tok.pos,
        )


# ──────────────────────────────────────────────────────────────────────────────
# Adapter
# ──────────────────────────────────────────────────────────────────────────────

class PrecedenceParser:
    """Parses one preprocessed line into an ExprAST tree."""

    # -- ExpressionParser protocol ------------------------------------------

    def parse(self, text: str) -> ExprAST:
        tokens = _tokenize(text)
        if not tokens:
            raise ExpressionSyntaxError("empty expression", position=0)
        return _Parser(tokens, len(text)).parse()
