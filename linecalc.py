#!/usr/bin/env python3
"""
linecalc.py — LineCalc CLI.

Without arguments starts an interactive loop: every line is evaluated and
answered in decimal, hex and binary (or as a decimal float). Errors are
printed and the loop goes on; Ctrl-D or Ctrl-C ends it.

Configuration: environment variables with the LINE_CALC_ prefix or a .env
file (e.g. LINE_CALC_PRECISION_BITS=256).

Usage:
    python linecalc.py
    python linecalc.py "2+2" "1K" "sqrt(2)"
    python linecalc.py --tree "(1+2)M"
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from rich.console import Console
from rich.text import Text

from config import Settings
from contracts import (
    BinOpNode,
    CalcError,
    CallNode,
    ExprAST,
    IdentifierNode,
    LiteralNode,
    UnaryOpNode,
    UnitNode,
)
from pipeline import LineCalculator

PROMPT = "> "
ANSWER_PROMPT = "=> "


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _safe_terminal_text(value: Any) -> str:
    s = str(value)
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


def layout_answer(parts: list[str], width: int) -> list[str]:
    """
    Lay the answer parts out as terminal rows.
    The first part follows "=> ", the rest are indented by the same width;
    parts share a row while it stays narrower than `width`.
    """
    pad = " " * len(ANSWER_PROMPT)
    rows: list[str] = []
    row = ""
    for i, part in enumerate(parts):
        cell = (ANSWER_PROMPT if i == 0 else pad) + part
        if row and len(row) + len(cell) >= width:
            rows.append(row)
            row = cell
        else:
            row += cell
    if row:
        rows.append(row)
    return rows


def tree_lines(node: ExprAST, depth: int = 0) -> list[str]:
    """One line per node, children indented by two spaces."""
    indent = "  " * depth
    if isinstance(node, LiteralNode):
        return [f"{indent}Literal {node.text}"]
    if isinstance(node, IdentifierNode):
        return [f"{indent}Identifier {node.name}"]
    if isinstance(node, UnaryOpNode):
        return [f"{indent}UnaryOp {node.op}", *tree_lines(node.operand, depth + 1)]
    if isinstance(node, BinOpNode):
        return [
            f"{indent}BinaryOp {node.op}",
            *tree_lines(node.left, depth + 1),
            *tree_lines(node.right, depth + 1),
        ]
    if isinstance(node, CallNode):
        lines = [f"{indent}Call", *tree_lines(node.callee, depth + 1)]
        for arg in node.args:
            lines.extend(tree_lines(arg, depth + 1))
        return lines
    if isinstance(node, UnitNode):
        return [
            f"{indent}Unit",
            *tree_lines(node.operand, depth + 1),
            *tree_lines(node.unit, depth + 1),
        ]
    raise TypeError(f"Unknown AST node type: {type(node)}")


def _print_answer(parts: list[str]) -> None:
    console = _console()
    for i, row in enumerate(layout_answer(parts, console.width)):
        text = _safe_terminal_text(row)
        if i == 0:
            console.print(Text.assemble((ANSWER_PROMPT, "bold"), text[len(ANSWER_PROMPT):]))
        else:
            console.print(Text(text))


def _print_error(exc: CalcError) -> None:
    _console().print(Text(_safe_terminal_text(exc), style="red"))


def _print_tree(calc: LineCalculator, line: str) -> None:
    try:
        tree = calc.tree(line)
    except CalcError:
        # The syntax error itself is reported by the answer that follows
        return
    _console().print()
    for row in tree_lines(tree):
        _console().print(Text(row))
    _console().print()


def _evaluate(calc: LineCalculator, line: str, show_tree: bool) -> bool:
    if show_tree:
        _print_tree(calc, line)
    try:
        answer = calc.answer(line)
    except CalcError as exc:
        _print_error(exc)
        return False
    _print_answer(answer.lines)
    return True


# -- commands --------------------------------------------------------------

def _run_once(calc: LineCalculator, expressions: list[str], show_tree: bool) -> int:
    ok = True
    for expr in expressions:
        ok = _evaluate(calc, expr, show_tree) and ok
    return 0 if ok else 1


def _repl(calc: LineCalculator, show_tree: bool) -> int:
    console = _console()
    while True:
        try:
            line = console.input(Text(PROMPT, style="bold"))
        except (EOFError, KeyboardInterrupt):
            console.print()
            return 0
        if not line.strip():
            continue
        _evaluate(calc, line, show_tree)


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="linecalc",
        description="LineCalc — arbitrary-precision calculator with hex/binary output",
    )
    parser.add_argument("expressions", nargs="*", metavar="EXPR",
                        help="Expressions to evaluate (interactive mode when omitted)")
    parser.add_argument("--tree", action="store_true",
                        help="Print the parsed expression tree before each answer")
    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())
    calc = LineCalculator.from_settings(settings)

    if args.expressions:
        return _run_once(calc, args.expressions, args.tree)
    return _repl(calc, args.tree)


if __name__ == "__main__":
    sys.exit(main())
