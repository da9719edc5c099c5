"""
pipeline.py — LineCalculator: preprocess → parse → evaluate → format.

One instance is built at startup from Settings and shared by the CLI and the
API. It holds only read-only tables, so answering a line never changes it.
"""
from __future__ import annotations

import logging

from adapters.evaluator.ast_evaluator import ASTEvaluator
from adapters.evaluator.numeric import is_integer
from adapters.expression_parser.precedence_parser import PrecedenceParser
from adapters.formatter.radix_formatter import RadixFormatter
from adapters.preprocessor.suffix_preprocessor import SuffixPreprocessor
from config import Settings
from contracts import Answer, CalcError, ExprAST
from ports.evaluator import Evaluator
from ports.expression_parser import ExpressionParser
from ports.formatter import Formatter
from ports.preprocessor import Preprocessor

logger = logging.getLogger("line_calc.pipeline")


class LineCalculator:
    def __init__(
        self,
        preprocessor: Preprocessor,
        parser: ExpressionParser,
        evaluator: Evaluator,
        formatter: Formatter,
    ) -> None:
        self.preprocessor = preprocessor
        self.parser = parser
        self.evaluator = evaluator
        self.formatter = formatter

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> LineCalculator:
        settings = settings or Settings()
        return cls(
            preprocessor=SuffixPreprocessor(
                units=settings.units,
                constants=settings.constants,
            ),
            parser=PrecedenceParser(),
            evaluator=ASTEvaluator(
                precision_bits=settings.precision_bits,
                units=settings.units,
                identifiers=settings.identifiers,
                max_integer_bits=settings.max_integer_bits,
            ),
            formatter=RadixFormatter(
                precision_bits=settings.precision_bits,
                max_display_bits=settings.max_display_bits,
            ),
        )

    def tree(self, line: str) -> ExprAST:
        """Preprocess and parse only; used for --tree output."""
        return self.parser.parse(self.preprocessor.preprocess(line))

    def answer(self, line: str) -> Answer:
        """
        Evaluates one input line.
        Raises the first CalcError met; there are no partial results.
        """
        text = self.preprocessor.preprocess(line)
        logger.debug("Preprocessed %r -> %r", line, text)
        try:
            value = self.evaluator.eval_expr(self.parser.parse(text))
        except CalcError as exc:
            logger.debug("Evaluation of %r failed: %s: %s", line, type(exc).__name__, exc)
            raise
        return Answer(
            text=line,
            preprocessed=text,
            lines=self.formatter.format(value),
            is_integer=is_integer(value),
        )
