"""Composition class for the expression parser."""

from __future__ import annotations

from typing import List

from sketchlang.ast.expressions import Expression, ParsedExpression
from sketchlang.errors import SketchSyntaxError

from .grammar import OperatorGrammarMixin
from .primary import PrimaryParserMixin
from .tokenizer import Token, TokenizerMixin
from .tokens import TokenOperationsMixin


class ExpressionParser(
    TokenizerMixin,
    TokenOperationsMixin,
    OperatorGrammarMixin,
    PrimaryParserMixin,
):
    """
    Hand-written parser for the expression sub-language.

    Precedence, lowest first::

        or ||
        and &&
        == != === !==
        < <= > >=
        + -
        * / %
        prefix - + ! not
        **
        calls, [index]

    Architecture:
        - TokenizerMixin: regex tokenization
        - TokenOperationsMixin: peek/consume/expect
        - OperatorGrammarMixin: precedence climbing
        - PrimaryParserMixin: literals, names, calls, lists, indexing
    """

    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = self._tokenize(source)
        self.token_pos: int = 0

    def parse(self) -> Expression:
        """Parse the whole source as a single expression."""
        if self.at_end():
            raise SketchSyntaxError("Empty expression")
        expr = self.parse_binary()
        if not self.at_end():
            token = self.current_token()
            raise SketchSyntaxError(
                f"Unexpected token '{token.value}' after expression",
                column=token.position + 1,
            )
        return expr


def parse_expression(source: str) -> ParsedExpression:
    """Parse ``source``, capturing a syntax error instead of raising it."""
    text = source.strip()
    try:
        tree = ExpressionParser(text).parse()
    except SketchSyntaxError as exc:
        return ParsedExpression(source=text, error=exc.message)
    except RecursionError:
        return ParsedExpression(source=text, error="Expression is nested too deeply")
    return ParsedExpression(source=text, tree=tree)
