"""Statement and expression parsers for sketchlang source."""

from .base import ParserBase
from .expressions import ExpressionParser, parse_expression
from .statements import Parser, parse, parse_source

__all__ = [
    "ParserBase",
    "Parser",
    "ExpressionParser",
    "parse",
    "parse_source",
    "parse_expression",
]
