"""Expression tokenizer and parser."""

from .main import ExpressionParser, parse_expression
from .tokenizer import Token

__all__ = ["ExpressionParser", "parse_expression", "Token"]
