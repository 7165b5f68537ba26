"""Operator grammar: precedence climbing over binary and prefix operators."""

from __future__ import annotations

from typing import Dict, Optional, TYPE_CHECKING

from .tokenizer import NAME, OP

if TYPE_CHECKING:
    from sketchlang.ast.expressions import Expression

BINARY_PRECEDENCE: Dict[str, int] = {
    "or": 1,
    "||": 1,
    "and": 2,
    "&&": 2,
    "==": 3,
    "!=": 3,
    "===": 3,
    "!==": 3,
    "<": 4,
    "<=": 4,
    ">": 4,
    ">=": 4,
    "+": 5,
    "-": 5,
    "*": 6,
    "/": 6,
    "%": 6,
}

# Spellings folded onto one canonical operator.
CANONICAL = {
    "||": "or",
    "&&": "and",
    "===": "==",
    "!==": "!=",
    "not": "!",
}

PREFIX_OPERATORS = ("-", "+", "!", "not")


class OperatorGrammarMixin:
    """Mixin parsing binary, prefix and power operators."""

    def _binary_operator(self) -> Optional[str]:
        token = self.current_token()
        if token.kind == OP and token.value in BINARY_PRECEDENCE:
            return token.value
        if token.kind == NAME and token.value in ("and", "or"):
            return token.value
        return None

    def parse_binary(self, min_precedence: int = 1) -> "Expression":
        """Parse a left-associative chain of binary operators."""
        from sketchlang.ast.expressions import BinaryOp, LogicalOp

        left = self.parse_unary()
        while True:
            op = self._binary_operator()
            if op is None or BINARY_PRECEDENCE[op] < min_precedence:
                return left
            self.consume()
            right = self.parse_binary(BINARY_PRECEDENCE[op] + 1)
            op = CANONICAL.get(op, op)
            if op in ("and", "or"):
                left = LogicalOp(op=op, left=left, right=right)
            else:
                left = BinaryOp(op=op, left=left, right=right)

    def parse_unary(self) -> "Expression":
        from sketchlang.ast.expressions import UnaryOp

        if self.check(*PREFIX_OPERATORS):
            op = self.consume().value
            return UnaryOp(op=CANONICAL.get(op, op), operand=self.parse_unary())
        return self.parse_power()

    def parse_power(self) -> "Expression":
        """Parse ``base ** exponent``; right-associative, binds tighter than prefix minus on its left."""
        from sketchlang.ast.expressions import BinaryOp

        base = self.parse_postfix()
        if self.try_consume("**"):
            return BinaryOp(op="**", left=base, right=self.parse_unary())
        return base
