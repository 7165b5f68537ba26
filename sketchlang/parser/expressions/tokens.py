"""Token operations for the expression parser."""

from __future__ import annotations

from typing import List

from sketchlang.errors import SketchSyntaxError

from .tokenizer import END, NAME, OP, Token


class TokenOperationsMixin:
    """Mixin providing token manipulation operations."""

    tokens: List[Token]
    token_pos: int

    def current_token(self) -> Token:
        """Get current token without consuming it."""
        return self.tokens[min(self.token_pos, len(self.tokens) - 1)]

    def peek(self) -> Token:
        return self.current_token()

    def at_end(self) -> bool:
        return self.current_token().kind == END

    def consume(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.kind == END:
            raise SketchSyntaxError(
                "Unexpected end of expression",
                column=token.position + 1,
                hint="Check for incomplete expressions or missing closing brackets",
            )
        self.token_pos += 1
        return token

    def check(self, *values: str) -> bool:
        """Return True when the current token is an operator or word in ``values``."""
        token = self.current_token()
        return token.kind != END and token.value in values and token.kind in (OP, NAME)

    def try_consume(self, expected: str) -> bool:
        """Try to consume a token, return True if successful."""
        if self.check(expected):
            self.token_pos += 1
            return True
        return False

    def expect(self, expected: str) -> Token:
        """Expect a specific token."""
        token = self.current_token()
        if not self.check(expected):
            found = token.value or "end of expression"
            raise SketchSyntaxError(
                f"Expected '{expected}' but got '{found}'",
                column=token.position + 1,
            )
        self.token_pos += 1
        return token
