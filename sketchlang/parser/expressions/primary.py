"""Primary expressions: literals, names, calls, grouping and indexing."""

from __future__ import annotations

from typing import List, TYPE_CHECKING

from sketchlang.errors import SketchSyntaxError

from .tokenizer import NAME, NUMBER, STRING, unescape

if TYPE_CHECKING:
    from sketchlang.ast.expressions import Expression

RESERVED_WORDS = {"and", "or", "not"}
BOOLEAN_WORDS = {"true": True, "false": False}


class PrimaryParserMixin:
    """Mixin for the atoms of the expression grammar."""

    def parse_postfix(self) -> "Expression":
        """Parse a primary followed by any number of ``[index]`` suffixes."""
        from sketchlang.ast.expressions import IndexExpr

        expr = self.parse_primary()
        while self.try_consume("["):
            index = self.parse_binary()
            self.expect("]")
            expr = IndexExpr(base=expr, index=index)
        return expr

    def _parse_sequence(self, closing: str) -> List["Expression"]:
        items: List["Expression"] = []
        while not self.try_consume(closing):
            if items:
                self.expect(",")
                # Trailing comma
                if self.try_consume(closing):
                    break
            items.append(self.parse_binary())
        return items

    def parse_primary(self) -> "Expression":
        from sketchlang.ast.expressions import CallExpr, ListExpr, LiteralExpr, VarExpr

        token = self.consume()

        if token.kind == NUMBER:
            text = token.value
            if any(marker in text for marker in ".eE"):
                return LiteralExpr(value=float(text))
            return LiteralExpr(value=int(text))

        if token.kind == STRING:
            return LiteralExpr(value=unescape(token.value[1:-1]))

        if token.kind == NAME:
            if token.value in BOOLEAN_WORDS:
                return LiteralExpr(value=BOOLEAN_WORDS[token.value])
            if token.value in RESERVED_WORDS:
                raise SketchSyntaxError(
                    f"Unexpected keyword '{token.value}'",
                    column=token.position + 1,
                )
            if self.try_consume("("):
                return CallExpr(name=token.value, args=tuple(self._parse_sequence(")")))
            return VarExpr(name=token.value)

        if token.value == "(":
            inner = self.parse_binary()
            self.expect(")")
            return inner

        if token.value == "[":
            return ListExpr(elements=tuple(self._parse_sequence("]")))

        raise SketchSyntaxError(
            f"Unexpected token '{token.value}'",
            column=token.position + 1,
            hint="Expected a number, string, name, list or parenthesised expression",
        )
