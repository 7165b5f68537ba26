"""Tokenization for the expression parser."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from sketchlang.errors import SketchSyntaxError

NUMBER = "NUMBER"
STRING = "STRING"
NAME = "NAME"
OP = "OP"
END = "END"

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<NUMBER>(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?)
    |(?P<STRING>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
    |(?P<NAME>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<OP>===|!==|\*\*|==|!=|<=|>=|&&|\|\||[-+*/%<>!()\[\],])
    |(?P<WS>\s+)
    |(?P<MISMATCH>.)
    """,
    re.VERBOSE,
)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    position: int


def unescape(body: str) -> str:
    """Resolve backslash escapes inside a quoted literal's body."""
    out: List[str] = []
    chars = iter(body)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        nxt = next(chars, "")
        out.append(_ESCAPES.get(nxt, nxt))
    return "".join(out)


class TokenizerMixin:
    """Mixin providing tokenization for expressions."""

    def _tokenize(self, source: str) -> List[Token]:
        """Tokenize expression source, dropping whitespace."""
        tokens: List[Token] = []
        for match in _TOKEN_PATTERN.finditer(source):
            kind = match.lastgroup
            value = match.group(0)
            if kind == "WS":
                continue
            if kind == "MISMATCH":
                if value in ('"', "'"):
                    raise SketchSyntaxError(
                        "Unterminated string literal",
                        column=match.start() + 1,
                        hint="Close the string with a matching quote",
                    )
                raise SketchSyntaxError(
                    f"Unexpected character '{value}'",
                    column=match.start() + 1,
                )
            tokens.append(Token(kind, value, match.start()))
        tokens.append(Token(END, "", len(source)))
        return tokens
