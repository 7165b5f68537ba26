"""Line-oriented lexer turning source text into logical line records.

Blocks are delimited by indentation alone, so the lexer does not split lines
into tokens. It trims each physical line, measures its leading whitespace and
joins the physical lines spanned by an open ``[`` literal into one logical
record. Expression tokens are produced later, per expression, by
:mod:`sketchlang.parser.expressions`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

COMMENT_MARKER = "#"
_QUOTES = ('"', "'")


@dataclass(frozen=True)
class LineRecord:
    """One bracket-balanced logical line.

    Attributes:
        text: Trimmed text, physical lines joined by single spaces.
        indent: Count of leading whitespace characters on the first physical line.
        line: 1-based number of the first physical line.
    """

    text: str
    indent: int
    line: int = 0


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def _is_blank_or_comment(stripped: str) -> bool:
    return not stripped or stripped.startswith(COMMENT_MARKER)


def bracket_delta(text: str, quote: Optional[str] = None) -> tuple[int, Optional[str]]:
    """Return the net ``[``/``]`` depth change of ``text`` and the open quote.

    Brackets inside quoted string literals are ignored. ``quote`` is the
    string delimiter still open from a previous physical line, if any.
    """
    depth = 0
    escaped = False
    for char in text:
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
    return depth, quote


def lex(source: str) -> List[LineRecord]:
    """Split ``source`` into logical :class:`LineRecord` entries.

    Blank lines and ``#`` comment lines are dropped unless a bracketed literal
    is open, in which case they are appended to the pending record like any
    other physical line. Input that ends with brackets still open flushes the
    pending record as it stands.
    """
    records: List[LineRecord] = []
    buffer: List[str] = []
    start_indent = 0
    start_line = 0
    depth = 0
    quote: Optional[str] = None

    for number, physical in enumerate(source.splitlines(), start=1):
        stripped = physical.strip()
        if not buffer:
            if _is_blank_or_comment(stripped):
                continue
            start_indent = _indent_width(physical)
            start_line = number
        buffer.append(stripped)
        delta, quote = bracket_delta(stripped, quote)
        depth += delta
        if depth <= 0:
            records.append(LineRecord(" ".join(buffer), start_indent, start_line))
            buffer = []
            depth = 0
            quote = None

    if buffer:
        records.append(LineRecord(" ".join(buffer), start_indent, start_line))
    return records


__all__ = ["LineRecord", "lex", "bracket_delta", "COMMENT_MARKER"]
