from __future__ import annotations

from typing import List, Optional, Sequence

from sketchlang.lexer import LineRecord


class ParserBase:
    """Shared parser state and cursor helpers over lexed line records."""

    def __init__(self, records: Sequence[LineRecord]):
        self.records: List[LineRecord] = list(records)
        self.pos: int = 0

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------
    def _peek(self) -> Optional[LineRecord]:
        """Return the current record without consuming it."""
        if self.pos < len(self.records):
            return self.records[self.pos]
        return None

    def _advance(self) -> Optional[LineRecord]:
        """Return the current record and move the cursor forward."""
        record = self._peek()
        self.pos += 1
        return record

    def _at_end(self) -> bool:
        return self.pos >= len(self.records)


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split ``text`` on ``separator`` outside brackets, parentheses and quotes."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0
    quote: Optional[str] = None
    escaped = False
    for char in text:
        if quote is not None:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in ('"', "'"):
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def matching_close(text: str, open_index: int) -> int:
    """Return the index of the bracket closing ``text[open_index]``, or -1."""
    pairs = {"(": ")", "[": "]"}
    opener = text[open_index]
    closer = pairs[opener]
    depth = 0
    quote: Optional[str] = None
    escaped = False
    for index in range(open_index, len(text)):
        char = text[index]
        if quote is not None:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in ('"', "'"):
            quote = char
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index
    return -1


__all__ = ["ParserBase", "split_top_level", "matching_close"]
