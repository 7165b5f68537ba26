"""Indentation-driven statement parser.

Block membership comes from indentation alone: a record belongs to the block
of the nearest preceding opener (function, loop or if) whose indent is
strictly smaller than its own. Lines no rule recognises become inert
:class:`Unknown` statements, so parsing never fails.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from sketchlang.ast import (
    Assignment,
    Block,
    Call,
    CanvasSize,
    FunctionDeclaration,
    IfStatement,
    LoopFor,
    LoopWhile,
    ParsedExpression,
    ReturnStatement,
    Statement,
    Unknown,
)
from sketchlang.lexer import LineRecord, lex
from sketchlang.observability import get_logger

from .base import ParserBase, matching_close, split_top_level
from .expressions import parse_expression

logger = get_logger("sketchlang.parser")

_NAME = r"[A-Za-z_][A-Za-z0-9_]*"
_CANVAS_RE = re.compile(r"^CanvasSize\s*=\s*\(\s*(\d+)\s*,\s*(\d+)\s*\)$")
_FUNCTION_RE = re.compile(rf"^function\s+({_NAME})\s*\((.*?)\)\s*:$")
_LOOP_TIMES_RE = re.compile(rf"^loop\s+(?:({_NAME})\s*=\s*)?(.+?)\s+times\s*:$")
_LOOP_WHILE_RE = re.compile(r"^loop\s+while\b\s*(.+?)\s*:$")
_IF_RE = re.compile(r"^if\b\s*(.+?)\s*:$")
_ELSE_RE = re.compile(r"^else\s*:$")
_RETURN_RE = re.compile(r"^return\b\s*(.*)$")
_TARGET_RE = re.compile(rf"^({_NAME})\s*")
_CALL_RE = re.compile(rf"^({_NAME})\s*\(")

TOP_LEVEL_INDENT = -1


def _split_arguments(text: str) -> Tuple[ParsedExpression, ...]:
    if not text.strip():
        return ()
    return tuple(parse_expression(part) for part in split_top_level(text))


class Parser(ParserBase):
    """Recursive-descent parser over indentation.

    Each statement rule is tried in priority order; openers recurse into
    :meth:`parse_block` with their own indent as the new parent bound.
    """

    def __init__(self, records: Sequence[LineRecord]):
        super().__init__(records)
        self._rules: Tuple[Callable[[LineRecord], Optional[Statement]], ...] = (
            self._parse_canvas_size,
            self._parse_function,
            self._parse_loop_times,
            self._parse_loop_while,
            self._parse_if,
            self._parse_return,
            self._parse_assignment,
            self._parse_call,
        )

    def parse(self) -> Block:
        """Parse every record as a top-level statement list."""
        self.pos = 0
        return self.parse_block(TOP_LEVEL_INDENT)

    def parse_block(self, parent_indent: int) -> Block:
        """Consume records while their indent is strictly greater than ``parent_indent``."""
        block: List[Statement] = []
        while not self._at_end():
            record = self._peek()
            if record.indent <= parent_indent:
                break
            block.append(self.parse_statement())
        return tuple(block)

    def parse_statement(self) -> Statement:
        record = self._advance()
        for rule in self._rules:
            statement = rule(record)
            if statement is not None:
                return statement
        logger.debug("Unrecognised line %d: %s", record.line, record.text)
        return Unknown(text=record.text, line=record.line)

    # ------------------------------------------------------------------
    # Statement rules
    # ------------------------------------------------------------------
    def _parse_canvas_size(self, record: LineRecord) -> Optional[Statement]:
        match = _CANVAS_RE.match(record.text)
        if not match:
            return None
        return CanvasSize(width=int(match.group(1)), height=int(match.group(2)), line=record.line)

    def _parse_function(self, record: LineRecord) -> Optional[Statement]:
        match = _FUNCTION_RE.match(record.text)
        if not match:
            return None
        params = tuple(part.strip() for part in match.group(2).split(",") if part.strip())
        body = self.parse_block(record.indent)
        return FunctionDeclaration(name=match.group(1), params=params, body=body, line=record.line)

    def _parse_loop_times(self, record: LineRecord) -> Optional[Statement]:
        match = _LOOP_TIMES_RE.match(record.text)
        if not match:
            return None
        count = parse_expression(match.group(2))
        body = self.parse_block(record.indent)
        return LoopFor(var=match.group(1), count=count, body=body, line=record.line)

    def _parse_loop_while(self, record: LineRecord) -> Optional[Statement]:
        match = _LOOP_WHILE_RE.match(record.text)
        if not match:
            return None
        condition = parse_expression(match.group(1))
        body = self.parse_block(record.indent)
        return LoopWhile(condition=condition, body=body, line=record.line)

    def _parse_if(self, record: LineRecord) -> Optional[Statement]:
        match = _IF_RE.match(record.text)
        if not match:
            return None
        condition = parse_expression(match.group(1))
        consequent = self.parse_block(record.indent)

        alternate: Block = ()
        nxt = self._peek()
        if nxt is not None and nxt.indent == record.indent and _ELSE_RE.match(nxt.text):
            self._advance()
            alternate = self.parse_block(record.indent)

        return IfStatement(
            condition=condition,
            consequent=consequent,
            alternate=alternate,
            line=record.line,
        )

    def _parse_return(self, record: LineRecord) -> Optional[Statement]:
        match = _RETURN_RE.match(record.text)
        if not match:
            return None
        text = match.group(1).strip()
        value = parse_expression(text) if text else None
        return ReturnStatement(value=value, line=record.line)

    def _parse_assignment(self, record: LineRecord) -> Optional[Statement]:
        text = record.text
        match = _TARGET_RE.match(text)
        if not match:
            return None
        target = match.group(1)
        cursor = match.end()
        indices: List[ParsedExpression] = []
        while cursor < len(text) and text[cursor] == "[":
            close = matching_close(text, cursor)
            if close < 0:
                return None
            indices.append(parse_expression(text[cursor + 1:close]))
            cursor = close + 1
            while cursor < len(text) and text[cursor].isspace():
                cursor += 1
        if not text.startswith("=", cursor) or text.startswith("==", cursor):
            return None
        value = parse_expression(text[cursor + 1:])
        return Assignment(target=target, indices=tuple(indices), value=value, line=record.line)

    def _parse_call(self, record: LineRecord) -> Optional[Statement]:
        text = record.text
        match = _CALL_RE.match(text)
        if not match:
            return None
        open_index = match.end() - 1
        if matching_close(text, open_index) != len(text) - 1:
            return None
        args = _split_arguments(text[open_index + 1:-1])
        return Call(callee=match.group(1), args=args, line=record.line)


def parse(records: Sequence[LineRecord]) -> Block:
    """Parse lexed records into a tuple of top-level statements."""
    return Parser(records).parse()


def parse_source(source: str) -> Block:
    """Lex and parse ``source`` in one step."""
    return parse(lex(source))


__all__ = ["Parser", "parse", "parse_source", "TOP_LEVEL_INDENT"]
