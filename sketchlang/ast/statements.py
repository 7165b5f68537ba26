"""Statement AST produced by the indentation parser.

Nodes are frozen and hold tuples so that a parsed program can be re-executed
every frame without being modified.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .expressions import ParsedExpression

__all__ = [
    "Statement",
    "CanvasSize",
    "FunctionDeclaration",
    "Assignment",
    "LoopFor",
    "LoopWhile",
    "IfStatement",
    "Call",
    "ReturnStatement",
    "Unknown",
    "Block",
]


@dataclass(frozen=True)
class Statement:
    """Base class for all statements; ``line`` is the 1-based source line."""

    pass


@dataclass(frozen=True)
class CanvasSize(Statement):
    width: int
    height: int
    line: int = 0


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    name: str
    params: Tuple[str, ...]
    body: "Block"
    line: int = 0


@dataclass(frozen=True)
class Assignment(Statement):
    """``target[i][j]... = value``; ``indices`` is empty for a plain name."""

    target: str
    indices: Tuple[ParsedExpression, ...]
    value: ParsedExpression
    line: int = 0


@dataclass(frozen=True)
class LoopFor(Statement):
    """``loop VAR=COUNT times:``; ``var`` is None for ``loop COUNT times:``."""

    var: Optional[str]
    count: ParsedExpression
    body: "Block"
    line: int = 0


@dataclass(frozen=True)
class LoopWhile(Statement):
    condition: ParsedExpression
    body: "Block"
    line: int = 0


@dataclass(frozen=True)
class IfStatement(Statement):
    condition: ParsedExpression
    consequent: "Block"
    alternate: "Block" = ()
    line: int = 0


@dataclass(frozen=True)
class Call(Statement):
    callee: str
    args: Tuple[ParsedExpression, ...]
    line: int = 0


@dataclass(frozen=True)
class ReturnStatement(Statement):
    """``return EXPR``; ``value`` is None for a bare ``return``."""

    value: Optional[ParsedExpression]
    line: int = 0


@dataclass(frozen=True)
class Unknown(Statement):
    """A line no rule recognised; executing it has no effect."""

    text: str
    line: int = 0


Block = Tuple[Statement, ...]
