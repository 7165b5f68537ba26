"""Expression AST evaluated by :mod:`sketchlang.runtime.evaluator`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

__all__ = [
    "Expression",
    "LiteralExpr",
    "VarExpr",
    "ListExpr",
    "UnaryOp",
    "BinaryOp",
    "LogicalOp",
    "CallExpr",
    "IndexExpr",
    "ParsedExpression",
]


@dataclass(frozen=True)
class Expression:
    """Base class for all expression nodes."""

    pass


@dataclass(frozen=True)
class LiteralExpr(Expression):
    """Literal value: number, string or boolean."""
    value: Any


@dataclass(frozen=True)
class VarExpr(Expression):
    """Variable reference: x"""
    name: str


@dataclass(frozen=True)
class ListExpr(Expression):
    """List literal: [expr1, expr2, ...]"""
    elements: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class UnaryOp(Expression):
    """Prefix operation: -x, +x, !x"""
    op: str
    operand: Expression


@dataclass(frozen=True)
class BinaryOp(Expression):
    """Arithmetic or comparison: left op right"""
    op: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class LogicalOp(Expression):
    """Short-circuit boolean: left and right, left or right"""
    op: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class CallExpr(Expression):
    """Call of a named function: name(arg1, arg2, ...)"""
    name: str
    args: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class IndexExpr(Expression):
    """Indexing: base[index]"""
    base: Expression
    index: Expression


@dataclass(frozen=True)
class ParsedExpression:
    """Source text of an expression together with its parse result.

    Exactly one of ``tree`` and ``error`` is set. Syntax errors are kept here
    rather than raised so that a malformed expression only fails when it is
    evaluated.
    """

    source: str
    tree: Optional[Expression] = None
    error: Optional[str] = field(default=None, compare=True)

    @property
    def ok(self) -> bool:
        return self.tree is not None
