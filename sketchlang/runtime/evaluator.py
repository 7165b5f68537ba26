"""Expression evaluator walking the parsed expression tree against a scope."""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

from sketchlang.ast.expressions import (
    BinaryOp,
    CallExpr,
    Expression,
    IndexExpr,
    ListExpr,
    LiteralExpr,
    LogicalOp,
    ParsedExpression,
    UnaryOp,
    VarExpr,
)
from sketchlang.errors import ExpressionError, RecursionLimitError, SketchRuntimeError

from .scope import Scope
from .state import RuntimeState
from .values import (
    UNDEFINED,
    Value,
    format_value,
    is_number,
    to_index,
    truthy,
    type_name,
)

__all__ = ["Evaluator", "Invoker"]

Invoker = Callable[[str, Sequence[Value], Scope], Value]

# Python faults that surface as a failed expression rather than a crash.
_EVALUATION_FAULTS = (
    TypeError,
    ValueError,
    ZeroDivisionError,
    OverflowError,
    RecursionError,
)


def _require_numbers(op: str, left: Value, right: Value) -> None:
    if not (is_number(left) and is_number(right)):
        raise TypeError(
            f"unsupported operand types for {op}: {type_name(left)} and {type_name(right)}"
        )


def _divide(left, right):
    if right == 0:
        if left == 0 or (isinstance(left, float) and math.isnan(left)):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1, right)
    return left / right


def _remainder(left, right):
    """Remainder taking the sign of the dividend."""
    if right == 0:
        return math.nan
    if isinstance(left, float) or isinstance(right, float):
        return math.fmod(left, right)
    result = abs(left) % abs(right)
    return result if left >= 0 else -result


# Integers above this lose precision as doubles.
_MAX_SAFE_INTEGER = 2 ** 53


def _power(left, right):
    """Power computed on doubles; overflow gives a signed infinity."""
    try:
        result = float(left) ** float(right)
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        odd = float(right).is_integer() and int(right) % 2 == 1
        return -math.inf if left < 0 and odd else math.inf
    if isinstance(result, complex):
        return math.nan
    exact = not isinstance(left, float) and not isinstance(right, float)
    if exact and result.is_integer() and abs(result) <= _MAX_SAFE_INTEGER:
        return int(result)
    return result


def _add(left, right):
    if isinstance(left, str) or isinstance(right, str):
        return format_value(left) + format_value(right)
    if isinstance(left, list) and isinstance(right, list):
        return left + right
    _require_numbers("+", left, right)
    return left + right


_ARITHMETIC = {
    "-": lambda left, right: left - right,
    "*": lambda left, right: left * right,
    "/": _divide,
    "%": _remainder,
    "**": _power,
}

_COMPARISON = {
    "<": lambda left, right: left < right,
    "<=": lambda left, right: left <= right,
    ">": lambda left, right: left > right,
    ">=": lambda left, right: left >= right,
}


def _as_comparable(value: Value) -> Value:
    if not isinstance(value, str):
        return value
    text = value.strip()
    try:
        return float(text) if text else 0
    except ValueError:
        return math.nan


def _compare(op: str, left: Value, right: Value) -> bool:
    """Ordering comparison; operands that cannot be ordered compare false."""
    if left is UNDEFINED or right is UNDEFINED:
        return False
    if isinstance(left, str) != isinstance(right, str):
        left, right = _as_comparable(left), _as_comparable(right)
    try:
        return _COMPARISON[op](left, right)
    except TypeError:
        return False


class Evaluator:
    """Evaluates expressions for one run.

    Built-in and user function calls are delegated to ``invoke`` so that the
    statement executor stays the single owner of call semantics.
    """

    def __init__(self, state: RuntimeState, invoke: Invoker):
        self.state = state
        self.invoke = invoke

    def evaluate(self, expr: ParsedExpression, scope: Scope) -> Value:
        """Evaluate ``expr``; runtime conditions are raised, never reported here."""
        if expr.tree is None:
            raise ExpressionError(expr.source, expr.error or "invalid expression")
        try:
            return self._eval(expr.tree, scope)
        except SketchRuntimeError:
            raise
        except _EVALUATION_FAULTS as exc:
            raise ExpressionError(expr.source, str(exc) or type(exc).__name__) from exc

    def evaluate_or_report(
        self,
        expr: Optional[ParsedExpression],
        scope: Scope,
        *,
        line: Optional[int] = None,
    ) -> Value:
        """Evaluate ``expr``, reporting any condition and yielding undefined instead."""
        if expr is None:
            return UNDEFINED
        try:
            return self.evaluate(expr, scope)
        except SketchRuntimeError as exc:
            if self._must_unwind(exc):
                raise
            self.state.report(exc, line=line)
            return UNDEFINED

    def _must_unwind(self, exc: SketchRuntimeError) -> bool:
        return isinstance(exc, RecursionLimitError) and self.state.call_depth > 0

    # ------------------------------------------------------------------
    # Tree walking
    # ------------------------------------------------------------------
    def _eval(self, node: Expression, scope: Scope) -> Value:
        if isinstance(node, LiteralExpr):
            return node.value

        if isinstance(node, VarExpr):
            return scope.get(node.name)

        if isinstance(node, BinaryOp):
            return self._eval_binary(node, scope)

        if isinstance(node, LogicalOp):
            left = self._eval(node.left, scope)
            if node.op == "and":
                return self._eval(node.right, scope) if truthy(left) else left
            return left if truthy(left) else self._eval(node.right, scope)

        if isinstance(node, UnaryOp):
            return self._eval_unary(node, scope)

        if isinstance(node, CallExpr):
            args = [self._eval(arg, scope) for arg in node.args]
            return self.invoke(node.name, args, scope)

        if isinstance(node, IndexExpr):
            return self._eval_index(node, scope)

        if isinstance(node, ListExpr):
            return [self._eval(element, scope) for element in node.elements]

        raise TypeError(f"unsupported expression node {type(node).__name__}")

    def _eval_binary(self, node: BinaryOp, scope: Scope) -> Value:
        left = self._eval(node.left, scope)
        right = self._eval(node.right, scope)
        op = node.op

        if op == "+":
            return _add(left, right)
        if op == "==":
            return left == right
        if op == "!=":
            return left != right
        if op in _COMPARISON:
            return _compare(op, left, right)
        _require_numbers(op, left, right)
        return _ARITHMETIC[op](left, right)

    def _eval_unary(self, node: UnaryOp, scope: Scope) -> Value:
        operand = self._eval(node.operand, scope)
        if node.op == "!":
            return not truthy(operand)
        if not is_number(operand):
            raise TypeError(f"bad operand type for unary {node.op}: {type_name(operand)}")
        return -operand if node.op == "-" else +operand

    def _eval_index(self, node: IndexExpr, scope: Scope) -> Value:
        base = self._eval(node.base, scope)
        index = to_index(self._eval(node.index, scope))
        if not isinstance(base, (list, str)):
            raise TypeError(f"cannot read index [{index}] of {type_name(base)}")
        if index < 0 or index >= len(base):
            return UNDEFINED
        return base[index]

