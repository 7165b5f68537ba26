"""Statement executor and function invocation."""

from __future__ import annotations

from typing import List, Sequence

from sketchlang.ast import (
    Assignment,
    Block,
    Call,
    CanvasSize,
    FunctionDeclaration,
    IfStatement,
    LoopFor,
    LoopWhile,
    ReturnStatement,
    Statement,
)
from sketchlang.errors import (
    RecursionLimitError,
    SketchRuntimeError,
    UndefinedFunctionError,
)
from sketchlang.observability import get_logger

from .builtins import get_builtin
from .evaluator import Evaluator
from .scope import Scope
from .state import RuntimeState
from .values import UNDEFINED, Value, to_index, to_number, truthy, type_name

logger = get_logger("sketchlang.runtime")

__all__ = ["Executor"]


class _ReturnSignal(Exception):
    """Carries a return value out of nested loop/if bodies."""

    def __init__(self, value: Value):
        super().__init__()
        self.value = value


class Executor:
    """Walks statements for one run, mutating scopes and the runtime state.

    Every runtime condition raised while executing a statement is reported
    through :meth:`RuntimeState.report` and the statement is abandoned; the
    next statement runs as usual.
    """

    def __init__(self, state: RuntimeState):
        self.state = state
        self.evaluator = Evaluator(state, self.call)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------
    def run(self, program: Block) -> None:
        """Execute top-level statements against the global scope."""
        self.execute_block(program, self.state.globals)

    def execute_block(self, block: Block, scope: Scope) -> None:
        for statement in block:
            self.execute(statement, scope)

    def execute(self, statement: Statement, scope: Scope) -> None:
        handler = getattr(self, f"_exec_{type(statement).__name__}", None)
        if handler is None:
            return
        try:
            handler(statement, scope)
        except SketchRuntimeError as exc:
            if isinstance(exc, RecursionLimitError) and self.state.call_depth > 0:
                raise
            self.state.report(exc, line=getattr(statement, "line", None))

    def _exec_CanvasSize(self, stmt: CanvasSize, scope: Scope) -> None:
        self.state.globals.set("CanvasSize", [stmt.width, stmt.height])

    def _exec_FunctionDeclaration(self, stmt: FunctionDeclaration, scope: Scope) -> None:
        if stmt.name in self.state.functions:
            logger.debug("Function %s redeclared at line %d", stmt.name, stmt.line)
        self.state.functions[stmt.name] = stmt

    def _exec_Assignment(self, stmt: Assignment, scope: Scope) -> None:
        value = self.evaluator.evaluate(stmt.value, scope)
        if not stmt.indices:
            scope.set(stmt.target, value)
            return

        container = scope.get(stmt.target)
        indices = [to_index_checked(self.evaluator.evaluate(index, scope)) for index in stmt.indices]
        for index in indices[:-1]:
            if not isinstance(container, list) or not 0 <= index < len(container):
                raise SketchRuntimeError(f"Cannot set property [{index}] on undefined object.")
            container = container[index]
        assign_index(container, indices[-1], value)

    def _exec_LoopFor(self, stmt: LoopFor, scope: Scope) -> None:
        loop_scope = scope.child()
        count = to_number(
            self.evaluator.evaluate_or_report(stmt.count, loop_scope, line=stmt.line)
        )
        index = 0
        while index < count:
            if stmt.var:
                loop_scope.set(stmt.var, index)
            self.execute_block(stmt.body, loop_scope)
            index += 1

    def _exec_LoopWhile(self, stmt: LoopWhile, scope: Scope) -> None:
        loop_scope = scope.child()
        while truthy(self.evaluator.evaluate_or_report(stmt.condition, loop_scope, line=stmt.line)):
            self.execute_block(stmt.body, loop_scope)

    def _exec_IfStatement(self, stmt: IfStatement, scope: Scope) -> None:
        condition = self.evaluator.evaluate_or_report(stmt.condition, scope, line=stmt.line)
        branch = stmt.consequent if truthy(condition) else stmt.alternate
        self.execute_block(branch, scope)

    def _exec_Call(self, stmt: Call, scope: Scope) -> None:
        args = [
            self.evaluator.evaluate_or_report(arg, scope, line=stmt.line)
            for arg in stmt.args
        ]
        self.call(stmt.callee, args, scope)

    def _exec_ReturnStatement(self, stmt: ReturnStatement, scope: Scope) -> None:
        if self.state.config.propagate_nested_return and self.state.call_depth > 0:
            raise _ReturnSignal(
                self.evaluator.evaluate_or_report(stmt.value, scope, line=stmt.line)
            )

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------
    def call(self, name: str, args: Sequence[Value], scope: Scope) -> Value:
        """Call a built-in or a declared function with evaluated arguments."""
        builtin = get_builtin(name)
        if builtin is not None:
            try:
                return builtin(self.state, args)
            except (TypeError, ValueError, OverflowError) as exc:
                raise SketchRuntimeError(f"{name}() failed: {exc}") from exc
        return self.invoke(name, args, scope)

    def invoke(self, name: str, args: Sequence[Value], caller_scope: Scope) -> Value:
        """Run a declared function in one child scope of ``caller_scope``.

        Parameters are bound in order; missing arguments bind to undefined.
        The first ``return`` found directly in the body ends the call.
        """
        function = self.state.functions.get(name)
        if function is None:
            raise UndefinedFunctionError(name)

        state = self.state
        if state.call_depth >= state.config.max_call_depth:
            raise RecursionLimitError(
                f"Maximum call depth ({state.config.max_call_depth}) exceeded calling {name}()"
            )

        func_scope = caller_scope.child()
        for position, param in enumerate(function.params):
            func_scope.define(param, args[position] if position < len(args) else UNDEFINED)

        state.call_depth += 1
        try:
            for statement in function.body:
                if isinstance(statement, ReturnStatement):
                    return self.evaluator.evaluate_or_report(
                        statement.value, func_scope, line=statement.line
                    )
                self.execute(statement, func_scope)
        except _ReturnSignal as signal:
            return signal.value
        finally:
            state.call_depth -= 1
        return UNDEFINED


def to_index_checked(value: Value) -> int:
    try:
        return to_index(value)
    except TypeError as exc:
        raise SketchRuntimeError(str(exc)) from exc


def assign_index(container: Value, index: int, value: Value) -> None:
    """Store ``value`` at ``container[index]``, growing a list as needed."""
    if not isinstance(container, list):
        raise SketchRuntimeError(
            f"Cannot set property [{index}] on {type_name(container)} value."
        )
    if index < 0:
        raise SketchRuntimeError(f"Cannot set negative index [{index}].")
    if index >= len(container):
        padding: List[Value] = [UNDEFINED] * (index - len(container) + 1)
        container.extend(padding)
    container[index] = value
