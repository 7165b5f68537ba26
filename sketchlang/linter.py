"""Static checks over a parsed program, run without executing it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Set

from sketchlang.ast import (
    Assignment,
    BinaryOp,
    Block,
    Call,
    CallExpr,
    Expression,
    FunctionDeclaration,
    IfStatement,
    IndexExpr,
    ListExpr,
    LogicalOp,
    LoopFor,
    LoopWhile,
    ParsedExpression,
    ReturnStatement,
    Statement,
    UnaryOp,
    Unknown,
)
from sketchlang.config import RuntimeConfig
from sketchlang.observability import get_logger
from sketchlang.runtime.builtins import get_builtin

logger = get_logger("sketchlang.linter")


class LintSeverity(Enum):
    """Severity levels for lint findings."""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class LintFinding:
    """A single lint finding."""
    rule_id: str
    message: str
    severity: LintSeverity
    line: Optional[int] = None


@dataclass
class LintContext:
    program: Block
    config: RuntimeConfig
    declared: Set[str]


class LintRule(ABC):
    """Base class for lint rules."""

    rule_id: str = ""

    @abstractmethod
    def check(self, context: LintContext) -> List[LintFinding]:
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.rule_id!r})"


# ----------------------------------------------------------------------
# Tree walking
# ----------------------------------------------------------------------
def _child_blocks(statement: Statement) -> Iterator[Block]:
    if isinstance(statement, (FunctionDeclaration, LoopFor, LoopWhile)):
        yield statement.body
    elif isinstance(statement, IfStatement):
        yield statement.consequent
        yield statement.alternate


def walk_statements(block: Block) -> Iterator[Statement]:
    """Yield every statement in ``block`` depth first, nested bodies included."""
    for statement in block:
        yield statement
        for child in _child_blocks(statement):
            yield from walk_statements(child)


def statement_expressions(statement: Statement) -> Iterator[ParsedExpression]:
    if isinstance(statement, Assignment):
        yield from statement.indices
        yield statement.value
    elif isinstance(statement, LoopFor):
        yield statement.count
    elif isinstance(statement, (LoopWhile, IfStatement)):
        yield statement.condition
    elif isinstance(statement, Call):
        yield from statement.args
    elif isinstance(statement, ReturnStatement) and statement.value is not None:
        yield statement.value


def _called_names(node: Expression) -> Iterator[str]:
    if isinstance(node, CallExpr):
        yield node.name
        for arg in node.args:
            yield from _called_names(arg)
    elif isinstance(node, (BinaryOp, LogicalOp)):
        yield from _called_names(node.left)
        yield from _called_names(node.right)
    elif isinstance(node, UnaryOp):
        yield from _called_names(node.operand)
    elif isinstance(node, IndexExpr):
        yield from _called_names(node.base)
        yield from _called_names(node.index)
    elif isinstance(node, ListExpr):
        for element in node.elements:
            yield from _called_names(element)


# ----------------------------------------------------------------------
# Rules
# ----------------------------------------------------------------------
class UnknownStatementRule(LintRule):
    """Lines no statement form recognises are skipped at run time."""

    rule_id = "unknown-statement"

    def check(self, context: LintContext) -> List[LintFinding]:
        return [
            LintFinding(
                self.rule_id,
                f"Unrecognised statement is ignored: {statement.text}",
                LintSeverity.WARNING,
                statement.line,
            )
            for statement in walk_statements(context.program)
            if isinstance(statement, Unknown)
        ]


class MalformedExpressionRule(LintRule):
    rule_id = "malformed-expression"

    def check(self, context: LintContext) -> List[LintFinding]:
        findings = []
        for statement in walk_statements(context.program):
            for expr in statement_expressions(statement):
                if expr.error is not None:
                    findings.append(
                        LintFinding(
                            self.rule_id,
                            f'Cannot parse expression "{expr.source}": {expr.error}',
                            LintSeverity.ERROR,
                            statement.line,
                        )
                    )
        return findings


class UndefinedFunctionRule(LintRule):
    """Calls naming neither a built-in nor a function declared anywhere."""

    rule_id = "undefined-function"

    def check(self, context: LintContext) -> List[LintFinding]:
        findings = []
        for statement in walk_statements(context.program):
            names: List[str] = []
            if isinstance(statement, Call):
                names.append(statement.callee)
            for expr in statement_expressions(statement):
                if expr.tree is not None:
                    names.extend(_called_names(expr.tree))
            for name in names:
                if get_builtin(name) is None and name not in context.declared:
                    findings.append(
                        LintFinding(
                            self.rule_id,
                            f'Function "{name}" not defined.',
                            LintSeverity.ERROR,
                            statement.line,
                        )
                    )
        return findings


class MissingEntryPointRule(LintRule):
    rule_id = "missing-entry-point"

    def check(self, context: LintContext) -> List[LintFinding]:
        entry = context.config.entry_function
        if entry in context.declared:
            return []
        return [
            LintFinding(
                self.rule_id,
                f"No {entry}() function found. Nothing to execute continuously.",
                LintSeverity.WARNING,
            )
        ]


def get_default_rules() -> List[LintRule]:
    return [
        UnknownStatementRule(),
        MalformedExpressionRule(),
        UndefinedFunctionRule(),
        MissingEntryPointRule(),
    ]


def lint_program(
    program: Block,
    config: Optional[RuntimeConfig] = None,
    rules: Optional[Sequence[LintRule]] = None,
) -> List[LintFinding]:
    """Apply ``rules`` (the default set when omitted), findings sorted by line."""
    declared = {
        statement.name
        for statement in walk_statements(program)
        if isinstance(statement, FunctionDeclaration)
    }
    context = LintContext(program=program, config=config or RuntimeConfig(), declared=declared)
    findings: List[LintFinding] = []
    for rule in rules if rules is not None else get_default_rules():
        rule_findings = rule.check(context)
        logger.debug("Rule %s produced %d findings", rule.rule_id, len(rule_findings))
        findings.extend(rule_findings)
    findings.sort(key=lambda finding: finding.line if finding.line is not None else 0)
    return findings


__all__ = [
    "LintSeverity",
    "LintFinding",
    "LintContext",
    "LintRule",
    "UnknownStatementRule",
    "MalformedExpressionRule",
    "UndefinedFunctionRule",
    "MissingEntryPointRule",
    "get_default_rules",
    "lint_program",
    "walk_statements",
]
