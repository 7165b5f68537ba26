from __future__ import annotations

from sketchlang.config import RuntimeConfig
from sketchlang.linter import LintSeverity, lint_program, walk_statements
from sketchlang.parser import parse_source


def rule_ids(source: str, config=None):
    return [finding.rule_id for finding in lint_program(parse_source(source), config)]


def test_clean_program_has_no_findings() -> None:
    source = (
        "x = 0\n"
        "function step(n):\n"
        "    return n + 1\n"
        "function run():\n"
        "    x = step(x)\n"
        "    circle(x, sin(x), 5)\n"
    )

    assert lint_program(parse_source(source)) == []


def test_unknown_statement_is_a_warning() -> None:
    findings = lint_program(parse_source("function run():\n    draw it\n"))

    (finding,) = findings
    assert finding.rule_id == "unknown-statement"
    assert finding.severity is LintSeverity.WARNING
    assert finding.line == 2


def test_malformed_expression_is_an_error() -> None:
    findings = lint_program(parse_source("function run():\n    x = (1 +\n"))

    (finding,) = findings
    assert finding.rule_id == "malformed-expression"
    assert finding.severity is LintSeverity.ERROR
    assert '"(1 +"' in finding.message


def test_undefined_function_calls_in_statements_and_expressions() -> None:
    source = "function run():\n    missing()\n    y = helper(1) + 2\n"

    findings = lint_program(parse_source(source))

    assert [(f.rule_id, f.line) for f in findings] == [
        ("undefined-function", 2),
        ("undefined-function", 3),
    ]
    assert findings[1].message == 'Function "helper" not defined.'


def test_missing_entry_point_respects_config() -> None:
    source = "function draw():\n    circle(1, 1, 1)\n"

    assert rule_ids(source) == ["missing-entry-point"]
    assert rule_ids(source, RuntimeConfig(entry_function="draw")) == []


def test_walk_statements_visits_nested_bodies() -> None:
    source = "if a:\n    loop 2 times:\n        b()\nelse:\n    c()\n"

    names = [type(stmt).__name__ for stmt in walk_statements(parse_source(source))]

    assert names == ["IfStatement", "LoopFor", "Call", "Call"]
