from __future__ import annotations

import logging

from sketchlang.errors import (
    ExpressionError,
    MissingEntryPointError,
    SketchError,
    UndefinedFunctionError,
)
from sketchlang.observability import Diagnostic, DiagnosticSink, get_logger, log_diagnostic


def test_get_logger_is_cached() -> None:
    assert get_logger("sketchlang.test") is get_logger("sketchlang.test")
    assert get_logger().name == "sketchlang"


def test_log_diagnostic_emits_structured_warning(caplog) -> None:
    logger = get_logger("sketchlang.test.diagnostics")

    with caplog.at_level(logging.WARNING, logger="sketchlang.test.diagnostics"):
        log_diagnostic(code="RUNTIME", message="boom", line=3, frame=1, logger=logger, extras={"k": "v"})

    (record,) = caplog.records
    assert record.getMessage() == "boom"
    assert record.sketchlang_event == "diagnostic"
    assert record.sketchlang_data == {"code": "RUNTIME", "line": 3, "frame": 1, "k": "v"}


def test_sink_records_and_notifies_listeners() -> None:
    seen = []
    sink = DiagnosticSink(listener=seen.append)
    diagnostic = Diagnostic(code="RUNTIME", message="boom", line=2)

    sink.emit(diagnostic)

    assert sink.entries == [diagnostic]
    assert seen == [diagnostic]
    assert sink.messages() == ["boom"]
    assert len(sink) == 1
    sink.clear()
    assert len(sink) == 0


def test_listener_registered_once() -> None:
    seen = []
    sink = DiagnosticSink(listener=seen.append)
    sink.add_listener(seen.append)

    sink.emit(Diagnostic(code="X", message="once"))

    assert len(seen) == 1


def test_diagnostic_from_error_and_format() -> None:
    diagnostic = Diagnostic.from_error(MissingEntryPointError("run"), frame=None)

    assert diagnostic.code == "MISSING_ENTRY_POINT"
    assert diagnostic.hint == "Declare 'function run():' to draw frames."
    assert diagnostic.format().startswith("No run() function found.")

    located = Diagnostic(code="X", message="bad", line=4)
    assert located.format() == "line 4: bad"


def test_error_format_includes_location_code_and_hint() -> None:
    error = SketchError("Broken", path="a.sketch", line=3, code="E1", hint="Fix it")

    assert error.format() == "Broken (a.sketch:3; E1) Hint: Fix it"


def test_error_messages() -> None:
    assert UndefinedFunctionError("f").message == 'Function "f" not defined.'
    error = ExpressionError("x +", "Unexpected end of expression")
    assert error.message == 'Failed to evaluate expression: "x +". Cause: Unexpected end of expression'
    assert error.code == "EXPRESSION_FAILED"
