"""Unified error model for sketchlang."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.path:
            return self.path
        if self.line is not None:
            return f"line {self.line}"
        return "unknown location"


class SketchError(Exception):
    """Base class for all lexer/parser/runtime conditions surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        self.path = path
        self.line = line
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class SketchSyntaxError(SketchError):
    """Raised when the expression tokenizer or parser meets invalid syntax."""

    code = "SYNTAX"


class SketchRuntimeError(SketchError):
    """Base class for conditions raised while executing a program."""

    code = "RUNTIME"


class UndefinedVariableError(SketchRuntimeError):
    """A name was read that no scope in the chain owns."""

    code = "UNDEFINED_VARIABLE"

    def __init__(self, name: str, **kwargs) -> None:
        super().__init__(f'Variable "{name}" is not defined in the current scope.', **kwargs)
        self.name = name


class UndefinedFunctionError(SketchRuntimeError):
    """A call named neither a built-in nor a declared function."""

    code = "UNDEFINED_FUNCTION"

    def __init__(self, name: str, **kwargs) -> None:
        super().__init__(f'Function "{name}" not defined.', **kwargs)
        self.name = name


class ExpressionError(SketchRuntimeError):
    """An expression could not be parsed or faulted while being evaluated."""

    code = "EXPRESSION_FAILED"

    def __init__(self, source: str, cause: str, **kwargs) -> None:
        super().__init__(f'Failed to evaluate expression: "{source}". Cause: {cause}', **kwargs)
        self.source = source
        self.cause = cause


class MissingEntryPointError(SketchRuntimeError):
    """No entry function is registered when the frame loop should start."""

    code = "MISSING_ENTRY_POINT"

    def __init__(self, name: str, **kwargs) -> None:
        kwargs.setdefault("hint", f"Declare 'function {name}():' to draw frames.")
        super().__init__(f"No {name}() function found. Nothing to execute continuously.", **kwargs)
        self.name = name


class RecursionLimitError(SketchRuntimeError):
    """User function calls nested deeper than the configured limit."""

    code = "RECURSION_LIMIT"


__all__ = [
    "SketchError",
    "SketchSyntaxError",
    "SketchRuntimeError",
    "UndefinedVariableError",
    "UndefinedFunctionError",
    "ExpressionError",
    "MissingEntryPointError",
    "RecursionLimitError",
    "ErrorLocation",
]
