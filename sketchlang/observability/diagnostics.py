"""Collection point for every condition the runtime reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from sketchlang.errors import SketchError

from .logging import log_diagnostic

DiagnosticListener = Callable[["Diagnostic"], None]


@dataclass(frozen=True)
class Diagnostic:
    """One human-readable condition raised while lexing, parsing or running."""

    code: str
    message: str
    line: Optional[int] = None
    frame: Optional[int] = None
    hint: Optional[str] = None

    def format(self) -> str:
        text = self.message
        if self.line is not None:
            text = f"line {self.line}: {text}"
        if self.hint:
            text = f"{text} Hint: {self.hint}"
        return text

    @classmethod
    def from_error(cls, error: SketchError, *, frame: Optional[int] = None) -> "Diagnostic":
        return cls(
            code=error.code or "ERROR",
            message=error.message,
            line=error.line,
            frame=frame,
            hint=error.hint,
        )


class DiagnosticSink:
    """Records diagnostics, logs them and forwards them to listeners."""

    def __init__(self, listener: Optional[DiagnosticListener] = None) -> None:
        self.entries: List[Diagnostic] = []
        self._listeners: List[DiagnosticListener] = []
        if listener is not None:
            self.add_listener(listener)

    def add_listener(self, listener: DiagnosticListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def emit(self, diagnostic: Diagnostic) -> None:
        self.entries.append(diagnostic)
        log_diagnostic(
            code=diagnostic.code,
            message=diagnostic.message,
            line=diagnostic.line,
            frame=diagnostic.frame,
        )
        for listener in list(self._listeners):
            listener(diagnostic)

    def messages(self) -> List[str]:
        return [entry.message for entry in self.entries]

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)
