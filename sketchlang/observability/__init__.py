"""Lightweight observability helpers for logging and diagnostics."""

from __future__ import annotations

from .diagnostics import Diagnostic, DiagnosticSink
from .logging import get_logger, log_diagnostic

__all__ = [
    "Diagnostic",
    "DiagnosticSink",
    "get_logger",
    "log_diagnostic",
]
