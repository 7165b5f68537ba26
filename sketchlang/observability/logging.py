"""Centralised logging helpers for sketchlang runtimes."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = "sketchlang") -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def log_diagnostic(
    *,
    code: Optional[str],
    message: str,
    line: Optional[int] = None,
    frame: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
    extras: Optional[Dict[str, Any]] = None,
) -> None:
    """Emit a structured log entry for a reported runtime condition."""

    payload: Dict[str, Any] = {"code": code or "unknown"}
    if line is not None:
        payload["line"] = line
    if frame is not None:
        payload["frame"] = frame
    if extras:
        payload.update(extras)
    target_logger = logger or get_logger("sketchlang.runtime")
    target_logger.warning(
        message,
        extra={"sketchlang_event": "diagnostic", "sketchlang_data": payload},
    )
