"""
Error handling for the sketchlang CLI.

Commands raise :class:`CLIError` subclasses naming the program or
configuration file involved; :func:`handle_cli_exception` prints them to
stderr and exits with a non-zero status. Language errors that escape a
command (:class:`~sketchlang.errors.SketchError`) are printed with their
own line and code information.
"""

import sys
import traceback
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional, Union

from ..config import env_flag
from ..errors import SketchError

# Innermost traceback frames printed with --verbose.
_TRACE_FRAMES = 8

PathLike = Union[str, Path]


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        path: Program, config or output file the error is about
        hint: Optional suggestion for resolving the error
        context: Extra detail printed with --verbose
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        path: Optional[PathLike] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.path = Path(path) if path is not None else None
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class CLIConfigError(CLIError):
    """Workspace configuration file is missing, unreadable or invalid."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_CONFIG_ERROR')
        super().__init__(message, **kwargs)


class CLIValidationError(CLIError):
    """A command-line option has an unusable value."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_VALIDATION_ERROR')
        super().__init__(message, **kwargs)


class CLIFileNotFoundError(CLIError):
    """A program file or output directory does not exist or cannot be read."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_NOT_FOUND')
        super().__init__(message, **kwargs)


def describe_io_failure(
    exc: Exception,
    *,
    path: PathLike,
    action: str,
    error_class: type = CLIError,
    hint: Optional[str] = None
) -> CLIError:
    """
    Turn an OS, decoding or parsing failure on ``path`` into a CLI error.

    The message says what could not be done and why; the original exception
    type, errno and failing line (when the exception knows them) go into
    ``context`` for --verbose output.

    Examples:
        >>> err = describe_io_failure(
        ...     PermissionError(13, "Permission denied"),
        ...     path="bounce.sketch", action="read program", error_class=CLIFileNotFoundError)
        >>> str(err)
        'bounce.sketch: Cannot read program: Permission denied'
        >>> err.context
        {'cause': 'PermissionError', 'errno': 13}
    """
    if isinstance(exc, OSError) and exc.strerror:
        reason = exc.strerror
    else:
        reason = str(exc) or type(exc).__name__
    context: Dict[str, Any] = {"cause": type(exc).__name__}
    errno = getattr(exc, "errno", None)
    if errno is not None:
        context["errno"] = errno
    lineno = getattr(exc, "lineno", None)
    if lineno is not None:
        context["line"] = lineno
    return error_class(f"Cannot {action}: {reason}", path=path, hint=hint, context=context)


def format_cli_error(exc: BaseException, *, verbose: bool = False) -> str:
    """
    Render ``exc`` for the terminal.

    Examples:
        >>> print(format_cli_error(CLIValidationError("--frames must be at least 1, got 0")))
        Error [CLI_VALIDATION_ERROR]: --frames must be at least 1, got 0
        >>> print(format_cli_error(CLIFileNotFoundError("Source file not found",
        ...                                             path="ghost.sketch", hint="Check the path")))
        Error [CLI_FILE_NOT_FOUND]: ghost.sketch: Source file not found
        Hint: Check the path
    """
    if isinstance(exc, CLIError):
        lines = [f"Error [{exc.code}]: {exc}"]
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose:
            lines.extend(f"  {key}: {value}" for key, value in exc.context.items())
    elif isinstance(exc, SketchError):
        lines = [f"Error: {exc.format()}"]
    else:
        lines = [f"Internal error: {exc.__class__.__name__}: {exc}"]

    if verbose and exc.__traceback__ is not None:
        frames = traceback.format_tb(exc.__traceback__)[-_TRACE_FRAMES:]
        lines.append("Traceback (innermost frames):")
        lines.extend(frame.rstrip() for frame in frames)

    return "\n".join(lines)


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> NoReturn:
    """
    Print ``exc`` and exit with ``exit_code``.

    ``SKETCHLANG_DEBUG`` re-raises instead so the full traceback reaches the
    terminal or debugger; ``SKETCHLANG_VERBOSE`` acts like ``--verbose``.
    """
    if env_flag("SKETCHLANG_DEBUG"):
        raise exc
    verbose = verbose or env_flag("SKETCHLANG_VERBOSE")
    print(format_cli_error(exc, verbose=verbose), file=sys.stderr)
    sys.exit(exit_code)
