"""
Source and configuration loading for CLI operations.

This module reads program files from disk, parses them and resolves the
workspace configuration a command should run with.
"""

from pathlib import Path
from typing import Mapping, Optional

from ..ast import Block
from ..config import RuntimeConfig, WorkspaceConfig, load_workspace_config, locate_config_file
from ..parser import parse_source
from .errors import CLIConfigError, CLIFileNotFoundError, describe_io_failure


def read_source(source_path: Path) -> str:
    """
    Read a program file as UTF-8 text.

    Raises:
        CLIFileNotFoundError: If the file does not exist or cannot be read

    Examples:
        >>> text = read_source(Path("bounce.sketch"))  # doctest: +SKIP
    """
    if not source_path.exists():
        raise CLIFileNotFoundError(
            "Program file not found",
            path=source_path,
            hint="Check the file path and try again",
        )
    if source_path.is_dir():
        raise CLIFileNotFoundError(
            "Expected a program file but found a directory",
            path=source_path,
            hint="Pass the path to a single .sketch file",
        )
    try:
        return source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise describe_io_failure(
            exc,
            path=source_path,
            action="read program",
            error_class=CLIFileNotFoundError,
            hint="Programs must be readable UTF-8 text files",
        ) from exc


def load_program(source_path: Path) -> Block:
    """Read and parse a program file into its statement tree."""
    return parse_source(read_source(source_path))


def load_config(
    workspace: Optional[str],
    config_path: Optional[str],
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> WorkspaceConfig:
    """
    Resolve the workspace configuration for a CLI invocation.

    Any failure to read or interpret the config file is reported as a
    :class:`CLIConfigError` naming the offending file.
    """
    root = Path(workspace).resolve() if workspace else Path.cwd()
    explicit = Path(config_path).resolve() if config_path else None
    if explicit is not None and not explicit.exists():
        raise CLIConfigError(
            "Configuration file not found",
            path=explicit,
            hint="Remove --config or point it at an existing sketch.toml",
        )
    try:
        return load_workspace_config(root, explicit, environ=environ)
    except (OSError, ValueError, TypeError) as exc:
        raise describe_io_failure(
            exc,
            path=locate_config_file(root, explicit) or root,
            action="load configuration",
            error_class=CLIConfigError,
            hint="Check the [runtime] section and any SKETCHLANG_* environment variables",
        ) from exc


def resolve_runtime_config(args, **overrides) -> RuntimeConfig:
    """Workspace config, then environment, then command-line flags."""
    workspace = load_config(getattr(args, "workspace", None), getattr(args, "config", None))
    return workspace.runtime.with_overrides(
        entry_function=getattr(args, "entry", None),
        halt_on_error=True if getattr(args, "halt_on_error", False) else None,
        propagate_nested_return=True if getattr(args, "nested_return", False) else None,
        **overrides,
    )
