"""
sketchlang CLI entry point.

Dispatches the ``run``, ``parse``, ``check`` and ``render`` subcommands to
their command modules.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from sketchlang import __version__

from .commands import (
    add_check_command,
    add_parse_command,
    add_render_command,
    add_run_command,
)
from .errors import handle_cli_exception

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


def _configure_runtime_logging(args) -> None:
    """Configure the ``sketchlang`` logger from --log-level or SKETCHLANG_LOG_LEVEL."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv('SKETCHLANG_LOG_LEVEL', 'error')
    ).lower()
    numeric_level = _LEVELS.get(log_level, logging.ERROR)

    package_logger = logging.getLogger('sketchlang')
    package_logger.setLevel(numeric_level)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="sketchlang – run small indentation-based drawing programs",
        prog="sketchlang",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        '--config',
        default=None,
        help='Path to a sketch.toml or .sketchrc configuration file'
    )
    parser.add_argument(
        '--workspace',
        default=None,
        help='Workspace root directory (defaults to current working directory)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print error context and traceback frames (or set SKETCHLANG_VERBOSE=1)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Logging level for the sketchlang loggers (or set SKETCHLANG_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    add_run_command(subparsers)
    add_parse_command(subparsers)
    add_check_command(subparsers)
    add_render_command(subparsers)
    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        >>> main(['run', 'bounce.sketch', '--frames', '3'])  # doctest: +SKIP
        >>> main(['render', 'bounce.sketch', '-o', 'frame.svg'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_runtime_logging(args)

    if not getattr(args, 'func', None):
        parser.print_help()
        sys.exit(2)

    try:
        args.func(args)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)


__all__ = ["main", "build_parser"]
