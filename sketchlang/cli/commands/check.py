"""
Check command implementation.

Runs the static lint rules over a program without executing it.
"""

import argparse
import sys
from pathlib import Path

from sketchlang.linter import LintSeverity, lint_program

from ..errors import handle_cli_exception
from ..loading import load_program, resolve_runtime_config
from ..output import error_console, print_success, print_table


def cmd_check(args: argparse.Namespace) -> None:
    """
    Handle the 'check' subcommand.

    Exits with status 1 when any finding is reported, or only on
    error-level findings with ``--errors-only``.
    """
    try:
        config = resolve_runtime_config(args)
        source_path = Path(args.file)
        findings = lint_program(load_program(source_path), config)
        if args.errors_only:
            findings = [finding for finding in findings if finding.severity is LintSeverity.ERROR]
        if not findings:
            print_success(f"{source_path}: no problems found")
            return
        rows = [
            [
                "" if finding.line is None else str(finding.line),
                finding.severity.value,
                finding.rule_id,
                finding.message,
            ]
            for finding in findings
        ]
        print_table(("line", "severity", "rule", "message"), rows, title=str(source_path), target=error_console)
        sys.exit(1)
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def add_check_command(subparsers) -> None:
    check_parser = subparsers.add_parser('check', help='Report problems in a program without running it')
    check_parser.add_argument('file', help='Path to the program source file')
    check_parser.add_argument('--entry', default=None, help='Entry function expected to exist (default: run)')
    check_parser.add_argument(
        '--errors-only', action='store_true',
        help='Ignore warnings such as unrecognised statements'
    )
    check_parser.set_defaults(func=cmd_check)
