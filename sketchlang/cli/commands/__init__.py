"""
CLI command modules.

Each module implements one subcommand and registers its parser through an
``add_<name>_command(subparsers)`` function.
"""

from .check import add_check_command, cmd_check
from .parse import add_parse_command, cmd_parse
from .render import add_render_command, cmd_render
from .run import add_run_command, cmd_run

__all__ = [
    "cmd_run",
    "cmd_parse",
    "cmd_check",
    "cmd_render",
    "add_run_command",
    "add_parse_command",
    "add_check_command",
    "add_render_command",
]
