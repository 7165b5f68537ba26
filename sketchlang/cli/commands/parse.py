"""
Parse command implementation.

Dumps the logical line records or the statement tree of a program as JSON.
"""

import argparse
from pathlib import Path

from sketchlang.ast import program_to_list
from sketchlang.lexer import lex
from sketchlang.parser import parse

from ..errors import handle_cli_exception
from ..loading import read_source
from ..output import print_json


def cmd_parse(args: argparse.Namespace) -> None:
    """
    Handle the 'parse' subcommand.

    Examples:
        >>> cmd_parse(argparse.Namespace(file='bounce.sketch', records=True))  # doctest: +SKIP
        [
          {
            "line": 1,
            "indent": 0,
            "text": "CanvasSize=(400, 300)"
          }
        ]
    """
    try:
        records = lex(read_source(Path(args.file)))
        if args.records:
            print_json(
                [{"line": record.line, "indent": record.indent, "text": record.text} for record in records]
            )
            return
        print_json(program_to_list(parse(records), include_trees=args.trees))
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def add_parse_command(subparsers) -> None:
    parse_parser = subparsers.add_parser('parse', help='Print line records or the parsed program as JSON')
    parse_parser.add_argument('file', help='Path to the program source file')
    parse_parser.add_argument(
        '--records', action='store_true',
        help='Print the logical line records instead of the statement tree'
    )
    parse_parser.add_argument(
        '--trees', action='store_true',
        help='Include parsed expression trees alongside expression source text'
    )
    parse_parser.set_defaults(func=cmd_parse)
