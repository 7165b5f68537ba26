"""
Run command implementation.

This module handles the 'run' subcommand which executes a program for a
number of frames, headlessly or against the wall clock.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

from sketchlang.observability import DiagnosticSink
from sketchlang.runtime import (
    DrawCommand,
    ManualScheduler,
    RealtimeScheduler,
    RuntimeDriver,
    format_value,
)

from ..errors import handle_cli_exception
from ..loading import load_program, resolve_runtime_config
from ..output import (
    diagnostic_to_dict,
    print_diagnostics,
    print_frame,
    print_info,
    print_json,
    print_program_output,
)
from ..validation import validate_int, validate_positive_float


def _drive(driver: RuntimeDriver, scheduler) -> None:
    if not driver.start():
        return
    if isinstance(scheduler, RealtimeScheduler):
        try:
            scheduler.run_forever()
        except KeyboardInterrupt:
            driver.stop()
            print_info(f"Interrupted after {driver.state.frame} frames")
        return
    while driver.running and scheduler.step():
        pass


def cmd_run(args: argparse.Namespace) -> None:
    """
    Handle the 'run' subcommand.

    Top-level statements run once, then the entry function runs once per
    frame. Each frame's drawing commands are printed as a table (or
    collected into a JSON document with ``--json``); diagnostics are listed
    on stderr at the end.

    Args:
        args: Parsed command-line arguments containing:
            - file: Path to the program
            - frames: Number of frames to run (default 1, unbounded with --realtime)
            - fps: Frame rate for --realtime
            - press: Keys held down for the whole run
            - json: Emit one JSON document instead of tables
            - quiet: Skip per-frame tables
            - strict: Exit 1 when any diagnostic was reported

    Examples:
        >>> cmd_run(argparse.Namespace(file='bounce.sketch', frames=3, ...))  # doctest: +SKIP
    """
    try:
        frames = validate_int(args.frames, name="--frames", allow_none=True, min_value=1)
        if frames is None and not args.realtime:
            frames = 1
        fps = validate_positive_float(args.fps, name="--fps")
        config = resolve_runtime_config(args, max_frames=frames, frame_rate=fps)
        program = load_program(Path(args.file))

        scheduler = RealtimeScheduler(config.frame_rate) if args.realtime else ManualScheduler()
        sink = DiagnosticSink()
        printed: List[str] = []
        recorded: List[Dict[str, Any]] = []

        if args.json:
            def output(values):
                printed.append(" ".join(format_value(value) for value in values))
        else:
            output = print_program_output

        driver = RuntimeDriver(program, config=config, scheduler=scheduler, sink=sink, output=output)

        def on_frame(frame: int, commands: Tuple[DrawCommand, ...]) -> None:
            if args.json:
                recorded.append({"frame": frame, "commands": [c.to_dict() for c in commands]})
            elif not args.quiet:
                print_frame(frame, commands)

        driver.add_frame_listener(on_frame)
        for key in args.press or ():
            driver.key_down(key)

        _drive(driver, scheduler)

        if args.json:
            print_json(
                {
                    "canvas": list(driver.canvas_size),
                    "output": printed,
                    "frames": recorded,
                    "diagnostics": [diagnostic_to_dict(entry) for entry in sink.entries],
                }
            )
        else:
            print_diagnostics(sink.entries)

        if args.strict and len(sink):
            sys.exit(1)

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def add_run_command(subparsers) -> None:
    run_parser = subparsers.add_parser('run', help='Run a program for one or more frames')
    run_parser.add_argument('file', help='Path to the program source file')
    run_parser.add_argument(
        '--frames', '-n', default=None,
        help='Number of frames to run (default: 1, or until Ctrl-C with --realtime)'
    )
    run_parser.add_argument(
        '--fps', default=None,
        help='Frames per second for --realtime (default: runtime.frame_rate)'
    )
    run_parser.add_argument(
        '--entry', default=None,
        help='Name of the per-frame entry function (default: run)'
    )
    run_parser.add_argument(
        '--press', action='append', metavar='KEY',
        help='Hold KEY down for the whole run (repeatable)'
    )
    run_parser.add_argument(
        '--realtime', action='store_true',
        help='Pace frames against the wall clock instead of running them back to back'
    )
    run_parser.add_argument(
        '--halt-on-error', action='store_true',
        help='Stop the frame loop at the first reported error'
    )
    run_parser.add_argument(
        '--nested-return', action='store_true',
        help='Let return statements inside loops and ifs end the function'
    )
    run_parser.add_argument('--json', action='store_true', help='Emit a single JSON document')
    run_parser.add_argument('--quiet', '-q', action='store_true', help='Do not print frame tables')
    run_parser.add_argument(
        '--strict', action='store_true',
        help='Exit with status 1 when any diagnostic was reported'
    )
    run_parser.set_defaults(func=cmd_run)
