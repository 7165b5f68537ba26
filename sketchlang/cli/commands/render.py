"""
Render command implementation.

Runs a program headlessly and writes its last frame as an SVG document.
"""

import argparse
from pathlib import Path
from typing import List, Tuple

from sketchlang.observability import DiagnosticSink
from sketchlang.render import render_svg
from sketchlang.runtime import DrawCommand, ManualScheduler, RuntimeDriver

from ..errors import CLIFileNotFoundError, handle_cli_exception
from ..loading import load_program, resolve_runtime_config
from ..output import print_diagnostics, print_program_output, print_success
from ..validation import validate_int


def render_frames(driver: RuntimeDriver, scheduler: ManualScheduler) -> Tuple[DrawCommand, ...]:
    """Run ``driver`` to completion and return the commands of its last frame."""
    frames: List[Tuple[DrawCommand, ...]] = []
    driver.add_frame_listener(lambda frame, commands: frames.append(commands))
    if driver.start():
        while driver.running and scheduler.step():
            pass
    return frames[-1] if frames else ()


def cmd_render(args: argparse.Namespace) -> None:
    """
    Handle the 'render' subcommand.

    The output path defaults to the source path with an ``.svg`` suffix.

    Examples:
        >>> cmd_render(argparse.Namespace(file='bounce.sketch', frames=10, out=None))  # doctest: +SKIP
        ✓ Wrote bounce.svg (400x300, 1 shapes)
    """
    try:
        frames = validate_int(args.frames, name="--frames", min_value=1)
        config = resolve_runtime_config(args, max_frames=frames)
        source_path = Path(args.file)
        program = load_program(source_path)

        scheduler = ManualScheduler()
        sink = DiagnosticSink()
        driver = RuntimeDriver(
            program, config=config, scheduler=scheduler, sink=sink, output=print_program_output
        )
        commands = render_frames(driver, scheduler)
        width, height = driver.canvas_size
        document = render_svg(commands, (width, height), background=args.background)

        out_path = Path(args.out) if args.out else source_path.with_suffix(".svg")
        if not out_path.parent.exists():
            raise CLIFileNotFoundError(
                "Output directory does not exist",
                path=out_path.parent,
                hint="Create the directory first or choose another --out path",
            )
        out_path.write_text(document, encoding="utf-8")
        print_diagnostics(sink.entries)
        print_success(f"Wrote {out_path} ({width}x{height}, {len(commands)} shapes)")
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def add_render_command(subparsers) -> None:
    render_parser = subparsers.add_parser('render', help='Write the last frame of a run as SVG')
    render_parser.add_argument('file', help='Path to the program source file')
    render_parser.add_argument('--out', '-o', default=None, help='Output SVG path')
    render_parser.add_argument('--frames', '-n', default=1, help='Number of frames to run first (default: 1)')
    render_parser.add_argument('--entry', default=None, help='Name of the per-frame entry function')
    render_parser.add_argument('--background', default='#fff', help='Canvas background colour')
    render_parser.set_defaults(func=cmd_render)
