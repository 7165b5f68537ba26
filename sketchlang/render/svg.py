"""Render drawing commands as an SVG document."""

from __future__ import annotations

from typing import Iterable, List, Tuple
from xml.sax.saxutils import quoteattr

from sketchlang.runtime.state import DrawCommand
from sketchlang.runtime.values import format_value

__all__ = ["render_svg"]


def _num(value: float) -> str:
    return format_value(value)


def _shape(command: DrawCommand) -> str:
    fill = quoteattr(command.color)
    if command.shape == "circle":
        x, y, r = command.args[:3]
        return f'<circle cx="{_num(x)}" cy="{_num(y)}" r="{_num(abs(r))}" fill={fill} />'
    if command.shape == "rectangle":
        x, y, w, h = command.args[:4]
        # Negative sizes extend up/left, as on a canvas.
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        return (
            f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(w)}" '
            f'height="{_num(h)}" fill={fill} />'
        )
    raise ValueError(f"unknown shape {command.shape!r}")


def render_svg(
    commands: Iterable[DrawCommand],
    size: Tuple[int, int],
    *,
    background: str = "#fff",
) -> str:
    """Return an SVG document drawing ``commands`` in order on a ``size`` canvas."""
    width, height = size
    lines: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">',
        f'  <rect x="0" y="0" width="{width}" height="{height}" fill={quoteattr(background)} />',
    ]
    lines.extend(f"  {_shape(command)}" for command in commands)
    lines.append("</svg>")
    return "\n".join(lines) + "\n"
