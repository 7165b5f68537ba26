"""Per-run state: globals, functions, drawing buffer, keys and colours."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Set, Tuple

from sketchlang.ast import FunctionDeclaration
from sketchlang.config import RuntimeConfig
from sketchlang.errors import SketchError
from sketchlang.observability import Diagnostic, DiagnosticSink, get_logger

from .scope import Scope
from .values import Value, format_value

logger = get_logger("sketchlang.runtime")
program_logger = get_logger("sketchlang.program")

OutputSink = Callable[[Sequence[Value]], None]


@dataclass(frozen=True)
class DrawCommand:
    """One shape-draw call with its resolved colour."""

    shape: str
    args: Tuple[float, ...]
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {"shape": self.shape, "args": list(self.args), "color": self.color}


def format_rgb(red: Value, green: Value, blue: Value) -> str:
    return f"rgb({format_value(red)}, {format_value(green)}, {format_value(blue)})"


class ColorStack:
    """Bounded stack of colours whose top is used for drawing.

    Pushing past ``limit`` drops the oldest entry. Popping the last entry
    reseeds the stack with ``default`` so :attr:`top` is always a colour.
    """

    def __init__(self, limit: int = 5, default: str = "rgb(0,0,0)") -> None:
        if limit < 1:
            raise ValueError("color stack limit must be at least 1")
        self.limit = limit
        self.default = default
        self._entries: List[str] = [default]

    @property
    def top(self) -> str:
        return self._entries[-1]

    def push(self, color: str) -> None:
        self._entries.append(color)
        while len(self._entries) > self.limit:
            self._entries.pop(0)

    def pop(self) -> str:
        removed = self._entries.pop() if self._entries else self.default
        if not self._entries:
            self._entries.append(self.default)
        return removed

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"ColorStack({self._entries!r})"


def _log_output(values: Sequence[Value]) -> None:
    program_logger.info(" ".join(format_value(value) for value in values))


@dataclass
class RuntimeState:
    """Everything one run owns; a new run builds a fresh instance."""

    config: RuntimeConfig = field(default_factory=RuntimeConfig)
    sink: DiagnosticSink = field(default_factory=DiagnosticSink)
    output: OutputSink = _log_output
    globals: Scope = field(default_factory=Scope)
    functions: Dict[str, FunctionDeclaration] = field(default_factory=dict)
    commands: List[DrawCommand] = field(default_factory=list)
    keys: Set[str] = field(default_factory=set)
    colors: Optional[ColorStack] = None
    running: bool = False
    frame: int = 0
    call_depth: int = 0

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = ColorStack(self.config.color_limit, self.config.default_color)

    def report(self, error: SketchError, *, line: Optional[int] = None) -> Diagnostic:
        """Single funnel for every reported condition."""
        if error.line is None and line is not None:
            error.line = line
            error.location.line = line
        diagnostic = Diagnostic.from_error(error, frame=self.frame if self.running else None)
        self.sink.emit(diagnostic)
        if self.config.halt_on_error and self.running:
            logger.info("Stopping run after error: %s", diagnostic.message)
            self.running = False
        return diagnostic

    def draw(self, shape: str, args: Sequence[float]) -> DrawCommand:
        command = DrawCommand(shape=shape, args=tuple(args), color=self.colors.top)
        self.commands.append(command)
        return command

    def clear_commands(self) -> None:
        self.commands = []


__all__ = ["DrawCommand", "ColorStack", "RuntimeState", "OutputSink", "format_rgb"]
