"""Runtime driver: owns one run and repeats the entry function per frame."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from sketchlang.ast import Block
from sketchlang.config import RuntimeConfig
from sketchlang.errors import MissingEntryPointError, SketchRuntimeError
from sketchlang.observability import DiagnosticSink, get_logger
from sketchlang.parser import parse_source

from .executor import Executor
from .scheduling import FrameScheduler, ManualScheduler
from .state import DrawCommand, OutputSink, RuntimeState
from .values import to_number

logger = get_logger("sketchlang.runtime")

FrameListener = Callable[[int, Tuple[DrawCommand, ...]], None]


class RuntimeDriver:
    """Drives one run of a parsed program.

    Construction builds a fresh :class:`RuntimeState`; nothing is shared with
    earlier runs. :meth:`load` executes the top-level statements once,
    :meth:`start` begins the frame loop and :meth:`tick` performs one frame:
    clear the drawing buffer, run the entry function, hand the commands to
    listeners and request the next frame.
    """

    def __init__(
        self,
        program: Block,
        *,
        config: Optional[RuntimeConfig] = None,
        scheduler: Optional[FrameScheduler] = None,
        sink: Optional[DiagnosticSink] = None,
        output: Optional[OutputSink] = None,
    ) -> None:
        self.program = program
        self.config = config or RuntimeConfig()
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        state_kwargs = {"config": self.config, "sink": sink if sink is not None else DiagnosticSink()}
        if output is not None:
            state_kwargs["output"] = output
        self.state = RuntimeState(**state_kwargs)
        self.executor = Executor(self.state)
        self._listeners: List[FrameListener] = []
        self._loaded = False

    @classmethod
    def from_source(cls, source: str, **kwargs) -> "RuntimeDriver":
        return cls(parse_source(source), **kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def commands(self) -> Tuple[DrawCommand, ...]:
        return tuple(self.state.commands)

    @property
    def diagnostics(self) -> DiagnosticSink:
        return self.state.sink

    @property
    def canvas_size(self) -> Tuple[int, int]:
        """``CanvasSize`` from globals, else the configured default."""
        value = self.state.globals.vars.get("CanvasSize")
        if isinstance(value, list) and len(value) == 2:
            return int(to_number(value[0])), int(to_number(value[1]))
        return self.config.default_canvas

    def add_frame_listener(self, listener: FrameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def load(self) -> None:
        """Execute the top-level statements once, registering functions and globals."""
        if self._loaded:
            return
        self._loaded = True
        logger.debug("Executing %d top-level statements", len(self.program))
        self.executor.run(self.program)

    def start(self) -> bool:
        """Begin the frame loop; False when no entry function is declared."""
        self.load()
        entry = self.config.entry_function
        if entry not in self.state.functions:
            logger.info("Entry function %s() not declared; frame loop not started", entry)
            self.state.report(MissingEntryPointError(entry))
            return False
        self.state.running = True
        logger.info("Run started with entry function %s()", entry)
        self.tick()
        return True

    def stop(self) -> None:
        """Clear the running flag; an in-flight frame still finishes."""
        if self.state.running:
            logger.info("Run stopped after %d frames", self.state.frame)
        self.state.running = False

    def tick(self) -> None:
        state = self.state
        if not state.running:
            return
        if self.config.max_frames is not None and state.frame >= self.config.max_frames:
            self.stop()
            return
        state.clear_commands()
        try:
            self.executor.invoke(self.config.entry_function, [], state.globals)
        except SketchRuntimeError as exc:
            state.report(exc)
        frame = state.frame
        state.frame += 1
        commands = tuple(state.commands)
        for listener in list(self._listeners):
            listener(frame, commands)
        if state.running:
            self.scheduler.request_frame(self.tick)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def key_down(self, key: str) -> None:
        self.state.keys.add(key)

    def key_up(self, key: str) -> None:
        self.state.keys.discard(key)


def run_source(
    source: str,
    *,
    frames: int = 1,
    config: Optional[RuntimeConfig] = None,
    output: Optional[OutputSink] = None,
    sink: Optional[DiagnosticSink] = None,
) -> RuntimeDriver:
    """Parse ``source`` and run it headlessly for up to ``frames`` frames."""
    scheduler = ManualScheduler()
    driver = RuntimeDriver.from_source(
        source, config=config, scheduler=scheduler, output=output, sink=sink
    )
    if driver.start() and frames > 1:
        scheduler.step(frames - 1)
    driver.stop()
    return driver


__all__ = ["RuntimeDriver", "FrameListener", "run_source"]
