"""Shared pytest fixtures for the sketchlang test suite."""

import logging
import textwrap
from typing import Callable, List, Optional

import pytest

from sketchlang.config import RuntimeConfig
from sketchlang.observability import DiagnosticSink
from sketchlang.runtime import ManualScheduler, RuntimeDriver, format_value


class ProgramRun:
    """Driver plus everything a headless run printed."""

    def __init__(self, driver: RuntimeDriver, printed: List[str], frames: List[tuple]):
        self.driver = driver
        self.printed = printed
        self.frames = frames

    @property
    def diagnostics(self):
        return self.driver.diagnostics.entries

    @property
    def messages(self) -> List[str]:
        return self.driver.diagnostics.messages()

    def get(self, name: str):
        return self.driver.state.globals.get(name)


def dedent(source: str) -> str:
    return textwrap.dedent(source).strip("\n") + "\n"


@pytest.fixture
def run_program() -> Callable[..., ProgramRun]:
    """Run a program headlessly for ``frames`` frames and collect its output."""

    def _run(source: str, frames: int = 1, config: Optional[RuntimeConfig] = None, keys=()) -> ProgramRun:
        printed: List[str] = []
        recorded: List[tuple] = []
        scheduler = ManualScheduler()
        driver = RuntimeDriver.from_source(
            dedent(source),
            config=config,
            scheduler=scheduler,
            sink=DiagnosticSink(),
            output=lambda values: printed.append(" ".join(format_value(v) for v in values)),
        )
        driver.add_frame_listener(lambda frame, commands: recorded.append(commands))
        for key in keys:
            driver.key_down(key)
        driver.load()
        # Programs without an entry function only run their top level.
        if driver.config.entry_function in driver.state.functions:
            driver.start()
            if frames > 1:
                scheduler.step(frames - 1)
            driver.stop()
        return ProgramRun(driver, printed, recorded)

    return _run


@pytest.fixture
def write_program(tmp_path):
    """Write a program to a temporary file and return its path."""

    def _write(source: str, name: str = "program.sketch"):
        path = tmp_path / name
        path.write_text(dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def restore_package_logger():
    """The CLI reconfigures the ``sketchlang`` logger; undo it after each test."""
    logger = logging.getLogger("sketchlang")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
