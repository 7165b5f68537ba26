"""Frame-scheduling primitives driving the per-frame loop."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque, Optional, Protocol

FrameCallback = Callable[[], None]


class FrameScheduler(Protocol):
    """Anything that can invoke a callback at its next frame."""

    def request_frame(self, callback: FrameCallback) -> None:
        ...


class ManualScheduler:
    """Queues frame requests until :meth:`step` is called.

    Used by tests and by embedders that own their own frame clock.
    """

    def __init__(self) -> None:
        self._pending: Deque[FrameCallback] = deque()

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def step(self, frames: int = 1) -> int:
        """Run up to ``frames`` queued callbacks; return how many ran."""
        ran = 0
        while ran < frames and self._pending:
            callback = self._pending.popleft()
            callback()
            ran += 1
        return ran


class RealtimeScheduler:
    """Blocking loop calling frames at roughly ``frame_rate`` per second."""

    def __init__(
        self,
        frame_rate: float = 60.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if frame_rate <= 0:
            raise ValueError("frame_rate must be positive")
        self.interval = 1.0 / frame_rate
        self._clock = clock
        self._sleep = sleep
        self._next: Optional[FrameCallback] = None
        self.frames_run = 0

    def request_frame(self, callback: FrameCallback) -> None:
        self._next = callback

    def run_forever(self) -> int:
        """Run frames until the driver stops requesting them."""
        while self._next is not None:
            callback, self._next = self._next, None
            started = self._clock()
            callback()
            self.frames_run += 1
            remaining = self.interval - (self._clock() - started)
            if remaining > 0 and self._next is not None:
                self._sleep(remaining)
        return self.frames_run


__all__ = ["FrameCallback", "FrameScheduler", "ManualScheduler", "RealtimeScheduler"]
