"""Simulated background work ticking on the reactor thread."""

from __future__ import annotations

import asyncio
import enum
import logging
import threading
from typing import Callable


logger = logging.getLogger(__name__)


class JobState(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class JobControl:
    """Pause/stop signal shared between the input thread and the reactor.

    STOPPED is terminal: once reached, pause and resume requests are ignored.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = JobState.RUNNING

    @property
    def state(self) -> JobState:
        with self._lock:
            return self._state

    def set_paused(self, paused: bool) -> None:
        with self._lock:
            if self._state is JobState.STOPPED:
                return
            self._state = JobState.PAUSED if paused else JobState.RUNNING

    def is_paused(self) -> bool:
        return self.state is JobState.PAUSED

    def stop(self) -> None:
        with self._lock:
            self._state = JobState.STOPPED

    def is_stopped(self) -> bool:
        return self.state is JobState.STOPPED


class JobSimulator:
    """Completes one simulated job per interval unless paused.

    The timer keeps firing while paused; a pause only suppresses the job
    completion, so resuming picks up on the next tick with no catch-up.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        control: JobControl,
        interval: float = 2.0,
        report: Callable[[str], None] = print,
    ):
        self._loop = loop
        self.control = control
        self.interval = interval
        self._report = report
        self.completed = 0
        self.stopped: asyncio.Future = loop.create_future()

    def start(self) -> None:
        self._schedule()

    def tick(self) -> None:
        state = self.control.state
        if state is JobState.STOPPED:
            self._report("Stopping")
            if not self.stopped.done():
                self.stopped.set_result(self.completed)
            return
        if state is JobState.RUNNING:
            self.completed += 1
            self._report(f"Completed Job {self.completed}")
        else:
            logger.debug("Tick while paused, job %d not started", self.completed + 1)
        self._schedule()

    def _schedule(self) -> None:
        self._loop.call_later(self.interval, self.tick)
