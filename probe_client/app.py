"""Wires the input thread, the mailbox and the asyncio reactor together."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, TextIO

from .config import HarnessConfig
from .connection import ProbeClient
from .console import InputMonitor
from .dispatcher import CommandDispatcher
from .jobs import JobControl, JobSimulator
from .mailbox import CommandMailbox


logger = logging.getLogger(__name__)


class Harness:
    """Runs one harness session and returns the process exit code.

    The mailbox and job control are the only objects shared with the input
    thread. Everything that touches the socket or a timer is created inside
    the reactor coroutine and stays on that thread.
    """

    def __init__(
        self,
        config: HarnessConfig | None = None,
        stream: TextIO | None = None,
        report: Callable[[str], None] = print,
    ):
        self.config = config or HarnessConfig()
        self.report = report
        self.mailbox = CommandMailbox()
        self.control = JobControl()
        self.monitor = InputMonitor(self.mailbox, self.control, stream=stream, report=report)
        self.client: ProbeClient | None = None
        self.jobs: JobSimulator | None = None
        self.dispatcher: CommandDispatcher | None = None

    def run(self) -> int:
        self.monitor.start()
        # Let the usage banner print before status lines start interleaving.
        time.sleep(self.config.banner_grace)
        try:
            asyncio.run(self._reactor())
        finally:
            self.monitor.join(timeout=self.config.input_join_timeout)
        return 0

    async def _reactor(self) -> None:
        loop = asyncio.get_running_loop()
        self.client = ProbeClient(loop, max_packet_size=self.config.max_packet_size, report=self.report)
        self.jobs = JobSimulator(loop, self.control, interval=self.config.job_interval, report=self.report)
        self.dispatcher = CommandDispatcher(
            loop,
            self.mailbox,
            self.client,
            interval=self.config.poll_interval,
            report=self.report,
        )

        self.dispatcher.start()
        self.jobs.start()
        await asyncio.gather(self.dispatcher.stopped, self.jobs.stopped)

        # A read still waiting on the server would otherwise outlive the session.
        await self.client.close()
        logger.debug("Reactor drained after %d completed jobs", self.jobs.completed)
        self.report("Event manager finished")
