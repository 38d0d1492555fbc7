"""Reactor-side poller that routes mailbox commands to the client."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from . import protocol
from .connection import ProbeClient
from .mailbox import CommandMailbox
from .protocol import CommandError


logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Drains the mailbox every ``interval`` seconds on the reactor thread.

    The poll interval bounds how long a posted command waits before it is
    applied. An ``X`` command ends polling for good and resolves ``stopped``.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        mailbox: CommandMailbox,
        client: ProbeClient,
        interval: float = 0.5,
        report: Callable[[str], None] = print,
    ):
        self._loop = loop
        self.mailbox = mailbox
        self.client = client
        self.interval = interval
        self._report = report
        self.stopped: asyncio.Future = loop.create_future()

    def start(self) -> None:
        self.poll_once()

    def poll_once(self) -> None:
        line = self.mailbox.take_and_clear()
        if line:
            logger.debug("Dispatching %r", line)
            if not self.dispatch(line):
                if not self.stopped.done():
                    self.stopped.set_result(None)
                return
        self._loop.call_later(self.interval, self.poll_once)

    def dispatch(self, line: str) -> bool:
        """Apply one command; return False when polling should end."""
        try:
            command = protocol.parse_command(line)
            if command.action == protocol.READ:
                self.client.read(protocol.read_byte_count(command))
            elif command.action == protocol.CONNECT:
                host, port = protocol.connect_target(command)
                self.client.connect(host, port)
            elif command.action == protocol.WRITE:
                self.client.write()
            elif command.action == protocol.EXIT:
                return False
            else:
                self._report(f"Unrecognized command: {line.strip()}")
        except CommandError as exc:
            self._report(str(exc))
        return True
