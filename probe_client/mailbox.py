"""Single-slot handoff of operator commands from the input thread to the reactor."""

from __future__ import annotations

import logging
import threading


logger = logging.getLogger(__name__)


class CommandMailbox:
    """Holds at most one pending command string.

    Posting overwrites any command the dispatcher has not taken yet, so only the
    latest command survives a burst of input. This is the delivery policy, not
    a bug: the harness models one operator typing one command at a time.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending = ""
        self.dropped = 0

    def post(self, command: str) -> None:
        with self._lock:
            if self._pending:
                self.dropped += 1
                logger.debug("Mailbox overwrote unconsumed command %r", self._pending)
            self._pending = command

    def take_and_clear(self) -> str:
        with self._lock:
            command, self._pending = self._pending, ""
        return command
