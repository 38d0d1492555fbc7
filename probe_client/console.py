"""Blocking console reader that runs on its own thread.

The monitor never touches the socket or the event loop. It only posts raw
command lines to the mailbox and flips the job control.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Callable, TextIO

from . import protocol
from .jobs import JobControl
from .mailbox import CommandMailbox


logger = logging.getLogger(__name__)


HELP_TEXT = """
Keyboard monitor running

   To pause for user input type 'q<ENTER>'
   To connect to server type 'C <ip> <port><ENTER>'
   To read from server type 'R <byte count><ENTER>'
   To send a pre-defined message to the server type 'W<ENTER>'
   To stop type 'x<ENTER>' (DO NOT USE ctrl-C)

   Don't forget to hit <ENTER>!
"""

_POSTED_ACTIONS = {protocol.CONNECT, protocol.READ, protocol.WRITE}


class InputMonitor:
    def __init__(
        self,
        mailbox: CommandMailbox,
        control: JobControl,
        stream: TextIO | None = None,
        report: Callable[[str], None] = print,
    ):
        self.mailbox = mailbox
        self.control = control
        self.stream = stream if stream is not None else sys.stdin
        self._report = report
        self._thread: threading.Thread | None = None

    def start(self) -> threading.Thread:
        self._thread = threading.Thread(target=self.run, name="input-monitor", daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def run(self) -> None:
        self._report(HELP_TEXT)
        while True:
            line = self.stream.readline()
            if not line:
                # End of input: shut down as if the operator typed X.
                logger.debug("Console input closed")
                self.handle_line(protocol.EXIT)
                return
            if not self.handle_line(line.rstrip("\r\n")):
                return

    def handle_line(self, line: str) -> bool:
        """Classify one console line; return False once the monitor should exit."""
        action = protocol.action_of(line)
        if not action:
            return True
        self._report(f"input was {line}")

        if action == protocol.EXIT:
            self.mailbox.post(line)
            self.control.stop()
            return False
        if action == protocol.PAUSE:
            self._report("Waiting for user input: C or R or W")
            self.control.set_paused(True)
        elif action in _POSTED_ACTIONS:
            self.mailbox.post(line)
            self.control.set_paused(False)
        else:
            logger.debug("Ignoring console line %r", line)
        return True
