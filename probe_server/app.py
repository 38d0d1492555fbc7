"""Scripted TCP peer for exercising the probe harness."""

import logging
import socketserver
import threading
import time

from .config import ProbeServerConfig


logger = logging.getLogger(__name__)


class ProbeRequestHandler(socketserver.StreamRequestHandler):
    server: "ProbeTCPServer"

    def handle(self) -> None:
        index = self.server.open_connection()
        logger.info("Connection %d from %s:%s", index, *self.client_address[:2])
        if self.server.config.reply:
            self.wfile.write(self.server.config.reply)
        if self.server.config.close_after_reply:
            return
        while True:
            try:
                chunk = self.rfile.read1(4096)
            except OSError:
                return
            if not chunk:
                return
            self.server.record(index, chunk)


class ProbeTCPServer(socketserver.ThreadingTCPServer):
    """Accepts harness connections, sends the configured reply and records every byte received."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, config: ProbeServerConfig):
        self.config = config
        self._received: list[bytearray] = []
        self._condition = threading.Condition()
        super().__init__((config.host, config.port), ProbeRequestHandler)

    def open_connection(self) -> int:
        with self._condition:
            self._received.append(bytearray())
            self._condition.notify_all()
            return len(self._received) - 1

    def record(self, index: int, chunk: bytes) -> None:
        with self._condition:
            self._received[index].extend(chunk)
            self._condition.notify_all()

    def received(self) -> list[bytes]:
        with self._condition:
            return [bytes(data) for data in self._received]

    def wait_for_bytes(self, count: int, timeout: float, connection: int = 0) -> bytes:
        """Block until ``connection`` has delivered at least ``count`` bytes or ``timeout`` expires."""
        deadline = time.time() + timeout
        with self._condition:
            while len(self._received) <= connection or len(self._received[connection]) < count:
                remaining = deadline - time.time()
                if remaining <= 0:
                    break
                self._condition.wait(timeout=remaining)
            if len(self._received) <= connection:
                return b""
            return bytes(self._received[connection])


def run_server(config: ProbeServerConfig) -> None:
    server = ProbeTCPServer(config)
    print(f"[PROBE] Server listening on {config.host}:{config.port}")
    with server:
        server.serve_forever()
