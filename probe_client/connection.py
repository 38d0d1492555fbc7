"""Non-blocking TCP client for the binary probe protocol."""

from __future__ import annotations

import asyncio
import enum
import functools
import logging
import socket
from typing import Callable

from .protocol import CONNECT_FRAME, FRAME_SIZE, WRITE_FRAME, format_hex


logger = logging.getLogger(__name__)

MAX_PACKET_SIZE = 1024


class ConnectionState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    CONNECTING = "connecting"


class ProbeClient:
    """Owns the single server connection; must only be used on the reactor thread.

    ``connect`` blocks for the resolve and connect, which is short compared to
    operator think time. Every transfer after that is scheduled on the event
    loop and completes through a done-callback that reports the outcome.
    ``read`` and ``write`` return the scheduled task, or ``None`` when the
    request was rejected before any I/O was issued.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        max_packet_size: int = MAX_PACKET_SIZE,
        report: Callable[[str], None] = print,
    ):
        self._loop = loop
        self.max_packet_size = max_packet_size
        self._report = report
        self.state = ConnectionState.DISCONNECTED
        self._sock: socket.socket | None = None
        self._transfers: set[asyncio.Task] = set()

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def connect(self, host: str, port: str | int) -> asyncio.Task | None:
        self._release()
        self.state = ConnectionState.CONNECTING
        try:
            sock = socket.create_connection((host, int(port)))
            sock.setblocking(False)
        except Exception as exc:  # noqa: BLE001 - connect faults are reported, never raised
            self.state = ConnectionState.DISCONNECTED
            logger.debug("Connect to %s:%s failed", host, port, exc_info=True)
            self._report(f"Client Connection failed: {exc}")
            return None

        self._sock = sock
        self.state = ConnectionState.CONNECTED
        self._report("Client Connected OK")
        return self._start(self._send(sock, CONNECT_FRAME), functools.partial(self._connect_frame_sent, sock))

    def read(self, byte_count: int) -> asyncio.Task | None:
        if not self.connected:
            self._report("Read Request but no connection")
            return None
        if byte_count < 1:
            self._report("Error in read command")
            return None
        if byte_count > self.max_packet_size:
            self._report("Too many bytes requested")
            return None

        task = self._start(self._receive(self._sock, byte_count), functools.partial(self._read_done, self._sock))
        self._report("waiting for server to reply")
        return task

    def write(self) -> asyncio.Task | None:
        if not self.connected:
            self._report("Write Request but no connection")
            return None
        return self._start(self._send(self._sock, WRITE_FRAME), functools.partial(self._write_done, self._sock))

    async def close(self) -> None:
        pending = self._cancel_transfers()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._drop_socket()

    def _release(self) -> None:
        self._cancel_transfers()
        self._drop_socket()

    def _cancel_transfers(self) -> list[asyncio.Task]:
        pending = [task for task in self._transfers if not task.done()]
        for task in pending:
            task.cancel()
        return pending

    def _drop_socket(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
        self.state = ConnectionState.DISCONNECTED

    def _start(self, coro, on_done: Callable[[asyncio.Task], None]) -> asyncio.Task:
        task = self._loop.create_task(coro)
        self._transfers.add(task)
        task.add_done_callback(self._transfers.discard)
        task.add_done_callback(on_done)
        return task

    async def _send(self, sock: socket.socket, frame: bytes) -> int:
        await self._loop.sock_sendall(sock, frame)
        return len(frame)

    async def _receive(self, sock: socket.socket, byte_count: int) -> bytes:
        buffer = bytearray(byte_count)
        view = memoryview(buffer)
        received = 0
        while received < byte_count:
            count = await self._loop.sock_recv_into(sock, view[received:])
            if count == 0:
                raise ConnectionError("Connection closed by server")
            received += count
        return bytes(buffer)

    def _lost(self, sock: socket.socket) -> None:
        # A stale socket from before a reconnect must not tear down the new one.
        if sock is not self._sock:
            return
        sock.close()
        self._sock = None
        self.state = ConnectionState.DISCONNECTED

    def _failed(self, task: asyncio.Task) -> bool:
        exc = task.exception()
        if exc is None:
            return False
        logger.debug("Transfer failed: %r", exc)
        return True

    def _connect_frame_sent(self, sock: socket.socket, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        if self._failed(task) or task.result() != FRAME_SIZE:
            self._lost(sock)
            self._report("Error sending connection message to server")
            return
        self._report("Connection message sent to server")

    def _write_done(self, sock: socket.socket, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        if self._failed(task) or task.result() != FRAME_SIZE:
            self._lost(sock)
            self._report("Error sending write message to server")
            return
        self._report("Write message sent to server")

    def _read_done(self, sock: socket.socket, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        if self._failed(task):
            self._lost(sock)
            self._report("Connection closed")
            return
        data = task.result()
        self._report(f"{len(data)} bytes read")
        self._report(format_hex(data))
