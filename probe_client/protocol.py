"""Wire frames and console command parsing for the probe harness.

The two outbound frames are opaque to the harness: they are sent as-is and only
their length is checked on completion.
"""

from __future__ import annotations

from dataclasses import dataclass


FRAME_SIZE = 15

CONNECT_FRAME = bytes([0x02, 0xFD, 0x00, 0x05, 0x00, 0x00, 0x00, 0x07, 0x0F, 0x0D, 0x00, 0x00, 0x00, 0x00, 0x00])
WRITE_FRAME = bytes([0x02, 0xFD, 0x80, 0x01, 0x00, 0x00, 0x00, 0x07, 0x0F, 0x0D, 0xAA, 0xBB, 0x22, 0x11, 0x22])

# Action letters understood by the dispatcher; "Q" never reaches it.
CONNECT = "C"
READ = "R"
WRITE = "W"
EXIT = "X"
PAUSE = "Q"


class CommandError(ValueError):
    """Raised when an operator command is missing or has malformed arguments."""


@dataclass(frozen=True)
class Command:
    action: str
    args: tuple[str, ...] = ()

    @property
    def raw(self) -> str:
        return " ".join((self.action, *self.args))


def action_of(line: str) -> str:
    """Return the upper-cased action letter of ``line``, or "" for a blank line."""
    # Leading blanks are skipped, so " x" still exits.
    stripped = line.lstrip()
    if not stripped:
        return ""
    return stripped[0].upper()


def parse_command(line: str) -> Command:
    tokens = line.split()
    if not tokens:
        raise CommandError("Empty command")
    return Command(action=tokens[0][0].upper(), args=tuple(tokens[1:]))


def read_byte_count(command: Command) -> int:
    if not command.args:
        raise CommandError("Read command missing byte count")
    try:
        return int(command.args[0])
    except ValueError as exc:
        raise CommandError(f"Read byte count must be an integer, got {command.args[0]!r}") from exc


def connect_target(command: Command) -> tuple[str, str]:
    if len(command.args) != 2:
        raise CommandError("Connect command needs <host> <port>")
    host, port = command.args
    return host, port


def format_hex(data: bytes) -> str:
    return data.hex(" ")
