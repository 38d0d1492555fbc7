from dataclasses import dataclass


@dataclass(frozen=True)
class ProbeServerConfig:
    host: str = "127.0.0.1"
    port: int = 5555
    reply: bytes = b""
    close_after_reply: bool = False
