from dataclasses import dataclass

from .connection import MAX_PACKET_SIZE


@dataclass(frozen=True)
class HarnessConfig:
    job_interval: float = 2.0
    poll_interval: float = 0.5
    banner_grace: float = 3.0
    max_packet_size: int = MAX_PACKET_SIZE
    input_join_timeout: float = 1.0
