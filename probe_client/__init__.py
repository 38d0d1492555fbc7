from .app import Harness
from .config import HarnessConfig
from .connection import ConnectionState, ProbeClient

__all__ = ["ConnectionState", "Harness", "HarnessConfig", "ProbeClient"]
