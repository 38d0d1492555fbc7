from .app import ProbeTCPServer, run_server
from .config import ProbeServerConfig

__all__ = ["ProbeServerConfig", "ProbeTCPServer", "run_server"]
