import argparse
import logging

from .app import run_server
from .config import ProbeServerConfig


def main() -> None:
    parser = argparse.ArgumentParser(description="Scripted peer for the probe harness")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5555)
    parser.add_argument("--reply", type=bytes.fromhex, default=b"", help="hex bytes sent to each new connection")
    parser.add_argument("--close-after-reply", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    config = ProbeServerConfig(
        host=args.host,
        port=args.port,
        reply=args.reply,
        close_after_reply=args.close_after_reply,
    )
    run_server(config)


if __name__ == "__main__":
    main()
