import argparse
import logging
import sys

from .app import Harness
from .config import HarnessConfig


def parse_log_level(name: str) -> int | None:
    level = getattr(logging, name.upper(), None)
    return level if isinstance(level, int) else None


def main() -> None:
    parser = argparse.ArgumentParser(description="Interactive binary-probe TCP harness")
    parser.add_argument("--job-interval", type=float, default=2.0, help="seconds between simulated jobs")
    parser.add_argument("--poll-interval", type=float, default=0.5, help="seconds between command polls")
    parser.add_argument("--grace", type=float, default=3.0, help="seconds to let the usage banner settle")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    numeric_level = parse_log_level(args.log_level)
    if numeric_level is None:
        print(f"Invalid log level: {args.log_level}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(level=numeric_level, format="%(levelname)s: %(message)s", stream=sys.stderr)

    config = HarnessConfig(
        job_interval=args.job_interval,
        poll_interval=args.poll_interval,
        banner_grace=args.grace,
    )
    harness = Harness(config)
    try:
        sys.exit(harness.run())
    except KeyboardInterrupt:
        harness.control.stop()
        print("Interrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
