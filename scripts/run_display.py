"""Run the display loop, logging every content change.

Re-reads the admin data file whenever it changes and re-selects content
every tick. Stops with Ctrl+C.

Usage:
    python scripts/run_display.py
    python scripts/run_display.py --data data/signage.json --tick 5
    python scripts/run_display.py --ticks 60      # stop after 60 ticks
"""

import argparse
import asyncio
import sys

from config import CONFIG, init_logging, make_store

from src.signage.display import DisplayLoop
from src.signage.logging import get_logger

log = get_logger("run_display")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the signage display loop")
    parser.add_argument("--data", default=None, help="Admin data file")
    parser.add_argument("--url", default=None, help="Snapshot URL")
    parser.add_argument(
        "--tick", type=float, default=CONFIG.tick_seconds, help="Seconds between ticks"
    )
    parser.add_argument(
        "--ticks", type=int, default=None, help="Stop after this many ticks"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    init_logging(args.verbose)

    store = make_store(args.data, args.url)
    loop = DisplayLoop(
        store.current,
        timezone=CONFIG.timezone,
        tick_seconds=args.tick,
    )
    try:
        asyncio.run(loop.run(max_ticks=args.ticks))
    except KeyboardInterrupt:
        log.info("display_loop_interrupted")
    except Exception as e:
        log.error("display_loop_failed", error=str(e), type=type(e).__name__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
