"""
Shared configuration and helpers for the signage scripts.
"""

import os
import sys
from datetime import datetime
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.signage.config import get_config  # noqa: E402
from src.signage.logging import setup_logging  # noqa: E402
from src.signage.store import SnapshotStore  # noqa: E402

CONFIG = get_config()


def init_logging(verbose=False):
    """Configure structlog from SIGNAGE_LOG_* settings (--verbose forces DEBUG)."""
    level = "DEBUG" if verbose else CONFIG.log_level
    setup_logging(
        json_output=CONFIG.log_json, log_level=level, display_id=CONFIG.display_id
    )


def make_store(data_file=None, url=None):
    """Snapshot store for the given source, falling back to the configured one."""
    url = url if url is not None else CONFIG.snapshot_url
    if url:
        return SnapshotStore(url=url, timeout=CONFIG.http_timeout_seconds)
    return SnapshotStore(data_file or CONFIG.data_file)


def parse_at(value, tz=None):
    """Parse --at "YYYY-MM-DD HH:MM" (or just "HH:MM" for today) in the facility timezone."""
    zone = ZoneInfo(tz or CONFIG.timezone)
    if value is None:
        return datetime.now(zone)
    value = value.strip()
    if len(value) <= 5:
        clock = datetime.strptime(value, "%H:%M")
        return datetime.now(zone).replace(
            hour=clock.hour, minute=clock.minute, second=0, microsecond=0
        )
    return datetime.strptime(value, "%Y-%m-%d %H:%M").replace(tzinfo=zone)
