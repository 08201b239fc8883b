"""Snapshot store: produces ContentSourceSnapshots for the display.

Reads the admin data (the same camelCase JSON the admin backup exports)
from a local file or an HTTP endpoint, merges it over the factory
defaults, and validates it into an immutable snapshot. SnapshotStore keeps
the last good snapshot so a broken reload never blanks the display.
"""

import json
import os
import tempfile
import time
from datetime import date
from pathlib import Path
from typing import Any

import requests
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
)

from src.signage.defaults import default_data
from src.signage.errors import (
    InvalidSnapshotError,
    PermanentError,
    SignageError,
    SnapshotMissingError,
    TransientError,
)
from src.signage.logging import get_logger
from src.signage.models import ContentSourceSnapshot

logger = get_logger(__name__)

# Lunch moved out of the generic meal list into lunchMenu; old files still carry it
LEGACY_LUNCH_MEAL = "Mittagessen"

# Keys an import must carry to be recognised as an admin backup
REQUIRED_IMPORT_KEYS = ("meals", "weeklySchedule")

_LIST_KEYS = ("quotes", "locations", "eventTitles", "residents")


def merge_with_defaults(raw: Any) -> dict[str, Any]:
    """Merge stored admin data over the factory defaults.

    Nested records (urgent message, lunch menu, slideshow) are merged field
    by field; lists are taken as stored when they are lists at all.

    Raises:
        InvalidSnapshotError: If the payload is not a JSON object.
    """
    if not isinstance(raw, dict):
        raise InvalidSnapshotError(
            f"Snapshot payload must be an object, got {type(raw).__name__}"
        )

    data = default_data()

    meals = raw.get("meals")
    if not isinstance(meals, list):
        meals = data["meals"]
    data["meals"] = [
        m for m in meals if not (isinstance(m, dict) and m.get("name") == LEGACY_LUNCH_MEAL)
    ]

    for key in ("urgentMessage", "lunchMenu"):
        if isinstance(raw.get(key), dict):
            data[key] = {**data[key], **raw[key]}

    stored_slideshow = raw.get("slideshow")
    if isinstance(stored_slideshow, dict):
        slideshow = {**data["slideshow"], **stored_slideshow}
        if not stored_slideshow.get("durationPerSlide"):
            slideshow["durationPerSlide"] = data["slideshow"]["durationPerSlide"]
        if not isinstance(stored_slideshow.get("images"), list):
            slideshow["images"] = data["slideshow"]["images"]
        data["slideshow"] = slideshow

    for key in _LIST_KEYS:
        if isinstance(raw.get(key), list):
            data[key] = raw[key]

    if raw.get("weeklySchedule"):
        data["weeklySchedule"] = raw["weeklySchedule"]
    if raw.get("currentTheme"):
        data["currentTheme"] = raw["currentTheme"]
    if raw.get("menuPlanUrl"):
        data["menuPlanUrl"] = raw["menuPlanUrl"]

    return data


def build_snapshot(raw: Any) -> ContentSourceSnapshot:
    """Merge and validate a raw payload into a snapshot.

    Raises:
        InvalidSnapshotError: If the merged payload fails validation.
    """
    merged = merge_with_defaults(raw)
    try:
        return ContentSourceSnapshot.model_validate(merged)
    except ValidationError as e:
        raise InvalidSnapshotError(
            f"Snapshot failed validation ({e.error_count()} errors): {e}"
        ) from e


@retry(
    stop=stop_after_attempt(3),
    wait=wait_fixed(0.2),
    retry=retry_if_exception_type(TransientError),
    reraise=True,
)
def _read_payload(path: Path) -> Any:
    """Read and decode the data file.

    A decode error is treated as transient: the admin may be in the middle
    of rewriting the file.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SnapshotMissingError(f"Data file not found: {path}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("snapshot_decode_failed", path=str(path), error=str(e))
        raise TransientError(f"Data file is not valid JSON: {path}") from e


def load_snapshot(path: str | Path) -> ContentSourceSnapshot:
    """Load a snapshot from a local data file.

    Raises:
        SnapshotMissingError: If the file does not exist.
        TransientError: If the file stayed undecodable across retries.
        InvalidSnapshotError: If the content fails validation.
    """
    path = Path(path)
    snapshot = build_snapshot(_read_payload(path))
    logger.info(
        "snapshot_loaded",
        source=str(path),
        weeks=len(snapshot.weekly_schedule),
        residents=len(snapshot.residents),
    )
    return snapshot


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, max=5),
    retry=retry_if_exception_type(TransientError),
    reraise=True,
)
def _get_payload(url: str, timeout: float) -> Any:
    """GET the snapshot JSON, classifying failures for retry."""
    try:
        resp = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
    except (requests.Timeout, requests.ConnectionError) as e:
        logger.warning("snapshot_fetch_failed", url=url, error=str(e))
        raise TransientError(f"Snapshot endpoint unreachable: {e}") from e

    if resp.status_code == 429 or resp.status_code >= 500:
        logger.warning("snapshot_fetch_failed", url=url, status=resp.status_code)
        raise TransientError(f"Snapshot endpoint returned {resp.status_code}")
    if resp.status_code == 404:
        raise SnapshotMissingError(f"No snapshot at {url}")
    if resp.status_code != 200:
        raise PermanentError(f"Snapshot endpoint returned {resp.status_code}")

    try:
        return resp.json()
    except ValueError as e:
        raise InvalidSnapshotError(f"Snapshot endpoint did not return JSON: {e}") from e


def fetch_snapshot(url: str, timeout: float = 10.0) -> ContentSourceSnapshot:
    """Load a snapshot from an HTTP endpoint serving the admin JSON."""
    snapshot = build_snapshot(_get_payload(url, timeout))
    logger.info("snapshot_loaded", source=url, weeks=len(snapshot.weekly_schedule))
    return snapshot


def dump_snapshot(snapshot: ContentSourceSnapshot) -> dict[str, Any]:
    """Serialize a snapshot back into the camelCase admin format."""
    return snapshot.model_dump(mode="json", by_alias=True)


def save_snapshot(snapshot: ContentSourceSnapshot, path: str | Path) -> Path:
    """Write the snapshot to ``path`` atomically.

    The display may read the file at any moment, so the content is written
    to a temporary file in the same directory and swapped in with os.replace.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(dump_snapshot(snapshot), f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("snapshot_saved", path=str(path))
    return path


def export_snapshot(
    snapshot: ContentSourceSnapshot,
    directory: str | Path,
    today: date | None = None,
) -> Path:
    """Write a dated backup file, e.g. signage-backup-2026-10-19.json."""
    today = today or date.today()
    target = Path(directory) / f"signage-backup-{today.isoformat()}.json"
    return save_snapshot(snapshot, target)


def import_snapshot(path: str | Path) -> ContentSourceSnapshot:
    """Read a backup file produced by export_snapshot().

    Stricter than load_snapshot(): the file must carry the schedule keys,
    otherwise it is not considered a backup at all.

    Raises:
        InvalidSnapshotError: If required keys are missing or validation fails.
    """
    path = Path(path)
    raw = _read_payload(path)
    missing = [
        key
        for key in REQUIRED_IMPORT_KEYS
        if not (isinstance(raw, dict) and raw.get(key))
    ]
    if missing:
        raise InvalidSnapshotError(f"Not a signage backup, missing: {', '.join(missing)}")
    snapshot = build_snapshot(raw)
    logger.info("snapshot_imported", path=str(path))
    return snapshot


class SnapshotStore:
    """Hands out the latest good snapshot to the display loop.

    File sources are re-read only when the file's mtime changes; URL sources
    are re-fetched every ``refresh_seconds``. A failed reload keeps the
    previous snapshot in place.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        url: str = "",
        timeout: float = 10.0,
        refresh_seconds: float = 60.0,
    ) -> None:
        if not path and not url:
            raise SnapshotMissingError("SnapshotStore needs a data file or a URL")
        self.path = Path(path) if path else None
        self.url = url
        self.timeout = timeout
        self.refresh_seconds = refresh_seconds

        self._snapshot: ContentSourceSnapshot | None = None
        self._version: int | None = None
        self._fetched_at: float | None = None

    def current(self) -> ContentSourceSnapshot:
        """Return the newest snapshot, reloading if the source changed.

        Raises:
            SignageError: Only if no snapshot has ever been loaded.
        """
        try:
            if self.url:
                self._refresh_from_url()
            else:
                self._refresh_from_file()
        except SignageError as e:
            if self._snapshot is None:
                raise
            logger.warning(
                "snapshot_reload_failed",
                error=str(e),
                type=type(e).__name__,
                keeping="previous",
            )
        return self._snapshot  # type: ignore[return-value]

    def _refresh_from_file(self) -> None:
        try:
            version = self.path.stat().st_mtime_ns
        except FileNotFoundError as e:
            raise SnapshotMissingError(f"Data file not found: {self.path}") from e
        if self._snapshot is not None and version == self._version:
            return
        # Remember the version even if loading fails; the next write bumps it
        self._version = version
        self._snapshot = load_snapshot(self.path)

    def _refresh_from_url(self) -> None:
        now = time.monotonic()
        if (
            self._snapshot is not None
            and self._fetched_at is not None
            and now - self._fetched_at < self.refresh_seconds
        ):
            return
        # Stamp before fetching so a failing endpoint is not hammered every tick
        self._fetched_at = now
        self._snapshot = fetch_snapshot(self.url, timeout=self.timeout)
