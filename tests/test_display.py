"""Tests for the display loop and slideshow cursor."""

import asyncio
import contextlib
import time
from datetime import datetime, timedelta

import pytest
from helpers import TUESDAY

from src.signage.decisions import (
    MealDecision,
    MenuPlanFallbackDecision,
    SlideshowDecision,
    UrgentMessageDecision,
)
from src.signage.display import DisplayLoop, SlideshowCursor, log_renderer
from src.signage.errors import SnapshotMissingError
from src.signage.models import SlideshowImage


def _moment(hh_mm, seconds=0):
    hour, minute = (int(p) for p in hh_mm.split(":"))
    return datetime(TUESDAY.year, TUESDAY.month, TUESDAY.day, hour, minute, seconds)


def _images(count):
    return tuple(SlideshowImage(id=f"s{i}", url=f"/img/s{i}.jpg") for i in range(count))


@pytest.fixture
def rendered():
    return []


class TestDisplayLoop:
    def test_renders_only_on_change(self, make_snapshot, rendered):
        snapshot = make_snapshot()
        loop = DisplayLoop(lambda: snapshot, rendered.append)

        first = loop.tick(_moment("10:00"))
        assert isinstance(first, MenuPlanFallbackDecision)
        assert loop.tick(_moment("10:00", 1)) is None
        assert loop.tick(_moment("10:30")) is None
        assert rendered == [first]

    def test_switches_when_window_opens(self, make_snapshot, rendered):
        snapshot = make_snapshot()
        loop = DisplayLoop(lambda: snapshot, rendered.append)
        loop.tick(_moment("11:14"))
        lunch = loop.tick(_moment("11:15"))
        assert isinstance(lunch, MealDecision)
        assert [d.kind for d in rendered] == ["menu_plan_fallback", "meal"]
        assert loop.decision == lunch

    def test_picks_up_new_snapshot(self, make_snapshot, payload, rendered):
        snapshots = [make_snapshot()]
        loop = DisplayLoop(lambda: snapshots[-1], rendered.append)
        loop.tick(_moment("10:00"))

        urgent = {**payload["urgentMessage"], "active": True}
        snapshots.append(make_snapshot(urgentMessage=urgent))
        assert isinstance(loop.tick(_moment("10:00", 1)), UrgentMessageDecision)

    def test_missing_snapshot_rejected(self, rendered):
        loop = DisplayLoop(lambda: None, rendered.append)
        with pytest.raises(SnapshotMissingError):
            loop.tick(_moment("10:00"))
        assert rendered == []

    def test_slideshow_cursor_follows_decision(self, make_snapshot, payload, rendered):
        slideshow = {**payload["slideshow"], "active": True, "durationPerSlide": 5}
        snapshot = make_snapshot(slideshow=slideshow)
        loop = DisplayLoop(lambda: snapshot, rendered.append)

        start = _moment("20:00")
        assert isinstance(loop.tick(start), SlideshowDecision)
        assert loop.current_slide(start).id == "s1"
        assert loop.current_slide(start + timedelta(seconds=6)).id == "s2"
        assert loop.current_slide(start + timedelta(seconds=11)).id == "s1"

    def test_run_ticks(self, make_snapshot, payload, rendered):
        urgent = {**payload["urgentMessage"], "active": True, "activeUntil": ""}
        snapshot = make_snapshot(urgentMessage=urgent)
        loop = DisplayLoop(lambda: snapshot, rendered.append, tick_seconds=0)
        asyncio.run(loop.run(max_ticks=3))
        assert len(rendered) == 1
        assert isinstance(rendered[0], UrgentMessageDecision)

    def test_slow_provider_does_not_stall_event_loop(self, make_snapshot, rendered):
        snapshot = make_snapshot()

        def slow_provider():
            time.sleep(0.3)
            return snapshot

        loop = DisplayLoop(slow_provider, rendered.append, tick_seconds=0)

        async def scenario():
            gaps = []

            async def heartbeat():
                last = time.monotonic()
                while True:
                    await asyncio.sleep(0.02)
                    now = time.monotonic()
                    gaps.append(now - last)
                    last = now

            beat = asyncio.create_task(heartbeat())
            await loop.run(max_ticks=2)
            beat.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await beat
            return gaps

        gaps = asyncio.run(scenario())
        assert len(gaps) > 5
        assert max(gaps) < 0.2
        assert rendered

    def test_log_renderer_accepts_every_kind(self, make_snapshot, payload):
        slideshow = {**payload["slideshow"], "active": True}
        snapshot = make_snapshot(slideshow=slideshow)
        loop = DisplayLoop(lambda: snapshot)
        loop.tick(_moment("20:00"))
        log_renderer(MealDecision(image_url="/img/x.jpg", label="lunch"))


class TestSlideshowCursor:
    def test_advances_and_wraps(self):
        cursor = SlideshowCursor()
        start = _moment("20:00")
        cursor.start(SlideshowDecision(images=_images(3), duration_per_slide=10), start)
        assert cursor.running
        ids = [cursor.current(start + timedelta(seconds=s)).id for s in (0, 9, 10, 25, 30)]
        assert ids == ["s0", "s0", "s1", "s2", "s0"]

    def test_invalid_duration_uses_default(self):
        cursor = SlideshowCursor()
        start = _moment("20:00")
        cursor.start(SlideshowDecision(images=_images(2), duration_per_slide=0), start)
        assert cursor.current(start + timedelta(seconds=9)).id == "s0"
        assert cursor.current(start + timedelta(seconds=10)).id == "s1"

    def test_no_images(self):
        cursor = SlideshowCursor()
        start = _moment("20:00")
        cursor.start(SlideshowDecision(images=()), start)
        assert cursor.current(start) is None

    def test_stopped_when_other_content_selected(self, make_snapshot, payload, rendered):
        slideshow = {**payload["slideshow"], "active": True}
        snapshot = make_snapshot(slideshow=slideshow)
        loop = DisplayLoop(lambda: snapshot, rendered.append)
        loop.tick(_moment("13:00"))
        assert loop.slideshow.running
        loop.tick(_moment("14:15"))
        assert not loop.slideshow.running
        assert loop.current_slide(_moment("14:15")) is None
