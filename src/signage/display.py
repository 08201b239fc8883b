"""Display loop: drives the selector from a timer and tracks renderer state.

DisplayLoop asks the selector for a fresh decision on every tick and hands
it to the renderer only when it differs from the previous one. The
selector keeps no state; everything stateful (last decision, slideshow
position) lives here on the renderer side.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from src.signage.decisions import ContentDecision, SlideshowDecision
from src.signage.errors import SnapshotMissingError
from src.signage.logging import get_logger
from src.signage.models import ContentSourceSnapshot, SlideshowImage, TimePoint
from src.signage.selector import select_content

logger = get_logger(__name__)

DEFAULT_SLIDE_SECONDS = 10

Renderer = Callable[[ContentDecision], None]
SnapshotProvider = Callable[[], ContentSourceSnapshot | None]


class SlideshowCursor:
    """Which slide is on screen, advanced by elapsed wall-clock seconds.

    Restarts at the first slide whenever the slideshow begins again or its
    image list changes.
    """

    def __init__(self) -> None:
        self._images: tuple[SlideshowImage, ...] = ()
        self._seconds = DEFAULT_SLIDE_SECONDS
        self._started_at: datetime | None = None

    def start(self, decision: SlideshowDecision, at: datetime) -> None:
        self._images = decision.images
        self._seconds = (
            decision.duration_per_slide
            if decision.duration_per_slide > 0
            else DEFAULT_SLIDE_SECONDS
        )
        self._started_at = at

    def stop(self) -> None:
        self._images = ()
        self._started_at = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def current(self, at: datetime) -> SlideshowImage | None:
        """Slide to show at ``at``; None when stopped or there are no images."""
        if self._started_at is None or not self._images:
            return None
        elapsed = max(0.0, (at - self._started_at).total_seconds())
        index = int(elapsed // self._seconds) % len(self._images)
        return self._images[index]


def log_renderer(decision: ContentDecision) -> None:
    """Renderer that only reports what would be shown."""
    summary = decision.model_dump(
        mode="json", exclude={"message", "images", "residents"}
    )
    if isinstance(decision, SlideshowDecision):
        summary["slides"] = len(decision.images)
    logger.info("content_changed", **summary)


class DisplayLoop:
    """Timer-driven content selection for one display.

    Args:
        snapshots: Callable returning the current snapshot (e.g.
            SnapshotStore.current). Called on every tick.
        renderer: Called with each new decision.
        timezone: IANA timezone of the facility's wall clock.
        tick_seconds: Interval between ticks in run().
    """

    def __init__(
        self,
        snapshots: SnapshotProvider,
        renderer: Renderer = log_renderer,
        *,
        timezone: str = "Europe/Berlin",
        tick_seconds: float = 1.0,
    ) -> None:
        self.snapshots = snapshots
        self.renderer = renderer
        self.tz = ZoneInfo(timezone)
        self.tick_seconds = tick_seconds

        self.decision: ContentDecision | None = None
        self.slideshow = SlideshowCursor()

    def tick(self, now: datetime | None = None) -> ContentDecision | None:
        """Run one selection.

        Args:
            now: Wall-clock instant; defaults to the current time.

        Returns:
            The new decision if it changed since the previous tick, else None.

        Raises:
            SnapshotMissingError: If the provider returned no snapshot at all.
        """
        return self.apply(self.snapshots(), now)

    def apply(
        self, snapshot: ContentSourceSnapshot | None, now: datetime | None = None
    ) -> ContentDecision | None:
        """Select against an already loaded snapshot and render on change."""
        now = now or datetime.now(self.tz)
        if snapshot is None:
            raise SnapshotMissingError("No content sources provided")

        decision = select_content(TimePoint.from_datetime(now), snapshot)
        if decision == self.decision:
            return None

        previous = self.decision
        self.decision = decision
        if isinstance(decision, SlideshowDecision):
            self.slideshow.start(decision, now)
        else:
            self.slideshow.stop()

        logger.debug(
            "decision_changed",
            previous=previous.kind if previous is not None else None,
            current=decision.kind,
        )
        self.renderer(decision)
        return decision

    def current_slide(self, now: datetime | None = None) -> SlideshowImage | None:
        return self.slideshow.current(now or datetime.now(self.tz))

    async def run(self, max_ticks: int | None = None) -> None:
        """Tick forever (or ``max_ticks`` times) at ``tick_seconds`` intervals.

        The snapshot provider may block on file or HTTP reads, so it runs in
        a worker thread; selection and rendering stay on the event loop.
        Each tick recomputes from scratch, so a suspended host catches up on
        the next tick without replaying missed ones.
        """
        logger.info("display_loop_started", tick_seconds=self.tick_seconds)
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            snapshot = await asyncio.to_thread(self.snapshots)
            self.apply(snapshot)
            ticks += 1
            if max_ticks is None or ticks < max_ticks:
                await asyncio.sleep(self.tick_seconds)
        logger.info("display_loop_stopped", ticks=ticks)
