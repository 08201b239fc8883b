"""Weekly schedule lookups.

The weekly schedule is keyed by ISO calendar week; each week holds one
DaySchedule per German weekday name. These helpers resolve "today's events"
for the selector and build the read-only previews shown beside the main
content (week overview, today/tomorrow cards).
"""

from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict

from src.signage.models import DaySchedule, Event, TimePoint, WeeklySchedule
from src.signage.timeutils import parse_hhmm

# Weekday index (0=Monday) -> name used as DaySchedule.day
WEEKDAY_NAMES: tuple[str, ...] = (
    "Montag",
    "Dienstag",
    "Mittwoch",
    "Donnerstag",
    "Freitag",
    "Samstag",
    "Sonntag",
)

DEFAULT_PREVIEW_LIMIT = 2


class DayOverview(BaseModel):
    """One row of the week overview panel."""

    model_config = ConfigDict(frozen=True)

    day: str
    calendar_date: date
    is_today: bool
    events: tuple[Event, ...]  # time-sorted, truncated to the preview limit
    highlight: Event | None
    total_events: int

    @property
    def short_label(self) -> str:
        """Two-letter day label, e.g. "MO"."""
        return self.day[:2].upper()


def weekday_name(index: int) -> str:
    return WEEKDAY_NAMES[index % 7]


def week_days(
    weekly_schedule: WeeklySchedule, week_number: int
) -> tuple[DaySchedule, ...]:
    """Day schedules for a calendar week; a missing week is an empty week."""
    return tuple(weekly_schedule.get(week_number, ()))


def day_events(
    weekly_schedule: WeeklySchedule, week_number: int, weekday_index: int
) -> tuple[Event, ...]:
    """Events of one day in stored order (not time-sorted)."""
    name = weekday_name(weekday_index)
    for day in week_days(weekly_schedule, week_number):
        if day.day == name:
            return day.events
    return ()


def _event_sort_key(event: Event) -> tuple[bool, int]:
    minutes = parse_hhmm(event.time)
    return minutes is None, minutes or 0


def sort_events(events: tuple[Event, ...] | list[Event]) -> list[Event]:
    """Sort by start time; unparseable times go last in stored order."""
    return sorted(events, key=_event_sort_key)


def upcoming_event_for_day(
    events: tuple[Event, ...] | list[Event],
    *,
    is_today: bool,
    current_minutes: int = 0,
) -> Event | None:
    """Pick the event a schedule preview should highlight for one day.

    Today: the earliest event starting at or after now, or the day's last
    event once everything has started. Other days: the earliest event.
    Events whose time cannot be parsed never count as upcoming.
    """
    ordered = sort_events(events)
    if not ordered:
        return None
    if not is_today:
        return ordered[0]

    timed = [e for e in ordered if parse_hhmm(e.time) is not None]
    for event in timed:
        if parse_hhmm(event.time) >= current_minutes:
            return event
    return (timed or ordered)[-1]


def week_overview(
    time: TimePoint,
    weekly_schedule: WeeklySchedule,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> list[DayOverview]:
    """Build the Monday..Sunday overview for the current calendar week.

    Args:
        time: Current time point; its week and weekday select "today".
        weekly_schedule: Schedule keyed by calendar week.
        preview_limit: Maximum events listed per day.

    Returns:
        Seven DayOverview rows, Monday first.
    """
    monday = time.calendar_date - timedelta(days=time.weekday_index)
    rows: list[DayOverview] = []
    for index, name in enumerate(WEEKDAY_NAMES):
        events = day_events(weekly_schedule, time.week_number, index)
        is_today = index == time.weekday_index
        ordered = sort_events(events)
        rows.append(
            DayOverview(
                day=name,
                calendar_date=monday + timedelta(days=index),
                is_today=is_today,
                events=tuple(ordered[:preview_limit]),
                highlight=upcoming_event_for_day(
                    events,
                    is_today=is_today,
                    current_minutes=time.minutes_since_midnight,
                ),
                total_events=len(events),
            )
        )
    return rows


def today_and_tomorrow(
    time: TimePoint, weekly_schedule: WeeklySchedule
) -> tuple[Event | None, Event | None]:
    """Highlighted events for the "today" and "tomorrow" cards.

    Tomorrow is resolved from the next calendar date, so on Sunday it looks
    at Monday of the following calendar week.
    """
    today = upcoming_event_for_day(
        day_events(weekly_schedule, time.week_number, time.weekday_index),
        is_today=True,
        current_minutes=time.minutes_since_midnight,
    )

    next_day = time.calendar_date + timedelta(days=1)
    tomorrow = upcoming_event_for_day(
        day_events(weekly_schedule, next_day.isocalendar()[1], next_day.weekday()),
        is_today=False,
    )
    return today, tomorrow
