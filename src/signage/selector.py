"""Content selector: decides what the display shows right now.

select_content() is a pure function of (time, snapshot). It walks a fixed
priority cascade and returns the first matching decision:

  1. urgent message      (admin override, gated on activeUntil only)
  2. event alert         (15 min before until 10 min after an event)
  3. birthday            (2 minutes out of every 15)
  4. lunch               (weekday image from the lunch menu)
  5. other meals         (first window in list order)
  6. slideshow           (gated on activeUntil only)
  7. menu plan fallback

Nothing here raises for a well-formed snapshot: records that cannot be
interpreted (bad "HH:mm", bad birth date) are skipped and the cascade
falls through to the next rule.
"""

from src.signage.decisions import (
    BirthdayDecision,
    ContentDecision,
    EventAlertDecision,
    MealDecision,
    MenuPlanFallbackDecision,
    SlideshowDecision,
    UrgentMessageDecision,
)
from src.signage.logging import get_logger
from src.signage.models import (
    ContentSourceSnapshot,
    Event,
    LunchMenu,
    Meal,
    Resident,
    TimePoint,
)
from src.signage.schedule import day_events
from src.signage.timeutils import is_time_active, is_time_in_range, parse_hhmm

log = get_logger(__name__)

# Event alert window relative to the event start, in minutes: [start-15, start+10)
EVENT_LEAD_MINUTES = 15
EVENT_TRAIL_MINUTES = 10

# Birthday greeting runs for the first 2 minutes of every 15-minute block
BIRTHDAY_PERIOD_MINUTES = 15
BIRTHDAY_SLOT_MINUTES = 2

LUNCH_LABEL = "lunch"


def select_content(time: TimePoint, sources: ContentSourceSnapshot) -> ContentDecision:
    """Select the single piece of content to display.

    Args:
        time: Current wall-clock time point.
        sources: Read-only snapshot of the admin configuration.

    Returns:
        Exactly one decision; identical inputs always give identical output.
    """
    now = time.minutes_since_midnight

    urgent = sources.urgent_message
    if urgent.active and is_time_active(urgent.active_until, now):
        return UrgentMessageDecision(message=urgent)

    alert = find_event_alert(time, sources)
    if alert is not None:
        return alert

    celebrants = birthday_residents(time, sources.residents)
    if celebrants and is_birthday_slot(now):
        return BirthdayDecision(residents=tuple(celebrants))

    if is_time_in_range(sources.lunch_menu.window, now):
        return MealDecision(
            image_url=lunch_image(sources.lunch_menu, time.weekday_index)
            or sources.menu_plan_fallback_url,
            label=LUNCH_LABEL,
        )

    meal = current_meal(sources.meals, now)
    if meal is not None:
        return MealDecision(image_url=meal.image_url, label=meal.name)

    slideshow = sources.slideshow
    if slideshow.active and is_time_active(slideshow.active_until, now):
        return SlideshowDecision(
            images=slideshow.images,
            duration_per_slide=slideshow.duration_per_slide,
        )

    return MenuPlanFallbackDecision(image_url=sources.menu_plan_fallback_url)


def find_event_alert(
    time: TimePoint, sources: ContentSourceSnapshot
) -> EventAlertDecision | None:
    """First of today's events (stored order) whose alert window contains now."""
    now = time.minutes_since_midnight
    events = day_events(sources.weekly_schedule, time.week_number, time.weekday_index)
    for event in events:
        start = parse_hhmm(event.time)
        if start is None:
            log.debug("event_time_malformed", event_id=event.id, time=event.time)
            continue
        if start - EVENT_LEAD_MINUTES <= now < start + EVENT_TRAIL_MINUTES:
            return _event_alert(event, start - now)
    return None


def _event_alert(event: Event, minutes_until_start: int) -> EventAlertDecision:
    return EventAlertDecision(
        event_id=event.id,
        title=event.title,
        location=event.location,
        time=event.time,
        minutes_until_start=minutes_until_start,
    )


def birthday_residents(
    time: TimePoint, residents: tuple[Resident, ...]
) -> list[Resident]:
    """Active residents whose birth month and day match today (year ignored)."""
    today = time.calendar_date
    celebrants = []
    for resident in residents:
        if not resident.active:
            continue
        born = resident.birthday
        if born is None:
            log.debug("birth_date_malformed", resident_id=resident.id)
            continue
        if (born.month, born.day) == (today.month, today.day):
            celebrants.append(resident)
    return celebrants


def is_birthday_slot(total_minutes: int) -> bool:
    """True for minutes 0-1, 15-16, 30-31 and 45-46 of every hour."""
    return total_minutes % BIRTHDAY_PERIOD_MINUTES < BIRTHDAY_SLOT_MINUTES


def lunch_image(lunch_menu: LunchMenu, weekday_index: int) -> str:
    """Image for the weekday, or "" when the slot is missing or empty."""
    if 0 <= weekday_index < len(lunch_menu.images):
        return lunch_menu.images[weekday_index] or ""
    return ""


def current_meal(meals: tuple[Meal, ...], current_minutes: int) -> Meal | None:
    """First meal in list order whose window contains now.

    Overlapping windows are resolved by list order without a diagnostic.
    """
    for meal in meals:
        if is_time_in_range(meal.window, current_minutes):
            return meal
    return None
