"""Pydantic models for the content-source snapshot and the clock.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Snapshot models accept both the camelCase keys written by the admin export
(``firstName``, ``activeUntil``, ``menuPlanUrl``) and snake_case names.
"""

from collections.abc import Mapping
from datetime import date, datetime
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """Frozen base for every snapshot record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class TimePoint(BaseModel):
    """One wall-clock instant, decomposed for the selector.

    Derived fresh every tick and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)
    weekday_index: int = Field(ge=0, le=6)  # 0=Monday .. 6=Sunday
    week_number: int = Field(ge=1)  # ISO calendar week
    calendar_date: date

    @classmethod
    def from_datetime(cls, moment: datetime) -> "TimePoint":
        """Build a TimePoint from a (local) datetime.

        The week number is the ISO calendar week, which is what the admin
        side uses to key the weekly schedule.
        """
        return cls(
            hour=moment.hour,
            minute=moment.minute,
            weekday_index=moment.weekday(),
            week_number=moment.isocalendar()[1],
            calendar_date=moment.date(),
        )

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute


class ClockTime(SnapshotModel):
    """Hour/minute bound of a meal or lunch window."""

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute


class TimeWindow(SnapshotModel):
    """Inclusive same-day window; no wrap past midnight."""

    start: ClockTime
    end: ClockTime


class UrgentMessage(SnapshotModel):
    """Administrator override shown above everything else."""

    active: bool = False
    title: str = ""
    text: str = ""
    image_url: str = ""
    active_from: str = ""  # "HH:mm", stored but not enforced
    active_until: str = ""  # "HH:mm", empty = indefinite


class Meal(SnapshotModel):
    name: str
    start_time: ClockTime
    end_time: ClockTime
    image_url: str = ""

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(start=self.start_time, end=self.end_time)


class LunchMenu(SnapshotModel):
    """Daily rotating lunch image, one entry per weekday (0=Mon .. 6=Sun)."""

    start_time: ClockTime
    end_time: ClockTime
    images: tuple[str, ...] = ("",) * 7

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(start=self.start_time, end=self.end_time)


class Event(SnapshotModel):
    id: str
    time: str  # "HH:mm"; malformed values are skipped by the selector
    title: str = ""
    location: str = ""


class DaySchedule(SnapshotModel):
    day: str  # German weekday name, e.g. "Montag"
    events: tuple[Event, ...] = ()


class Resident(SnapshotModel):
    id: str
    first_name: str
    last_name: str
    birth_date: str  # ISO YYYY-MM-DD
    hide_age: bool = False
    active: bool = True

    @property
    def birthday(self) -> date | None:
        """Parsed birth date, or None if the stored value is malformed."""
        try:
            return date.fromisoformat(self.birth_date[:10])
        except (TypeError, ValueError):
            return None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def age_on(self, day: date) -> int | None:
        """Age being celebrated on ``day`` (year difference only).

        Returns None when the resident asked to hide their age or the birth
        date cannot be parsed.
        """
        born = self.birthday
        if self.hide_age or born is None:
            return None
        return day.year - born.year


class SlideshowImage(SnapshotModel):
    id: str
    url: str
    caption: str = ""


class SlideshowData(SnapshotModel):
    active: bool = False
    active_from: str = ""  # "HH:mm", stored but not enforced
    active_until: str = ""  # "HH:mm", empty = indefinite
    duration_per_slide: int = 10  # seconds
    images: tuple[SlideshowImage, ...] = ()


# Calendar week number -> day schedules; read-only once validated
WeeklySchedule = Mapping[int, tuple[DaySchedule, ...]]


class ContentSourceSnapshot(SnapshotModel):
    """Immutable read of all configuration needed for one selection.

    Produced by the store and handed to the selector per invocation.
    ``current_theme``, ``quotes``, ``locations`` and ``event_titles`` are
    admin-only fields carried through so exports round-trip.
    """

    urgent_message: UrgentMessage = UrgentMessage()
    meals: tuple[Meal, ...] = ()
    lunch_menu: LunchMenu
    slideshow: SlideshowData = SlideshowData()
    weekly_schedule: WeeklySchedule = Field(default_factory=lambda: MappingProxyType({}))
    menu_plan_fallback_url: str = Field(default="", alias="menuPlanUrl")
    residents: tuple[Resident, ...] = ()

    current_theme: str = "standard"
    quotes: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()
    event_titles: tuple[str, ...] = ()

    @field_validator("weekly_schedule", mode="after")
    @classmethod
    def _freeze_schedule(cls, value: WeeklySchedule) -> WeeklySchedule:
        return MappingProxyType(dict(value))

    @field_serializer("weekly_schedule", mode="wrap")
    def _dump_schedule(self, value: WeeklySchedule, handler):
        return handler(dict(value))
