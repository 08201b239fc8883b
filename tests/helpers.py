"""Test helpers: a baseline admin payload and time-point builders.

The baseline snapshot has no urgent message, no events, no residents and
an inactive slideshow, so each test switches on exactly what it exercises.
Reference week: Monday 2026-10-19 .. Sunday 2026-10-25 (ISO week 43).
"""

from datetime import date, datetime, time
from typing import Any

from src.signage.models import TimePoint

MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
SUNDAY = date(2026, 10, 25)
WEEK = TUESDAY.isocalendar()[1]

FALLBACK_URL = "/assets/plan.jpg"
TUESDAY_LUNCH = "/img/lunch-tue.jpg"


def at(hh_mm: str, day: date = TUESDAY) -> TimePoint:
    """TimePoint for "HH:MM" on the given day."""
    hour, minute = (int(p) for p in hh_mm.split(":"))
    return TimePoint.from_datetime(datetime.combine(day, time(hour, minute)))


def base_payload() -> dict[str, Any]:
    return {
        "urgentMessage": {
            "active": False,
            "title": "Hinweis",
            "text": "Gymnastik fällt aus",
            "imageUrl": "/img/urgent.jpg",
            "activeFrom": "",
            "activeUntil": "",
        },
        "meals": [
            {
                "name": "Frühstück",
                "startTime": {"hour": 7, "minute": 15},
                "endTime": {"hour": 8, "minute": 30},
                "imageUrl": "/img/breakfast.jpg",
            },
            {
                "name": "Kaffee und Kuchen",
                "startTime": {"hour": 14, "minute": 15},
                "endTime": {"hour": 15, "minute": 30},
                "imageUrl": "/img/coffee.jpg",
            },
            {
                "name": "Abendessen",
                "startTime": {"hour": 17, "minute": 15},
                "endTime": {"hour": 18, "minute": 30},
                "imageUrl": "/img/dinner.jpg",
            },
        ],
        "lunchMenu": {
            "startTime": {"hour": 11, "minute": 15},
            "endTime": {"hour": 12, "minute": 30},
            "images": ["/img/lunch-mon.jpg", TUESDAY_LUNCH, "", "", "", "", ""],
        },
        "slideshow": {
            "active": False,
            "activeFrom": "",
            "activeUntil": "",
            "durationPerSlide": 10,
            "images": [
                {"id": "s1", "url": "/img/s1.jpg", "caption": "Sommerfest"},
                {"id": "s2", "url": "/img/s2.jpg", "caption": ""},
            ],
        },
        "weeklySchedule": {},
        "menuPlanUrl": FALLBACK_URL,
        "residents": [],
    }


def day_schedule(day: str, *events: tuple[str, str]) -> dict[str, Any]:
    """DaySchedule payload from (id, "HH:mm") pairs."""
    return {
        "day": day,
        "events": [
            {"id": eid, "time": t, "title": f"Event {eid}", "location": "Saal"}
            for eid, t in events
        ],
    }


