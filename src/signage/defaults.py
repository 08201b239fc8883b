"""Factory defaults for a fresh installation.

Stored data is merged over these values on load, so an admin file that
predates a field still yields a complete snapshot. Kept in the camelCase
export format.
"""

from copy import deepcopy
from typing import Any

DEFAULT_MENU_PLAN_URL = "/assets/Speiseplan.jpg"

_DEFAULT_DATA: dict[str, Any] = {
    "currentTheme": "standard",
    "urgentMessage": {
        "active": False,
        "title": "Wichtiger Hinweis",
        "text": "",
        "imageUrl": "",
        "activeFrom": "",
        "activeUntil": "18:00",
    },
    "meals": [
        {
            "name": "Frühstück",
            "startTime": {"hour": 7, "minute": 15},
            "endTime": {"hour": 8, "minute": 30},
            "imageUrl": "/assets/Frühstück.jpg",
        },
        {
            "name": "Kaffee und Kuchen",
            "startTime": {"hour": 14, "minute": 15},
            "endTime": {"hour": 15, "minute": 30},
            "imageUrl": "/assets/Nachmittagskaffee.jpg",
        },
        {
            "name": "Abendessen",
            "startTime": {"hour": 17, "minute": 15},
            "endTime": {"hour": 18, "minute": 30},
            "imageUrl": "/assets/Abendessen.jpg",
        },
    ],
    "lunchMenu": {
        "startTime": {"hour": 11, "minute": 15},
        "endTime": {"hour": 12, "minute": 30},
        "images": ["", "", "", "", "", "", ""],
    },
    "slideshow": {
        "active": True,
        "activeFrom": "",
        "activeUntil": "22:00",
        "durationPerSlide": 10,
        "images": [
            {
                "id": "menu-plan-static",
                "url": DEFAULT_MENU_PLAN_URL,
                "caption": "Aktueller Speiseplan",
            },
        ],
    },
    "weeklySchedule": {},
    "quotes": [],
    "locations": [],
    "eventTitles": [],
    "menuPlanUrl": DEFAULT_MENU_PLAN_URL,
    "residents": [],
}


def default_data() -> dict[str, Any]:
    """Fresh copy of the factory defaults (safe to mutate)."""
    return deepcopy(_DEFAULT_DATA)
