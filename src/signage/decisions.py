"""Content decisions: the single thing the display shows at a moment.

A decision is a tagged variant discriminated by ``kind``. Decisions are
frozen so the display loop can compare consecutive decisions with ``==``.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from src.signage.models import Resident, SlideshowImage, UrgentMessage


class _Decision(BaseModel):
    model_config = ConfigDict(frozen=True)


class UrgentMessageDecision(_Decision):
    kind: Literal["urgent_message"] = "urgent_message"
    message: UrgentMessage


class EventAlertDecision(_Decision):
    kind: Literal["event_alert"] = "event_alert"
    event_id: str
    title: str
    location: str
    time: str
    minutes_until_start: int  # negative once the event has started


class BirthdayDecision(_Decision):
    kind: Literal["birthday"] = "birthday"
    residents: tuple[Resident, ...] = Field(min_length=1)


class MealDecision(_Decision):
    kind: Literal["meal"] = "meal"
    image_url: str
    label: str  # meal name, or "lunch" for the daily lunch menu


class SlideshowDecision(_Decision):
    kind: Literal["slideshow"] = "slideshow"
    images: tuple[SlideshowImage, ...]
    duration_per_slide: int = 10


class MenuPlanFallbackDecision(_Decision):
    kind: Literal["menu_plan_fallback"] = "menu_plan_fallback"
    image_url: str


ContentDecision = Annotated[
    Union[
        UrgentMessageDecision,
        EventAlertDecision,
        BirthdayDecision,
        MealDecision,
        SlideshowDecision,
        MenuPlanFallbackDecision,
    ],
    Field(discriminator="kind"),
]

