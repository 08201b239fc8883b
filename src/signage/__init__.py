"""Content selection engine for the care-facility signage display.

Decides which single piece of content (urgent message, event alert,
birthday greeting, meal image, slideshow, menu plan) the display shows at
a given moment, from the wall-clock time and an admin data snapshot.
"""

from src.signage.decisions import ContentDecision
from src.signage.models import ContentSourceSnapshot, TimePoint
from src.signage.selector import select_content

__all__ = [
    "select_content",
    "ContentDecision",
    "ContentSourceSnapshot",
    "TimePoint",
]
