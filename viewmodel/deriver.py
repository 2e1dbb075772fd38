"""View-model derivation for the countdown event list."""
import hashlib
import logging
import random
from datetime import date
from typing import Callable, List, Optional

from viewmodel.models import DecoratedEvent, Event

logger = logging.getLogger(__name__)

# Ordered: the first keyword found in the event name wins
EMOJI_KEYWORDS = [
    ('birthday', '\U0001F382'),
    ('school', '\U0001F393'),
    ('vacation', '\U0001F3D6️'),
    ('wedding', '\U0001F48D'),
    ('christmas', '\U0001F384'),
    ('new year', '\U0001F389'),
    ('meeting', '\U0001F4C5'),
    ('exam', '\U0001F4DD'),
    ('trip', '✈️'),
]

FALLBACK_EMOJIS = [
    '\U0001F31F',
    '\U0001F3AF',
    '\U0001F4A1',
    '\U0001F552',
    '\U0001F680',
    '\U0001F388',
]

COLORS = [
    '#007bff',
    '#28a745',
    '#17a2b8',
    '#ffc107',
    '#6610f2',
    '#dc3545',
    '#20c997',
]

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]


def parse_event_date(text: str) -> date:
    """
    Parse a YYYY-MM-DD string into a calendar date.

    The components are taken as a local calendar date directly; no
    time-of-day or time zone is involved, so the day never shifts.

    Args:
        text: Date string (YYYY-MM-DD)

    Returns:
        datetime.date for the given year, month and day
    """
    year, month, day = text.strip().split('-')
    return date(int(year), int(month), int(day))


def format_event_date(value: date) -> str:
    """
    Format a date in long form, e.g. "January 5, 2026".

    Args:
        value: Calendar date

    Returns:
        Long-form English date string
    """
    return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def emoji_for_name(name: str, rng: random.Random) -> str:
    """Return the keyword glyph for a name, or a random fallback glyph."""
    lowered = name.lower()
    for keyword, emoji in EMOJI_KEYWORDS:
        if keyword in lowered:
            return emoji
    return rng.choice(FALLBACK_EMOJIS)


def stable_color(event_id: str) -> str:
    """Pick a palette colour from a SHA256 digest of the event identifier."""
    digest = hashlib.sha256(str(event_id).encode('utf-8')).hexdigest()
    return COLORS[int(digest, 16) % len(COLORS)]


class ViewModelDeriver:
    """Turns stored events into decorated, render-ready events."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        stable_colors: bool = False,
        today: Optional[Callable[[], date]] = None
    ):
        """
        Initialize the deriver.

        Args:
            rng: Randomness source for fallback emojis and colours
            stable_colors: Derive colours from event identifiers instead
                of picking a new one on every derive call
            today: Callable returning the current date, used only when
                the API did not supply daysLeft
        """
        self.rng = rng or random.Random()
        self.stable_colors = stable_colors
        self.today = today or date.today

    def derive(self, events: List[Event]) -> List[DecoratedEvent]:
        """
        Decorate events for display.

        Output has the same length and order as the input.

        Args:
            events: Events as returned by the store client

        Returns:
            List of DecoratedEvent objects
        """
        decorated = [self._decorate(event) for event in events]
        logger.debug(f"Derived {len(decorated)} decorated events")
        return decorated

    def _decorate(self, event: Event) -> DecoratedEvent:
        event_date = parse_event_date(event.date)

        days_left = event.days_left
        if days_left is None:
            days_left = (event_date - self.today()).days

        if self.stable_colors:
            color = stable_color(event.event_id)
        else:
            color = self.rng.choice(COLORS)

        return DecoratedEvent(
            event=event,
            formatted_date=format_event_date(event_date),
            days_left=days_left,
            emoji=emoji_for_name(event.name, self.rng),
            color=color
        )
