"""Locale aware formatting of dates, times, phone numbers and relative times."""

import datetime as dt
import re
from typing import Any, Mapping, Optional, Union

from g11n.configuration import settings
from g11n.exceptions import MissingPatternError
from g11n.registry import G11n

TimeValue = Union[dt.datetime, dt.date, dt.time, int, float, str]

# Seconds per unit, largest first, with the relativeTime message ids
RELATIVE_UNITS = (
    (31536000, "year", "years"),
    (2592000, "month", "months"),
    (604800, "week", "weeks"),
    (86400, "day", "days"),
    (3600, "hour", "hours"),
    (60, "minute", "minutes"),
    (1, "second", "seconds"),
)


class Format:
    """Formats values with the active locale's format patterns.

    Attributes:
        g11n: Registry whose active locale supplies the patterns.
    """

    def __init__(self, g11n: G11n):
        self.g11n = g11n

    def get(self, key: str, default: Any = None) -> Any:
        """Format pattern from the active locale, else the default.

        Raises:
            MissingPatternError: If neither the locale nor the caller supply one.
        """
        locale = self.g11n.current() or self.g11n.get_fallback()
        pattern = locale.get_format_patterns(key) if locale is not None else None
        pattern = pattern or default

        if not pattern:
            raise MissingPatternError(f"Format pattern {key} does not exist")

        return pattern

    def date(self, value: TimeValue, fmt: str = "%Y-%m-%d") -> str:
        return to_datetime(value).strftime(self.get("date", fmt))

    def time(self, value: TimeValue, fmt: str = "%H:%M:%S") -> str:
        return to_datetime(value).strftime(self.get("time", fmt))

    def datetime(self, value: TimeValue, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
        return to_datetime(value).strftime(self.get("datetime", fmt))

    def phone(self, value: Union[int, str], fmt: Any = None) -> str:
        """Format a phone number.

        The pattern may be a single mask or a mapping of digit count to mask.
        Numbers with no matching mask are returned as bare digits.
        """
        digits = re.sub(r"\D", "", str(value))
        pattern = self.get("phone", fmt)

        if isinstance(pattern, Mapping):
            pattern = pattern.get(len(digits)) or pattern.get(str(len(digits)))
            if pattern is None:
                return digits

        return mask(digits, pattern)

    def ssn(self, value: Union[int, str], fmt: Optional[str] = None) -> str:
        return mask(re.sub(r"\D", "", str(value)), self.get("ssn", fmt))

    def relative_time(
        self, value: TimeValue, now: Optional[dt.datetime] = None
    ) -> str:
        """Describe a time relative to now ("3 days ago", "in 2 hours").

        Uses the ``format`` catalog of the default domain.
        """
        now = now or dt.datetime.now()
        diff = int((now - to_datetime(value)).total_seconds())
        catalog = f"{self._domain()}.format.relativeTime"

        if diff == 0:
            return self.g11n.get_message(f"{catalog}.now")

        seconds = abs(diff)
        text = ""
        for size, singular, plural in RELATIVE_UNITS:
            if seconds >= size:
                count = seconds // size
                unit = singular if count == 1 else plural
                text = self.g11n.get_message(f"{catalog}.{unit}") % count
                break

        direction = "ago" if diff > 0 else "in"
        return self.g11n.get_message(f"{catalog}.{direction}") % text

    def _domain(self) -> str:
        translator = self.g11n.get_translator()
        if translator is None:
            return settings.g11n.DEFAULT_DOMAIN
        return translator.default_domain


def mask(digits: str, pattern: str) -> str:
    """Replace each ``#`` in the pattern with the next digit."""
    chars = iter(digits)
    return "".join(next(chars, "") if char == "#" else char for char in pattern)


def to_datetime(value: TimeValue) -> dt.datetime:
    """Coerce timestamps, ISO strings, dates and times to a datetime.

    Raises:
        ValueError: If a string is not ISO 8601.
    """
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time())
    if isinstance(value, dt.time):
        return dt.datetime.combine(dt.date.today(), value)
    if isinstance(value, (int, float)):
        return dt.datetime.fromtimestamp(value)
    return dt.datetime.fromisoformat(value)
