"""
Arrival-time rendering: 24-hour and 12-hour wall-clock text for an instant.

Two formatters share one interface. BabelTimeFormatter honours the caller's
time zone and locale; ManualTimeFormatter builds the text from the hour and
minute fields and cannot fail. format_arrival() tries the first and drops
to the second on any error, so a bad timeZone or locale never fails a
request.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from babel import Locale
from babel.dates import format_time

from app.core.logger import logger
from app.schemas.route import ArrivalTime

# Anything besides digits, separators and whitespace counts as a day period
_DAY_PERIOD_PATTERN = re.compile(r"[^\d\s:.,\u200e\u200f]")


@dataclass(frozen=True)
class FormatOptions:
    time_zone: Optional[str] = None
    locale: Optional[str] = None
    use_12_hour: bool = False


def day_period(hour: int) -> str:
    return "AM" if hour < 12 else "PM"


class LocalTimeFormatter(ABC):
    """Renders an aware datetime as local wall-clock text."""

    @abstractmethod
    def format_24h(self, instant: datetime) -> str:
        """Zero-padded HH:MM."""

    @abstractmethod
    def format_12h(self, instant: datetime) -> str:
        """Zero-padded HH:MM followed by a day-period marker."""


class BabelTimeFormatter(LocalTimeFormatter):
    """Locale-aware formatter backed by zoneinfo and Babel's CLDR data."""

    def __init__(self, time_zone: str, locale: str):
        # Both lookups raise on unknown identifiers
        self.tz = ZoneInfo(time_zone)
        self.locale = Locale.parse(locale.replace("-", "_"))

    def format_24h(self, instant: datetime) -> str:
        return format_time(instant, "HH:mm", tzinfo=self.tz, locale=self.locale)

    def format_12h(self, instant: datetime) -> str:
        text = format_time(instant, "hh:mm a", tzinfo=self.tz, locale=self.locale)
        if not _DAY_PERIOD_PATTERN.search(text):
            hour = instant.astimezone(self.tz).hour
            text = f"{text.strip()} {day_period(hour)}"
        return text


class ManualTimeFormatter(LocalTimeFormatter):
    """Plain arithmetic on the wall-clock fields; server local time when tz is None."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    def _local(self, instant: datetime) -> datetime:
        try:
            return instant.astimezone(self.tz)
        except (OverflowError, OSError, ValueError):
            # instants at the edge of the datetime range cannot shift zones
            return instant.astimezone(timezone.utc)

    def format_24h(self, instant: datetime) -> str:
        local = self._local(instant)
        return f"{local.hour:02d}:{local.minute:02d}"

    def format_12h(self, instant: datetime) -> str:
        local = self._local(instant)
        hour12 = local.hour % 12 or 12
        return f"{hour12:02d}:{local.minute:02d} {day_period(local.hour)}"


def _resolve_zone(name: str) -> Optional[tzinfo]:
    try:
        return ZoneInfo(name)
    except (ValueError, KeyError, OSError):
        # OSError covers zone directories such as "America"
        return None


def format_arrival(
    instant: datetime,
    options: FormatOptions,
    default_time_zone: str = "UTC",
    default_locale: str = "en_US",
) -> ArrivalTime:
    """
    Build the arrival_time object for an aware instant.

    `text` mirrors `text_12h` when options.use_12_hour is set, else `text_24h`.
    """
    time_zone = options.time_zone or default_time_zone
    locale = options.locale or default_locale

    try:
        formatter: LocalTimeFormatter = BabelTimeFormatter(time_zone, locale)
        text_24h = formatter.format_24h(instant)
        text_12h = formatter.format_12h(instant)
    except Exception as e:
        logger.warning(
            "Locale formatting failed (timeZone={}, locale={}): {}; using manual clock",
            time_zone,
            locale,
            e,
        )
        formatter = ManualTimeFormatter(_resolve_zone(time_zone))
        text_24h = formatter.format_24h(instant)
        text_12h = formatter.format_12h(instant)

    utc_instant = instant.astimezone(timezone.utc)
    return ArrivalTime(
        text=text_12h if options.use_12_hour else text_24h,
        text_24h=text_24h,
        text_12h=text_12h,
        timestamp_ms=round(utc_instant.timestamp() * 1000),
        iso8601=utc_instant.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )
