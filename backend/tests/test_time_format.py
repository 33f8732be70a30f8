# tests/test_time_format.py
import re
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from app.services.time_format import (
    BabelTimeFormatter,
    FormatOptions,
    ManualTimeFormatter,
    format_arrival,
)

INSTANT = datetime(2024, 7, 15, 21, 5, 30, tzinfo=timezone.utc)


def test_babel_formatter_in_requested_zone():
    formatter = BabelTimeFormatter("America/New_York", "en_US")
    assert formatter.format_24h(INSTANT) == "17:05"
    assert formatter.format_12h(INSTANT) == "05:05 PM"


def test_babel_formatter_accepts_hyphenated_locale():
    formatter = BabelTimeFormatter("UTC", "en-GB")
    assert formatter.format_24h(INSTANT) == "21:05"


def test_babel_formatter_rejects_unknown_zone():
    with pytest.raises(Exception):
        BabelTimeFormatter("Mars/Olympus_Mons", "en_US")


@pytest.mark.parametrize(
    "hour, minute, expected_24, expected_12",
    [
        (0, 5, "00:05", "12:05 AM"),
        (9, 0, "09:00", "09:00 AM"),
        (12, 30, "12:30", "12:30 PM"),
        (23, 59, "23:59", "11:59 PM"),
    ],
)
def test_manual_formatter(hour, minute, expected_24, expected_12):
    instant = datetime(2024, 1, 1, hour, minute, tzinfo=timezone.utc)
    formatter = ManualTimeFormatter(timezone.utc)
    assert formatter.format_24h(instant) == expected_24
    assert formatter.format_12h(instant) == expected_12


def test_manual_formatter_honours_zone():
    formatter = ManualTimeFormatter(ZoneInfo("Asia/Kolkata"))
    assert formatter.format_24h(INSTANT) == "02:35"
    assert formatter.format_12h(INSTANT) == "02:35 AM"


def test_format_arrival_defaults_to_24_hour():
    arrival = format_arrival(INSTANT, FormatOptions())
    assert arrival.text == arrival.text_24h == "21:05"
    assert arrival.text_12h == "09:05 PM"
    assert arrival.timestamp_ms == 1721077530000
    assert arrival.iso8601 == "2024-07-15T21:05:30.000Z"


def test_format_arrival_twelve_hour_text():
    arrival = format_arrival(INSTANT, FormatOptions(use_12_hour=True))
    assert arrival.text == "09:05 PM"


def test_unknown_locale_falls_back_to_manual_in_requested_zone():
    arrival = format_arrival(INSTANT, FormatOptions(time_zone="Asia/Tokyo", locale="zz"))
    assert arrival.text_24h == "06:05"
    assert arrival.text_12h == "06:05 AM"


def test_unknown_zone_never_raises():
    arrival = format_arrival(INSTANT, FormatOptions(time_zone="Nowhere/Special", use_12_hour=True))
    assert re.fullmatch(r"\d{2}:\d{2}", arrival.text_24h)
    assert re.fullmatch(r"\d{2}:\d{2} (AM|PM)", arrival.text_12h)
    assert arrival.text == arrival.text_12h
    assert arrival.timestamp_ms == 1721077530000


def test_twelve_hour_text_always_has_day_period():
    arrival = format_arrival(INSTANT, FormatOptions(time_zone="Europe/Berlin", locale="de_DE"))
    assert arrival.text_24h == "23:05"
    assert re.search(r"[^\d\s:]", arrival.text_12h)


def test_zone_directory_name_never_raises():
    arrival = format_arrival(INSTANT, FormatOptions(time_zone="America"))
    assert re.fullmatch(r"\d{2}:\d{2}", arrival.text_24h)
    assert arrival.timestamp_ms == 1721077530000


def test_manual_formatter_at_datetime_minimum_uses_utc_fields():
    instant = datetime(1, 1, 1, 0, 30, tzinfo=timezone.utc)
    formatter = ManualTimeFormatter(ZoneInfo("America/New_York"))
    assert formatter.format_24h(instant) == "00:30"
    assert formatter.format_12h(instant) == "12:30 AM"
