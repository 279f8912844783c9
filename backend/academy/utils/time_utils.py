"""Parsing and formatting of wall-clock times used by the schedule grids.

Times travel as ``HH:MM`` strings in requests and may come back from the
database as ``HH:MM:SS`` strings or ``datetime.time`` values. Everything is
normalised to ``(hour, minute)`` pairs or minutes since midnight here, so the
layout engines never see a malformed value.
"""
import re
from datetime import time
from typing import Tuple, Union

from academy.utils.validators import ValidationError

TimeLike = Union[str, time]

_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})(?::(\d{2}))?$')


class InvalidTimeFormat(ValidationError):
    """A time value is not ``HH:MM`` / ``HH:MM:SS`` or is out of range."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid time format: {value!r} (expected HH:MM)")


def parse_time(value: TimeLike) -> Tuple[int, int]:
    """Return ``(hour, minute)`` for a time string or ``datetime.time``."""
    if isinstance(value, time):
        return value.hour, value.minute
    if not isinstance(value, str):
        raise InvalidTimeFormat(value)

    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise InvalidTimeFormat(value)

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if (hour, minute, second) == (24, 0, 0):
        # end-of-day boundary, only meaningful as a range end
        return 24, 0
    if hour > 23 or minute > 59 or second > 59:
        raise InvalidTimeFormat(value)
    return hour, minute


def to_minutes(value: TimeLike) -> int:
    hour, minute = parse_time(value)
    return hour * 60 + minute


def to_time(value: TimeLike) -> time:
    hour, minute = parse_time(value)
    if hour == 24:
        raise InvalidTimeFormat(value)
    return time(hour, minute)


def format_time(value: TimeLike) -> str:
    """Normalise to ``HH:MM``."""
    hour, minute = parse_time(value)
    return f"{hour:02d}:{minute:02d}"


def format_hour(hour: int) -> str:
    """Whole-hour boundary as ``HH:00``."""
    return f"{hour:02d}:00"
