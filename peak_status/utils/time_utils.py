"""
Time utility functions for anchoring tariff rules in the operating timezone.
Calendar days, weekdays and rule start times are all evaluated in one
configured zone (Asia/Bangkok by default), never in the host's local zone.
"""

import re
from datetime import date, datetime, time
from typing import Union

import pytz

_TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def get_operating_timezone(name: str) -> pytz.BaseTzInfo:
    """
    Resolve the operating timezone by its IANA name.

    Raises:
        ValueError: If the name is not a known timezone
    """
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone '{name}'")


def to_operating_time(moment: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """
    Express a datetime as an aware datetime in the operating timezone.

    Timezone-naive values are taken as wall-clock time in the operating zone;
    aware values are converted.
    """
    if moment.tzinfo is None:
        return tz.localize(moment)
    return moment.astimezone(tz)


def at_time_of_day(day: date, time_of_day: time, tz: pytz.BaseTzInfo) -> datetime:
    """Return the aware datetime for a wall-clock time on a calendar day."""
    return tz.localize(datetime.combine(day, time_of_day))


def seconds_until(target: datetime, now: datetime) -> int:
    """Whole seconds from now until target, truncated toward zero."""
    return int((target - now).total_seconds())


def store_weekday(day: date) -> int:
    """
    Weekday number as used by the schedule store.

    Examples:
        - Sunday -> 0
        - Monday -> 1
        - Saturday -> 6
    """
    return day.isoweekday() % 7


def parse_time_of_day(value: Union[str, time]) -> time:
    """
    Parse an "HH:MM" (24h) time of day.

    Raises:
        ValueError: If the value is not a valid time of day
    """
    if isinstance(value, time):
        return value

    match = _TIME_OF_DAY_PATTERN.match(str(value).strip())
    if not match:
        raise ValueError(f"Invalid time of day '{value}', expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time of day '{value}', out of range")

    return time(hour=hour, minute=minute)
