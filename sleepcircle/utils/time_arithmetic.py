"""
Wall-clock arithmetic on HH:MM strings.

Bedtimes are compared on a "reference evening" scale where anything before
noon counts as having rolled past midnight, so 00:45 sorts after 23:30.
Wake times are compared on the plain minutes-since-midnight scale.
Absent times map to the ABSENT_TIME sentinel.
"""

import re
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from sleepcircle.core.exceptions import InvalidTimeError, InvalidDateError
from sleepcircle.utils.constants import ABSENT_TIME, ROLLOVER_HOUR, MAX_ELAPSED_HOURS, CLOCK_TIME_FORMAT, DATE_FORMAT

_CLOCK_TIME_RE = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')


def parse_clock_time(value: str) -> Tuple[int, int]:
    """
    Parse a zero-padded 24-hour HH:MM string.

    Args:
        value: Clock time such as "23:30"

    Returns:
        tuple: (hour, minute)

    Raises:
        InvalidTimeError: if the value is not a valid HH:MM string
    """
    if not isinstance(value, str):
        raise InvalidTimeError(value)
    match = _CLOCK_TIME_RE.match(value)
    if match is None:
        raise InvalidTimeError(value)
    return int(match.group(1)), int(match.group(2))


def validate_clock_time(value: Optional[str]) -> Optional[str]:
    """Return the value unchanged if it is None or a valid HH:MM string"""
    if value is None:
        return None
    parse_clock_time(value)
    return value


def validate_date(value: str) -> str:
    """Return the value unchanged if it is a valid YYYY-MM-DD string"""
    try:
        datetime.strptime(value, DATE_FORMAT)
    except (TypeError, ValueError):
        raise InvalidDateError(value)
    # strptime accepts unpadded fields
    if len(value) != 10:
        raise InvalidDateError(value)
    return value


def to_minutes_since_reference_evening(value: Optional[str]) -> int:
    """Minutes on the bedtime scale, later bedtime = larger number"""
    if not value:
        return ABSENT_TIME
    hour, minute = parse_clock_time(value)
    if hour < ROLLOVER_HOUR:
        return (hour + 24) * 60 + minute
    return hour * 60 + minute


def to_minutes_since_midnight(value: Optional[str]) -> int:
    """Minutes since midnight with no rollover, for wake-time comparisons"""
    if not value:
        return ABSENT_TIME
    hour, minute = parse_clock_time(value)
    return hour * 60 + minute


def elapsed_hours(start: str, end: str) -> float:
    """
    Hours elapsed between two clock times, crossing midnight when end < start.

    Args:
        start: Start clock time (HH:MM)
        end: End clock time (HH:MM)

    Returns:
        float: Elapsed hours rounded half-up to one decimal place, capped at
        23.9 so that an interval just short of a day never reads as 24.0
    """
    start_h, start_m = parse_clock_time(start)
    end_h, end_m = parse_clock_time(end)

    hours = (end_h + end_m / 60) - (start_h + start_m / 60)
    if hours < 0:
        hours += 24  # crossed midnight

    rounded = float(Decimal(hours).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))
    return min(rounded, MAX_ELAPSED_HOURS)


def format_clock_time(moment: datetime) -> str:
    """Format a datetime as HH:MM"""
    return moment.strftime(CLOCK_TIME_FORMAT)


def format_date(moment: datetime) -> str:
    """Format a datetime or date as YYYY-MM-DD"""
    return moment.strftime(DATE_FORMAT)
