"""Year progress calculation."""

import logging
import math
import re
from datetime import datetime, timedelta
from typing import Optional, Union

from .models import ProgressState

logger = logging.getLogger(__name__)

ONE_DAY_MS = 1000 * 60 * 60 * 24

# Leading numeric prefix, the way parseFloat reads "0.5abc" as 0.5
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))")


def round_half_up(value: float) -> int:
    """Round .5 upwards instead of to the nearest even number."""
    return math.floor(value + 0.5)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def total_days(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(now: datetime) -> int:
    """
    Days elapsed since Jan 0 of the current year, so Jan 1 is day 1.

    Both instants are compared as epoch milliseconds. For local times this
    keeps the one-day slip around daylight saving changes.
    """
    start = datetime(now.year, 1, 1, tzinfo=now.tzinfo) - timedelta(days=1)
    diff_ms = (now.timestamp() - start.timestamp()) * 1000
    return int(diff_ms // ONE_DAY_MS)


def parse_simulate(value: Union[str, float, int, None]) -> float:
    """
    Parse a simulate value and clamp it to [0, 1].

    Anything that does not start with a number counts as 0.
    """
    if value is None:
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _FLOAT_PREFIX.match(value)
        if not match:
            logger.debug(f"Ignoring non-numeric simulate value: {value!r}")
            return 0.0
        number = float(match.group(1).replace("Infinity", "inf"))

    if math.isnan(number) or number == 0:
        return 0.0

    return min(1.0, max(0.0, number))


def resolve_progress(
    simulate: Union[str, float, None] = None,
    now: Optional[datetime] = None,
) -> ProgressState:
    """
    Work out how far through the year we are.

    Args:
        simulate: Optional progress override in [0, 1], for previews
        now: Current time (defaults to local wall-clock time)

    Returns:
        ProgressState for this request
    """
    now = now or datetime.now()
    year_days = total_days(now.year)

    if simulate is not None:
        progress = parse_simulate(simulate)
    else:
        progress = min(1.0, max(0.0, day_of_year(now) / year_days))

    day = round_half_up(progress * year_days)

    return ProgressState(
        year=now.year,
        day_of_year=day,
        total_days=year_days,
        progress=progress,
        days_left=year_days - day,
        percentage=round_half_up(progress * 100),
    )
