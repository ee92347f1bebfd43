"""Date parsing utilities."""

from datetime import datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

TIMEFRAMES = ("week", "month", "year")


def parse_timestamp(date_str: Optional[str]) -> datetime:
    """Parse a transaction date cell into a naive local datetime.

    Date-only values ("2024-01-15", "01/15/2024") resolve to midnight.
    Values carrying a UTC offset are converted to local time and the
    offset is dropped so they compare against naive cutoffs.

    Args:
        date_str: Date string in any format dateutil understands

    Returns:
        Naive datetime

    Raises:
        ValueError: If date string is missing or cannot be parsed
    """
    if date_str is None or not date_str.strip():
        raise ValueError("Empty date string")

    try:
        dt = date_parser.parse(date_str.strip())
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def timeframe_cutoff(timeframe: str, now: Optional[datetime] = None) -> datetime:
    """Get the inclusive lower bound for an analytics timeframe.

    Week subtracts seven days. Month and year use calendar-aware
    subtraction, so March 31 minus one month is the last day of February.

    Args:
        timeframe: "week", "month" or "year" (Timeframe members compare equal)
        now: Reference instant (defaults to the current local time). An aware
            value is converted to naive local time like parsed dates are

    Returns:
        Cutoff datetime

    Raises:
        ValueError: If timeframe is not recognized
    """
    if now is None:
        now = datetime.now()
    elif now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)

    if timeframe == "week":
        return now - timedelta(days=7)
    elif timeframe == "month":
        return now - relativedelta(months=1)
    elif timeframe == "year":
        return now - relativedelta(years=1)
    else:
        raise ValueError(
            f"Unknown timeframe: '{timeframe}'. Supported timeframes: {', '.join(TIMEFRAMES)}"
        )
