"""
Reporting period utilities.

Monthly compliance reports are keyed by (facility, year, month). Daily values
inside a report are addressed by day-of-month (1-based) and stored in
31-slot series, so every month shares the same slot layout.
"""

from datetime import date
from typing import List, Tuple
import calendar

MAX_DAYS_IN_MONTH = 31


def validate_period(year: int, month: int) -> None:
    """
    Reject a month outside 1-12 or a non-positive year.

    Raises:
        ValueError: If the period is invalid
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    if year < 1:
        raise ValueError(f"Year must be positive, got {year}")


def is_leap_year(year: int) -> bool:
    """
    Check if a year is a leap year.

    Args:
        year: Year to check

    Returns:
        True if leap year, False otherwise
    """
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    """
    Get number of days in a given month and year.

    Args:
        year: Year
        month: Month (1-12)

    Returns:
        Number of days in the month (28-31)
    """
    return calendar.monthrange(year, month)[1]


def day_index(day: int) -> int:
    """
    Convert a 1-based day of month into a 0-based series slot.

    Raises:
        ValueError: If day is outside 1-31
    """
    if not 1 <= day <= MAX_DAYS_IN_MONTH:
        raise ValueError(f"Day must be between 1 and {MAX_DAYS_IN_MONTH}, got {day}")
    return day - 1


def month_date_range(year: int, month: int) -> Tuple[date, date]:
    """
    Get first and last calendar dates of a month.

    Example:
        >>> month_date_range(2024, 2)
        (date(2024, 2, 1), date(2024, 2, 29))
    """
    return (date(year, month, 1), date(year, month, days_in_month(year, month)))


def preceding_periods(year: int, month: int, count: int = 11) -> List[Tuple[int, int]]:
    """
    List the (year, month) periods immediately before a month.

    Most recent first, crossing year boundaries.

    Example:
        >>> preceding_periods(2024, 2, count=3)
        [(2024, 1), (2023, 12), (2023, 11)]
    """
    periods = []
    y, m = year, month
    for _ in range(count):
        m -= 1
        if m == 0:
            y -= 1
            m = 12
        periods.append((y, m))
    return periods
