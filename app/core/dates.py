"""Calendar-month helpers shared by the simulator and the forecaster.

Every series in the application is keyed by the first day of a month. The
helpers here do the month arithmetic on ``(year, month)`` pairs so the day of
month in an input date can never push a step into the wrong month.
"""
from datetime import date
from typing import Iterator


def month_start(value: date) -> date:
    """Truncates a date to the first day of its month."""
    return value.replace(day=1)


def add_months(value: date, months: int) -> date:
    """Shifts a date by a number of months, returning the first of that month.

    Args:
        value (date): Any date inside the starting month.
        months (int): Number of months to move; may be negative.

    Returns:
        date: The first day of the resulting month.
    """
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_key(value: date) -> str:
    """Renders the ISO ``YYYY-MM-DD`` key of the month containing ``value``."""
    return month_start(value).isoformat()


def year_end(year: int) -> date:
    return date(year, 12, 31)


class MonthSequence:
    """Lazy, restartable sequence of first-of-month dates between two bounds.

    The end bound is inclusive: the month containing ``end`` is always part of
    the sequence when ``start <= end``. An inverted range (``start > end``) is
    simply empty.

    Example:
        >>> list(MonthSequence(date(2023, 11, 15), date(2024, 1, 2)))
        [datetime.date(2023, 11, 1), datetime.date(2023, 12, 1), datetime.date(2024, 1, 1)]
    """

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end

    def __len__(self) -> int:
        if self.start > self.end:
            return 0
        return (self.end.year - self.start.year) * 12 + (self.end.month - self.start.month) + 1

    def __iter__(self) -> Iterator[date]:
        for offset in range(len(self)):
            yield add_months(self.start, offset)

    def __repr__(self) -> str:
        return f"MonthSequence({self.start.isoformat()}, {self.end.isoformat()})"
