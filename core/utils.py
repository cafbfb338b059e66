from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterator, Tuple

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta


def to_date(value) -> date:
    """Normalize a date-like value (str, datetime, Timestamp, date) to a plain date."""
    if isinstance(value, date) and not hasattr(value, "hour"):
        return value
    return pd.Timestamp(value).date()


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a calendar month. `month` is zero-based (0 = January)."""
    if not 0 <= month <= 11:
        raise ValueError(f"Zero-based month must be in 0..11, got {month}")
    first = date(year, month + 1, 1)
    last = date(year, month + 1, calendar.monthrange(year, month + 1)[1])
    return first, last


def add_months(year: int, month: int, n: int) -> Tuple[int, int]:
    """Shift a (year, zero-based month) pair by n months."""
    shifted = date(year, month + 1, 1) + relativedelta(months=n)
    return shifted.year, shifted.month - 1


def iter_days(start: date, end: date) -> Iterator[date]:
    """Inclusive day-by-day walk from start to end."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def leading_blank_cells(first_day: date) -> int:
    """Blank cells before the 1st in a Sunday-first calendar grid."""
    return (first_day.weekday() + 1) % 7


def round_half_up(x):
    """Round to whole units, halves toward +inf (vectorized)."""
    rounded = np.floor(np.asarray(x, dtype=float) + 0.5)
    if rounded.ndim == 0:
        return float(rounded)
    return rounded
