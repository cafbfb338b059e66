"""
Trading-day classification.

A market day is a weekday that is not in the holiday set. The holiday set is
configuration: dates in years it does not cover are never holidays, and the
first such lookup per year is logged so a stale table does not go unnoticed.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import FrozenSet, Iterable, Optional, Set

import pandas as pd

from core.utils import to_date

from .holidays import DEFAULT_HOLIDAYS

logger = logging.getLogger(__name__)

_WEEKEND = (5, 6)  # Saturday, Sunday


class MarketCalendar:
    """Weekend rule plus a fixed set of holiday dates."""

    def __init__(self, holidays: Optional[Iterable] = None):
        source = DEFAULT_HOLIDAYS if holidays is None else holidays
        self.holidays: FrozenSet[date] = frozenset(to_date(d) for d in source)
        self.covered_years: FrozenSet[int] = frozenset(d.year for d in self.holidays)
        self._warned_years: Set[int] = set()

    def _check_coverage(self, year: int) -> None:
        if year not in self.covered_years and year not in self._warned_years:
            self._warned_years.add(year)
            logger.warning(
                "No holiday data for %d; treating every weekday of that year as a market day.",
                year,
            )

    def is_holiday(self, day) -> bool:
        d = to_date(day)
        self._check_coverage(d.year)
        return d in self.holidays

    def is_weekend(self, day) -> bool:
        return to_date(day).weekday() in _WEEKEND

    def is_market_day(self, day) -> bool:
        d = to_date(day)
        return not self.is_weekend(d) and not self.is_holiday(d)

    def market_days(self, start, end) -> pd.DatetimeIndex:
        """Market days in [start, end], inclusive. Empty when end < start."""
        s, e = to_date(start), to_date(end)
        if e < s:
            return pd.DatetimeIndex([])
        for year in range(s.year, e.year + 1):
            self._check_coverage(year)
        return pd.bdate_range(
            s,
            e,
            freq="C",
            weekmask="Mon Tue Wed Thu Fri",
            holidays=sorted(self.holidays),
        )

    def market_day_count(self, start, end) -> int:
        return len(self.market_days(start, end))


_default_calendar = MarketCalendar()


def is_holiday(day) -> bool:
    return _default_calendar.is_holiday(day)


def is_market_day(day) -> bool:
    return _default_calendar.is_market_day(day)


def market_day_count(start, end) -> int:
    return _default_calendar.market_day_count(start, end)
