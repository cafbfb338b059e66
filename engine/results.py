"""
Presentation-ready projection records.

These are output only; nothing here is ever fed back into an engine.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from core.schema import CALENDAR_COLUMNS, YEARLY_COLUMNS


@dataclass(frozen=True)
class CalendarCell:
    """One cell of a Sunday-first month grid. Leading blanks have empty=True."""
    empty: bool = False
    date: Optional[dt.date] = None
    day: Optional[int] = None
    is_weekend: bool = False
    is_holiday: bool = False
    is_today: bool = False
    is_past: bool = False
    is_market: bool = False
    day_cost: float = 0.0
    cumulative_cost: float = 0.0
    total_accounts: int = 0
    total_payout: float = 0.0
    payouts_enabled: bool = False


@dataclass(frozen=True)
class MonthSummary:
    total_accounts: int
    month_costs: float
    total_payout: float
    net_profit: float
    payouts_enabled: bool


@dataclass
class MonthProjection:
    year: int
    month: int  # zero-based
    cells: List[CalendarCell] = field(default_factory=list)
    summary: Optional[MonthSummary] = None

    @property
    def days(self) -> List[CalendarCell]:
        """Cells for real days only (leading blanks dropped)."""
        return [c for c in self.cells if not c.empty]

    def to_dataframe(self) -> pd.DataFrame:
        rows = [{k: v for k, v in asdict(c).items() if k != "empty"} for c in self.days]
        return pd.DataFrame(rows, columns=list(CALENDAR_COLUMNS))


@dataclass(frozen=True)
class YearlyPoint:
    """Cumulative position at the end of one projected month (whole currency units)."""
    label: str
    year: int
    month: int  # zero-based
    costs: float
    payouts: float
    net: float
    accounts: int
    payouts_enabled: bool


def yearly_to_dataframe(points: Sequence[YearlyPoint]) -> pd.DataFrame:
    return pd.DataFrame([asdict(p) for p in points], columns=list(YEARLY_COLUMNS))
