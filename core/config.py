"""
Projection configuration.
Scalar settings threaded through both projection builders; the reference
date replaces any wall-clock "today" so projections are reproducible.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, FrozenSet, Literal, Mapping, NamedTuple, Optional

from market.holidays import DEFAULT_HOLIDAYS

from .schema import DEFAULT_PASS_RATE_PCT
from .utils import to_date

_YEAR_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


class YearMonth(NamedTuple):
    year: int
    month: int  # 1-based, as written in "YYYY-MM"

    @property
    def month_index(self) -> int:
        return self.month - 1


def parse_year_month(value: Optional[str]) -> Optional[YearMonth]:
    """Parse "YYYY-MM" into a YearMonth; empty/None means not configured."""
    if value is None or value == "":
        return None
    if isinstance(value, YearMonth):
        return value
    m = _YEAR_MONTH_RE.match(str(value))
    if not m:
        raise ValueError(f"Expected a 'YYYY-MM' string, got {value!r}")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range in {value!r}")
    return YearMonth(year, month)


@dataclass(frozen=True)
class ProjectionConfig:
    reference_date: date

    # assumed daily pass probability, percent; range is the caller's responsibility
    pass_rate_pct: float = DEFAULT_PASS_RATE_PCT

    payout_start: Optional[str] = None
    holidays: FrozenSet[date] = field(default_factory=lambda: DEFAULT_HOLIDAYS)

    # how sibling account types under one firm share capacity within a day
    accrual: Literal["sequential", "snapshot"] = "sequential"

    projection_months: int = 12

    def __post_init__(self):
        object.__setattr__(self, "reference_date", to_date(self.reference_date))
        object.__setattr__(self, "holidays", frozenset(to_date(d) for d in self.holidays))
        # fail fast on a malformed start month
        parse_year_month(self.payout_start)

    @property
    def pass_rate(self) -> float:
        return float(self.pass_rate_pct) / 100.0

    @property
    def payout_start_month(self) -> Optional[YearMonth]:
        return parse_year_month(self.payout_start)

    @classmethod
    def from_settings(
        cls,
        settings: Mapping[str, Any],
        *,
        reference_date,
        **overrides,
    ) -> "ProjectionConfig":
        """Build from a dashboard settings mapping (camelCase or snake_case keys)."""
        pass_rate = settings.get("passRate", settings.get("pass_rate", DEFAULT_PASS_RATE_PCT))
        payout_start = settings.get("payoutStartDate", settings.get("payout_start_date"))
        kwargs = {
            "reference_date": reference_date,
            "pass_rate_pct": float(pass_rate),
            "payout_start": payout_start or None,
        }
        kwargs.update(overrides)
        return cls(**kwargs)
