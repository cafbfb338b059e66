"""
Payout gate — from which month simulated passed accounts start paying out.

Months passed to payouts_enabled() are zero-based (0 = January), matching the
projection builders; the configured start is written "YYYY-MM" (1-based).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.config import YearMonth, parse_year_month

from .simulation import SimulationEngine


@dataclass(frozen=True)
class PayoutGate:
    start: Optional[YearMonth] = None

    @classmethod
    def from_string(cls, value: Optional[str]) -> "PayoutGate":
        return cls(parse_year_month(value))

    def payouts_enabled(self, year: int, month: int) -> bool:
        if self.start is None:
            return False
        if year > self.start.year:
            return True
        return year == self.start.year and month >= self.start.month_index

    def payout_amount(self, engine: SimulationEngine, enabled: bool) -> float:
        """Floored passed accounts × expected payout, summed over account types."""
        if not enabled:
            return 0.0
        counts = engine.passed_counts()
        return float(
            sum(counts[t.id] * t.expected_payout for t in engine.account_types)
        )
