"""
Money tracker — analytics over the expenses and payouts actually recorded,
as opposed to the simulated figures produced by the engine.
"""

from .aggregator import FinancialTracker
from .metrics import (
    firm_at_capacity,
    historical_pass_rate,
    money_stats,
    potential_payout,
    total_passed,
)
from .formatting import format_expense_type, format_payout_source, format_month

__all__ = [
    "FinancialTracker",
    "money_stats",
    "total_passed",
    "potential_payout",
    "historical_pass_rate",
    "firm_at_capacity",
    "format_expense_type",
    "format_payout_source",
    "format_month",
]
