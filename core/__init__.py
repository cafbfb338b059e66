"""
Core package — shared constants, projection configuration, and date helpers.
No business logic lives here.
"""

from .schema import ACCOUNT_STATUSES, SEED_STATUSES, DEFAULT_EXPECTED_PAYOUT, MONTH_LABELS
from .config import ProjectionConfig, YearMonth, parse_year_month
from .utils import to_date, month_bounds, add_months, round_half_up

__all__ = [
    "ACCOUNT_STATUSES",
    "SEED_STATUSES",
    "DEFAULT_EXPECTED_PAYOUT",
    "MONTH_LABELS",
    "ProjectionConfig",
    "YearMonth",
    "parse_year_month",
    "to_date",
    "month_bounds",
    "add_months",
    "round_half_up",
]
