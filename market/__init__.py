"""
Market calendar — trading-day classification over a configurable holiday set.
"""

from .holidays import DEFAULT_HOLIDAYS, US_MARKET_HOLIDAYS_2025, US_MARKET_HOLIDAYS_2026
from .classifier import MarketCalendar, is_holiday, is_market_day, market_day_count

__all__ = [
    "DEFAULT_HOLIDAYS",
    "US_MARKET_HOLIDAYS_2025",
    "US_MARKET_HOLIDAYS_2026",
    "MarketCalendar",
    "is_holiday",
    "is_market_day",
    "market_day_count",
]
