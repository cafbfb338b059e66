from __future__ import annotations

from datetime import date
from typing import FrozenSet, Tuple

# US futures-market full-day closures used by the dashboard.
US_MARKET_HOLIDAYS_2025: Tuple[date, ...] = (
    date(2025, 1, 1),
    date(2025, 1, 20),
    date(2025, 2, 17),
    date(2025, 4, 18),
    date(2025, 5, 26),
    date(2025, 6, 19),
    date(2025, 7, 4),
    date(2025, 9, 1),
    date(2025, 11, 27),
    date(2025, 12, 25),
)

US_MARKET_HOLIDAYS_2026: Tuple[date, ...] = (
    date(2026, 1, 1),
    date(2026, 1, 19),
    date(2026, 2, 16),
    date(2026, 4, 3),
    date(2026, 5, 25),
    date(2026, 6, 19),
    date(2026, 7, 3),
    date(2026, 9, 7),
    date(2026, 11, 26),
    date(2026, 12, 25),
)

DEFAULT_HOLIDAYS: FrozenSet[date] = frozenset(US_MARKET_HOLIDAYS_2025 + US_MARKET_HOLIDAYS_2026)
