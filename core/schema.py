from __future__ import annotations

from typing import FrozenSet, Tuple

# Lifecycle of an evaluation account as tracked by the dashboard.
ACCOUNT_STATUSES: Tuple[str, ...] = (
    "in-progress",
    "halfway",
    "passed",
    "funded",
    "failed",
)

# Statuses that count as an already-passed account when seeding a simulation.
SEED_STATUSES: FrozenSet[str] = frozenset({"passed", "funded"})

# Payout assumed per passed account when an account type leaves it unset.
DEFAULT_EXPECTED_PAYOUT: float = 2000.0

DEFAULT_PASS_RATE_PCT: float = 50.0

MONTH_LABELS: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Column order of the presentation frames produced by the projection builders.
CALENDAR_COLUMNS: Tuple[str, ...] = (
    "date",
    "day",
    "is_weekend",
    "is_holiday",
    "is_today",
    "is_past",
    "is_market",
    "day_cost",
    "cumulative_cost",
    "total_accounts",
    "total_payout",
    "payouts_enabled",
)

YEARLY_COLUMNS: Tuple[str, ...] = (
    "label",
    "year",
    "month",
    "costs",
    "payouts",
    "net",
    "accounts",
    "payouts_enabled",
)
