"""
Projection runner — drives the simulation engine across calendar ranges.

Two consumers share the same primitives (seeded engine, market calendar,
payout gate):
  1. Month calendar: one Sunday-first grid for a chosen month, with the
     running cost, passed accounts and payout on every day.
  2. Yearly series:  cumulative costs/payouts at the end of each of the next
     N months, starting with the reference month.

"Today" is config.reference_date, never the wall clock. Market days before
today are never charged: the month view skips them, and the yearly view
advances state through them without tracking costs.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import List

from core.config import ProjectionConfig
from core.schema import MONTH_LABELS
from core.utils import add_months, iter_days, leading_blank_cells, month_bounds, round_half_up
from data_prep.records import RecordsLike
from market.classifier import MarketCalendar

from .payout import PayoutGate
from .results import CalendarCell, MonthProjection, MonthSummary, YearlyPoint
from .simulation import SimulationEngine

logger = logging.getLogger(__name__)


def seed_engine(
    config: ProjectionConfig,
    firms: RecordsLike,
    account_types: RecordsLike,
    accounts: RecordsLike,
) -> SimulationEngine:
    """Fresh engine seeded from current accounts with the configured rate and policy."""
    return SimulationEngine.from_accounts(
        firms,
        account_types,
        accounts,
        pass_rate=config.pass_rate,
        policy=config.accrual,
    )


def build_month_projection(
    config: ProjectionConfig,
    firms: RecordsLike,
    account_types: RecordsLike,
    accounts: RecordsLike,
    *,
    year: int,
    month: int,
) -> MonthProjection:
    """
    Calendar projection for one month.

    Parameters
    ----------
    config : ProjectionConfig
        Reference date, pass rate, payout start, holidays, accrual policy
    firms, account_types, accounts : records or dashboard-shaped mappings
    year : int
    month : int
        Zero-based month (0 = January)

    If the month starts after the reference date, the engine first advances
    through every market day from the reference date up to the day before the
    month starts, without tracking costs. Payout eligibility is decided once
    for the whole month.
    """
    first_day, last_day = month_bounds(year, month)
    today = config.reference_date
    calendar = MarketCalendar(config.holidays)
    gate = PayoutGate(config.payout_start_month)

    engine = seed_engine(config, firms, account_types, accounts)
    payouts_enabled = gate.payouts_enabled(year, month)

    if first_day > today:
        catch_up = calendar.market_day_count(today, first_day - timedelta(days=1))
        engine.advance_days(catch_up, track_costs=False)
        logger.debug("Advanced %d market days before %s", catch_up, first_day)

    cells: List[CalendarCell] = [
        CalendarCell(empty=True) for _ in range(leading_blank_cells(first_day))
    ]
    month_costs = 0.0

    for d in iter_days(first_day, last_day):
        is_past = d < today
        is_market = calendar.is_market_day(d)

        day_cost = 0.0
        if is_market and not is_past:
            day_cost = engine.advance_day(track_costs=True)
            month_costs += day_cost

        cells.append(
            CalendarCell(
                date=d,
                day=d.day,
                is_weekend=calendar.is_weekend(d),
                is_holiday=calendar.is_holiday(d),
                is_today=d == today,
                is_past=is_past,
                is_market=is_market,
                day_cost=day_cost,
                cumulative_cost=month_costs,
                total_accounts=engine.total_passed_accounts(),
                total_payout=gate.payout_amount(engine, payouts_enabled),
                payouts_enabled=payouts_enabled,
            )
        )

    final_payout = gate.payout_amount(engine, payouts_enabled)
    summary = MonthSummary(
        total_accounts=engine.total_passed_accounts(),
        month_costs=month_costs,
        total_payout=final_payout,
        net_profit=final_payout - month_costs,
        payouts_enabled=payouts_enabled,
    )
    logger.debug(
        "Month projection %04d-%02d: accounts=%d costs=%.2f payout=%.2f",
        year, month + 1, summary.total_accounts, month_costs, final_payout,
    )
    return MonthProjection(year=year, month=month, cells=cells, summary=summary)


def build_yearly_projection(
    config: ProjectionConfig,
    firms: RecordsLike,
    account_types: RecordsLike,
    accounts: RecordsLike,
) -> List[YearlyPoint]:
    """
    Cumulative projection for config.projection_months months, starting with
    the month containing the reference date.

    Returns one YearlyPoint per month; costs, payouts and net are running
    totals rounded half-up to whole currency units. The payout for a month is
    computed from the state at the end of that month and added to the running
    payout total.
    """
    today = config.reference_date
    calendar = MarketCalendar(config.holidays)
    gate = PayoutGate(config.payout_start_month)

    engine = seed_engine(config, firms, account_types, accounts).clone()

    cumulative_costs = 0.0
    cumulative_payouts = 0.0
    points: List[YearlyPoint] = []

    for i in range(config.projection_months):
        year, month = add_months(today.year, today.month - 1, i)
        first_day, last_day = month_bounds(year, month)

        month_costs = 0.0
        for d in iter_days(first_day, last_day):
            if not calendar.is_market_day(d):
                continue
            if d >= today:
                month_costs += engine.advance_day(track_costs=True)
            else:
                engine.advance_day(track_costs=False)

        cumulative_costs += month_costs

        payouts_enabled = gate.payouts_enabled(year, month)
        cumulative_payouts += gate.payout_amount(engine, payouts_enabled)

        points.append(
            YearlyPoint(
                label=MONTH_LABELS[month],
                year=year,
                month=month,
                costs=round_half_up(cumulative_costs),
                payouts=round_half_up(cumulative_payouts),
                net=round_half_up(cumulative_payouts - cumulative_costs),
                accounts=engine.total_passed_accounts(),
                payouts_enabled=payouts_enabled,
            )
        )

    logger.debug("Yearly projection built: %d months from %s", len(points), today)
    return points
