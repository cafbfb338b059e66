import logging
from dataclasses import replace
from datetime import date

import pytest

from core.config import ProjectionConfig
from engine import build_month_projection, build_yearly_projection, yearly_to_dataframe


def test_month_grid_alignment(full_rate_config, single_firm, single_type):
    january = build_month_projection(full_rate_config, single_firm, single_type, [], year=2026, month=0)
    # 1 Jan 2026 is a Thursday
    assert [c.empty for c in january.cells[:5]] == [True, True, True, True, False]
    assert len(january.cells) == 4 + 31
    assert len(january.days) == 31

    february = build_month_projection(full_rate_config, single_firm, single_type, [], year=2026, month=1)
    # 1 Feb 2026 is a Sunday
    assert not february.cells[0].empty
    assert february.cells[0].day == 1


def test_current_month_skips_past_days(single_firm, single_type):
    config = ProjectionConfig(reference_date=date(2026, 1, 5), pass_rate_pct=100, payout_start="2026-01")
    result = build_month_projection(config, single_firm, single_type, [], year=2026, month=0)
    days = {c.day: c for c in result.days}

    assert days[2].is_past and days[2].is_market
    assert days[2].total_accounts == 0
    assert days[2].day_cost == 0

    assert days[5].is_today and not days[5].is_past
    assert days[5].total_accounts == 1
    assert days[5].day_cost == 150
    assert days[5].total_payout == 2000

    assert days[19].is_holiday and not days[19].is_market
    assert days[10].is_weekend

    # 19 market days from Jan 5 to Jan 30 (Jan 19 is a holiday)
    s = result.summary
    assert s.total_accounts == 19
    assert s.month_costs == 19 * 150
    assert s.total_payout == 19 * 2000
    assert s.net_profit == 19 * 2000 - 19 * 150
    assert days[31].cumulative_cost == s.month_costs


def test_future_month_catches_up_without_costs(single_firm, single_type):
    config = ProjectionConfig(reference_date=date(2026, 1, 26), pass_rate_pct=100, payout_start="2026-01")
    result = build_month_projection(config, single_firm, single_type, [], year=2026, month=1)

    # Jan 26-30 advance state only; the firm then fills up after 15 of February's 19 market days
    first_market = next(c for c in result.days if c.is_market)
    assert first_market.day == 2
    assert first_market.total_accounts == 6
    assert first_market.cumulative_cost == 150

    s = result.summary
    assert s.total_accounts == 20
    assert s.month_costs == 15 * 150
    assert s.total_payout == 20 * 2000


def test_payout_eligibility_decided_per_month(single_firm, single_type):
    config = ProjectionConfig(reference_date=date(2026, 1, 5), pass_rate_pct=100, payout_start="2026-02")
    january = build_month_projection(config, single_firm, single_type, [], year=2026, month=0)
    assert not january.summary.payouts_enabled
    assert january.summary.total_payout == 0
    assert january.summary.total_accounts == 19
    assert all(c.total_payout == 0 for c in january.days)

    february = build_month_projection(config, single_firm, single_type, [], year=2026, month=1)
    assert february.summary.payouts_enabled
    assert february.summary.total_payout == 20 * 2000


def test_past_month_is_not_simulated(single_firm, single_type):
    config = ProjectionConfig(reference_date=date(2026, 1, 5), pass_rate_pct=100, payout_start="2025-01")
    accounts = [{"accountTypeId": "apex50", "status": "funded"}]
    result = build_month_projection(config, single_firm, single_type, accounts, year=2025, month=11)
    assert all(c.is_past for c in result.days)
    assert result.summary.month_costs == 0
    assert result.summary.total_accounts == 1
    assert result.summary.total_payout == 2000


def test_month_out_of_range(full_rate_config, single_firm, single_type):
    with pytest.raises(ValueError):
        build_month_projection(full_rate_config, single_firm, single_type, [], year=2026, month=12)


def test_month_dataframe(full_rate_config, single_firm, single_type):
    df = build_month_projection(full_rate_config, single_firm, single_type, [], year=2026, month=1).to_dataframe()
    assert len(df) == 28
    assert df["is_market"].sum() == 19
    assert df["total_accounts"].is_monotonic_increasing


def test_yearly_projection_shape(full_rate_config, roomy_firm, single_type):
    points = build_yearly_projection(full_rate_config, roomy_firm, single_type, [])
    assert len(points) == 12
    assert [p.label for p in points][:3] == ["Jan", "Feb", "Mar"]
    assert [p.month for p in points] == list(range(12))
    assert all(p.year == 2026 for p in points)


def test_yearly_cumulative_values(full_rate_config, roomy_firm, single_type):
    points = build_yearly_projection(full_rate_config, roomy_firm, single_type, [])
    jan, feb = points[0], points[1]

    # January: Jan 2 plus 19 more market days
    assert jan.accounts == 20
    assert jan.costs == 20 * 150
    assert jan.payouts == 20 * 2000
    assert jan.net == 20 * 2000 - 20 * 150
    assert jan.payouts_enabled

    assert feb.accounts == 39
    assert feb.costs == 39 * 150
    assert feb.payouts == (20 + 39) * 2000
    assert feb.net == feb.payouts - feb.costs


def test_yearly_records_are_order_stable(full_rate_config, roomy_firm, single_type):
    config = replace(full_rate_config, pass_rate_pct=20)
    points = build_yearly_projection(config, roomy_firm, single_type, [])
    for prev, cur in zip(points, points[1:]):
        assert cur.accounts >= prev.accounts
        assert cur.costs >= prev.costs
        assert cur.payouts >= prev.payouts


def test_builders_agree(full_rate_config, roomy_firm, single_type):
    yearly = build_yearly_projection(full_rate_config, roomy_firm, single_type, [])
    for month in (0, 1):
        monthly = build_month_projection(
            full_rate_config, roomy_firm, single_type, [], year=2026, month=month
        )
        assert monthly.summary.total_accounts == yearly[month].accounts
    january = build_month_projection(full_rate_config, roomy_firm, single_type, [], year=2026, month=0)
    assert round(january.summary.month_costs) == yearly[0].costs


def test_yearly_without_payout_start(roomy_firm, single_type):
    config = ProjectionConfig(reference_date=date(2026, 1, 2), pass_rate_pct=100)
    points = build_yearly_projection(config, roomy_firm, single_type, [])
    assert all(not p.payouts_enabled and p.payouts == 0 for p in points)
    assert points[-1].net == -points[-1].costs


def test_yearly_wraps_into_next_year(caplog, single_firm, single_type):
    config = ProjectionConfig(reference_date=date(2026, 10, 17), pass_rate_pct=50, payout_start="2026-10")
    with caplog.at_level(logging.WARNING, logger="market.classifier"):
        points = build_yearly_projection(config, single_firm, single_type, [])

    assert [p.label for p in points][:4] == ["Oct", "Nov", "Dec", "Jan"]
    assert points[3].year == 2027 and points[3].month == 0
    assert points[-1].label == "Sep"
    assert any("2027" in r.getMessage() for r in caplog.records)
    # the firm cap still binds across the year
    assert points[-1].accounts == 20


def test_yearly_rounds_half_up(roomy_firm):
    types = [{"id": "t", "firmId": "apex", "evalCost": 0, "activationCost": 1, "expectedPayout": 2000}]
    # one market day left in January at 50%: cost 0.5 rounds up
    config = ProjectionConfig(reference_date=date(2026, 1, 30), pass_rate_pct=50, projection_months=1)
    points = build_yearly_projection(config, roomy_firm, types, [])
    assert points[0].costs == 1
    # halves go toward +inf, so -0.5 becomes 0
    assert points[0].net == 0


def test_yearly_dataframe(full_rate_config, roomy_firm, single_type):
    df = yearly_to_dataframe(build_yearly_projection(full_rate_config, roomy_firm, single_type, []))
    assert list(df.columns) == ["label", "year", "month", "costs", "payouts", "net", "accounts", "payouts_enabled"]
    assert df["costs"].is_monotonic_increasing


def test_seeded_accounts_are_not_mutated(full_rate_config, roomy_firm, single_type):
    accounts = [{"accountTypeId": "apex50", "status": "passed"}]
    first = build_yearly_projection(full_rate_config, roomy_firm, single_type, accounts)
    second = build_yearly_projection(full_rate_config, roomy_firm, single_type, accounts)
    assert first == second
    assert first[0].accounts == 21


def test_unknown_accrual_policy(roomy_firm, single_type):
    config = ProjectionConfig(reference_date=date(2026, 1, 2), accrual="random")
    with pytest.raises(ValueError):
        build_yearly_projection(config, roomy_firm, single_type, [])


def test_half_edited_records_do_not_break_projections(full_rate_config, roomy_firm, single_type):
    types = single_type + [{"id": "draft", "firmId": None, "evalCost": 999}]
    accounts = [
        {"accountTypeId": None, "status": "passed"},
        {"accountTypeId": "apex50", "status": None},
    ]
    points = build_yearly_projection(full_rate_config, roomy_firm, types, accounts)
    assert points[0].accounts == 20
    assert points[0].costs == 20 * 150

    month = build_month_projection(full_rate_config, roomy_firm, types, accounts, year=2026, month=0)
    assert month.summary.total_accounts == 20
    assert month.summary.month_costs == 20 * 150
