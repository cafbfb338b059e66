from datetime import date

import pytest

from core.config import ProjectionConfig


@pytest.fixture
def single_firm():
    return [{"id": "apex", "name": "Apex", "maxFunded": 20}]


@pytest.fixture
def single_type():
    return [{
        "id": "apex50",
        "firmId": "apex",
        "name": "50K",
        "evalCost": 150,
        "activationCost": 0,
        "expectedPayout": 2000,
        "hasConsistencyRule": False,
    }]


@pytest.fixture
def roomy_firm():
    return [{"id": "apex", "name": "Apex", "maxFunded": 100}]


@pytest.fixture
def full_rate_config():
    """100% pass rate, payouts from January 2026, today = Friday 2 Jan 2026."""
    return ProjectionConfig(
        reference_date=date(2026, 1, 2),
        pass_rate_pct=100,
        payout_start="2026-01",
    )
