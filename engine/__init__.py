"""
Projection engine — capacity-constrained day-by-day simulation of passed
accounts, payout gating, and the month/yearly projection builders.
"""

from .capacity import CapacityModel, room_in_firm
from .events import DayResult
from .simulation import SimulationEngine
from .payout import PayoutGate
from .results import CalendarCell, MonthProjection, MonthSummary, YearlyPoint, yearly_to_dataframe
from .runner import build_month_projection, build_yearly_projection, seed_engine

__all__ = [
    "CapacityModel",
    "room_in_firm",
    "DayResult",
    "SimulationEngine",
    "PayoutGate",
    "CalendarCell",
    "MonthProjection",
    "MonthSummary",
    "YearlyPoint",
    "yearly_to_dataframe",
    "build_month_projection",
    "build_yearly_projection",
    "seed_engine",
]
