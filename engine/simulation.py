"""
Simulation engine — deterministic day-by-day accrual of passed accounts.

State is one fractional passed count per account type, seeded from the number
of accounts already passed or funded. Each simulated market day adds the
(capacity-clipped) pass rate to every account type whose firm still has room.
Only the floor of a fractional count is ever reported as an account; the
remainder carries forward to later days.

Engines are single-owner mutable objects. Use clone() to branch a projection
from a shared starting point.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Mapping, Optional, Sequence, Union

import numpy as np

from behaviors import AccrualPolicy, SequentialAccrual, get_policy
from data_prep.records import (
    AccountType,
    Firm,
    RecordsLike,
    coerce_account_types,
    coerce_accounts,
    coerce_firms,
    seed_passed_counts,
)

from .capacity import CapacityModel
from .events import DayResult

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    Fractional passed-account counters plus the rules that advance them.

    Parameters
    ----------
    firms : mapping or sequence of Firm records
    account_types : sequence of AccountType records
        Order matters under the sequential accrual policy: earlier types claim
        shared firm room first.
    passed : mapping, optional
        Starting fractional count per account type (default 0).
    pass_rate : float
        Daily pass probability as a fraction (0.5 = 50%). Not clamped.
    policy : AccrualPolicy or str, optional
        Within-day sharing rule; defaults to SequentialAccrual.
    """

    def __init__(
        self,
        firms: RecordsLike,
        account_types: RecordsLike,
        passed: Optional[Mapping[str, float]] = None,
        *,
        pass_rate: float = 0.5,
        policy: Optional[Union[AccrualPolicy, str]] = None,
    ):
        self.firms: Dict[str, Firm] = coerce_firms(firms)
        self.account_types: Sequence[AccountType] = coerce_account_types(account_types)
        self.pass_rate = float(pass_rate)

        if policy is None:
            policy = SequentialAccrual()
        elif isinstance(policy, str):
            policy = get_policy(policy)
        self.policy: AccrualPolicy = policy

        self.capacity = CapacityModel(self.firms, self.account_types)

        seed = passed or {}
        self._passed: Dict[str, float] = {
            t.id: float(seed.get(t.id, 0.0)) for t in self.account_types
        }

    @classmethod
    def from_accounts(
        cls,
        firms: RecordsLike,
        account_types: RecordsLike,
        accounts: RecordsLike,
        *,
        pass_rate: float = 0.5,
        policy: Optional[Union[AccrualPolicy, str]] = None,
    ) -> "SimulationEngine":
        """Seed fractional counts from the accounts already passed or funded."""
        types = coerce_account_types(account_types)
        seed = seed_passed_counts(types, coerce_accounts(accounts))
        logger.debug("Seeded passed counts: %s", seed)
        return cls(firms, types, seed, pass_rate=pass_rate, policy=policy)

    # ------------------------------------------------------------------ state

    @property
    def fractional_passed(self) -> Dict[str, float]:
        """Copy of the fractional counters."""
        return dict(self._passed)

    def passed_counts(self) -> Dict[str, int]:
        """Observable (floored) passed accounts per account type."""
        return {type_id: math.floor(v) for type_id, v in self._passed.items()}

    def total_passed_accounts(self) -> int:
        if not self._passed:
            return 0
        values = np.fromiter(self._passed.values(), dtype=float, count=len(self._passed))
        return int(np.floor(values).sum())

    def room_in_firm(self, firm_id: str) -> Optional[float]:
        return self.capacity.room(firm_id, self._passed)

    # ---------------------------------------------------------------- advance

    def step(self, track_costs: bool = False) -> DayResult:
        """Simulate one market day and return what happened."""
        increments = self.policy.allocate(
            self.pass_rate, self.account_types, self._passed, self.capacity
        )
        result = DayResult()

        for t in self.account_types:
            increment = increments.get(t.id, 0.0)
            if increment <= 0:
                continue

            self._passed[t.id] += increment
            result.increments[t.id] = increment

            if track_costs:
                result.eval_costs[t.id] = t.eval_cost
                if t.activation_cost > 0:
                    result.activation_costs[t.id] = increment * t.activation_cost

        return result

    def advance_day(self, track_costs: bool = False) -> float:
        """Simulate one market day; returns the day's costs (0 when not tracked)."""
        return self.step(track_costs).costs

    def advance_days(self, n: int, track_costs: bool = False) -> float:
        total = 0.0
        for _ in range(n):
            total += self.advance_day(track_costs)
        return total

    def clone(self) -> "SimulationEngine":
        """Independent copy; advancing the clone never touches this engine."""
        twin = SimulationEngine(
            self.firms,
            self.account_types,
            self._passed,
            pass_rate=self.pass_rate,
            policy=self.policy,
        )
        return twin

    def __repr__(self) -> str:
        return (
            f"SimulationEngine(types={len(self.account_types)}, "
            f"pass_rate={self.pass_rate:g}, passed={self.total_passed_accounts()})"
        )
