"""
SequentialAccrual — first come, first served within a day.

Account types are evaluated in sequence order and each one sees its firm's
room *after* the types before it have already accrued today. With two
siblings sharing 0.5 of room at a 100% pass rate, the first takes all 0.5
and the second gets nothing. Results therefore depend on account-type order,
which callers control through the order of the account-type sequence.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Mapping, Sequence

from .base import AccrualPolicy, effective_rate

if TYPE_CHECKING:
    from data_prep.records import AccountType
    from engine.capacity import CapacityModel

logger = logging.getLogger(__name__)


class SequentialAccrual(AccrualPolicy):
    name = "sequential"

    def allocate(
        self,
        pass_rate: float,
        account_types: Sequence["AccountType"],
        passed: Mapping[str, float],
        capacity: "CapacityModel",
    ) -> Dict[str, float]:
        working = dict(passed)
        increments: Dict[str, float] = {}

        for t in account_types:
            room = capacity.room(t.firm_id, working)
            if room is None:
                logger.debug("Skipping account type %r: unknown firm %r", t.id, t.firm_id)
                continue
            if room <= 0:
                continue

            increment = min(effective_rate(pass_rate, t), room)
            if increment <= 0:
                continue

            working[t.id] = working.get(t.id, 0.0) + increment
            increments[t.id] = increment

        return increments
