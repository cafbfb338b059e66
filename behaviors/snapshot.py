"""
SnapshotAccrual — order-independent alternative to SequentialAccrual.

Each firm's room is measured once at the start of the day. If the firm's
account types together want more than that room, every type's demand is
scaled by the same factor so the firm lands exactly on its cap. The result
does not depend on the order of the account-type sequence.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, List, Mapping, Sequence

from .base import AccrualPolicy, effective_rate

if TYPE_CHECKING:
    from data_prep.records import AccountType
    from engine.capacity import CapacityModel

logger = logging.getLogger(__name__)


class SnapshotAccrual(AccrualPolicy):
    name = "snapshot"

    def allocate(
        self,
        pass_rate: float,
        account_types: Sequence["AccountType"],
        passed: Mapping[str, float],
        capacity: "CapacityModel",
    ) -> Dict[str, float]:
        by_firm: Dict[str, List["AccountType"]] = defaultdict(list)
        for t in account_types:
            by_firm[t.firm_id].append(t)

        increments: Dict[str, float] = {}
        for firm_id, siblings in by_firm.items():
            room = capacity.room(firm_id, passed)
            if room is None:
                logger.debug(
                    "Skipping account types %s: unknown firm %r",
                    [t.id for t in siblings],
                    firm_id,
                )
                continue
            if room <= 0:
                continue

            demand = {t.id: effective_rate(pass_rate, t) for t in siblings}
            total = sum(d for d in demand.values() if d > 0)
            if total <= 0:
                continue
            scale = min(1.0, room / total)

            for type_id, d in demand.items():
                increment = d * scale
                if increment > 0:
                    increments[type_id] = increment

        return increments
