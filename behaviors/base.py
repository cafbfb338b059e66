"""
Base interface for accrual policies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Mapping, Sequence

if TYPE_CHECKING:
    from data_prep.records import AccountType
    from engine.capacity import CapacityModel


def effective_rate(pass_rate: float, account_type: "AccountType") -> float:
    """Daily progress for one account type; a consistency rule halves it."""
    return pass_rate / 2 if account_type.has_consistency_rule else pass_rate


class AccrualPolicy:
    """
    Interface for allocating one day's pass increments.

    Implementations return {account_type_id: increment} for every type that
    accrues a positive amount today and must not mutate `passed`.
    """

    name: str = ""

    def allocate(
        self,
        pass_rate: float,
        account_types: Sequence["AccountType"],
        passed: Mapping[str, float],
        capacity: "CapacityModel",
    ) -> Dict[str, float]:
        raise NotImplementedError
