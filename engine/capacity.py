"""
Firm capacity — how much room each firm has left under its funded-account cap.

Room is measured from fractional passed counts, so partially-passed progress
already occupies capacity and a firm can never be over-bought.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from data_prep.records import AccountType, Firm


def room_in_firm(
    firm: Firm,
    account_types_of_firm: Iterable[AccountType],
    passed: Mapping[str, float],
) -> float:
    """
    `firm.max_funded` minus the firm's combined fractional passed count.
    A non-positive result means the firm is full.
    """
    used = sum(passed.get(t.id, 0.0) for t in account_types_of_firm)
    return firm.max_funded - used


class CapacityModel:
    """Read-only view of firms and the account types that draw on each of them."""

    def __init__(self, firms: Mapping[str, Firm], account_types: Sequence[AccountType]):
        self.firms: Dict[str, Firm] = dict(firms)
        members: Dict[str, list] = {firm_id: [] for firm_id in self.firms}
        for t in account_types:
            if t.firm_id in members:
                members[t.firm_id].append(t)
        self._members: Dict[str, Tuple[AccountType, ...]] = {
            firm_id: tuple(ts) for firm_id, ts in members.items()
        }

    def account_types_of(self, firm_id: str) -> Tuple[AccountType, ...]:
        return self._members.get(firm_id, ())

    def room(self, firm_id: str, passed: Mapping[str, float]) -> Optional[float]:
        """Remaining room for a firm, or None when the firm is unknown."""
        firm = self.firms.get(firm_id)
        if firm is None:
            return None
        return room_in_firm(firm, self._members[firm_id], passed)

    def is_saturated(self, firm_id: str, passed: Mapping[str, float]) -> bool:
        room = self.room(firm_id, passed)
        return room is None or room <= 0
