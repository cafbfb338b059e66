"""
Accrual policies — how one simulated day's pass progress is split across
account types that compete for the same firm's funded-account capacity.
"""

from .base import AccrualPolicy, effective_rate
from .sequential import SequentialAccrual
from .snapshot import SnapshotAccrual

_POLICIES = {
    "sequential": SequentialAccrual,
    "snapshot": SnapshotAccrual,
}


def get_policy(name: str) -> AccrualPolicy:
    """Resolve a policy by its configuration name."""
    try:
        return _POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown accrual policy {name!r}; expected one of {sorted(_POLICIES)}"
        ) from None


__all__ = [
    "AccrualPolicy",
    "effective_rate",
    "SequentialAccrual",
    "SnapshotAccrual",
    "get_policy",
]
