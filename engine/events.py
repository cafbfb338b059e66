"""
Per-day simulation result.

A simulated day produces pass increments for some account types and, when
costs are tracked, two kinds of spend:
  - eval cost:       the full evalCost of every type that accrued today,
                     regardless of increment size (new evals keep being bought)
  - activation cost: increment × activationCost (fractional funding)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class DayResult:
    """Result of simulating one market day."""
    increments: Dict[str, float] = field(default_factory=dict)
    eval_costs: Dict[str, float] = field(default_factory=dict)
    activation_costs: Dict[str, float] = field(default_factory=dict)

    @property
    def costs(self) -> float:
        return sum(self.eval_costs.values()) + sum(self.activation_costs.values())
