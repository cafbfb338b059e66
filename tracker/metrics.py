"""
Dashboard headline numbers computed from current records.

These describe where things stand today; the engine's projections start
from the same seed (passed + funded accounts per account type).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import pandas as pd

from core.schema import SEED_STATUSES
from core.utils import round_half_up
from data_prep.records import (
    Expense,
    Firm,
    RecordsLike,
    as_record,
    coerce_account_types,
    coerce_accounts,
    coerce_ledger,
    seed_passed_counts,
)

from .formatting import resolve_expense_type


@dataclass
class TypeSpend:
    eval_spent: float = 0.0
    eval_count: int = 0
    activation_spent: float = 0.0
    activation_count: int = 0


@dataclass
class MoneyStats:
    total_spent: float = 0.0
    by_account_type: Dict[str, TypeSpend] = field(default_factory=dict)

    def to_dataframe(self) -> pd.DataFrame:
        rows = [{"account_type_id": type_id, **vars(s)} for type_id, s in self.by_account_type.items()]
        return pd.DataFrame(
            rows,
            columns=["account_type_id", "eval_spent", "eval_count", "activation_spent", "activation_count"],
        )


def money_stats(expenses: RecordsLike, account_types: RecordsLike) -> MoneyStats:
    """Total spend plus eval/activation spend and counts per account type."""
    types = {t.id: t for t in coerce_account_types(account_types)}
    stats = MoneyStats(by_account_type={type_id: TypeSpend() for type_id in types})

    for e in coerce_ledger(Expense, expenses):
        stats.total_spent += e.amount
        account_type, kind = resolve_expense_type(e.type, types)
        if account_type is None:
            continue
        spend = stats.by_account_type[account_type.id]
        if kind == "eval":
            spend.eval_spent += e.amount
            spend.eval_count += 1
        else:
            spend.activation_spent += e.amount
            spend.activation_count += 1

    return stats


def total_passed(accounts: RecordsLike) -> int:
    """Accounts currently passed or funded."""
    return sum(1 for a in coerce_accounts(accounts) if a.status in SEED_STATUSES)


def potential_payout(account_types: RecordsLike, accounts: RecordsLike) -> float:
    """Payout the current passed/funded accounts would bring at their expected payout."""
    types = coerce_account_types(account_types)
    counts = seed_passed_counts(types, coerce_accounts(accounts))
    return float(sum(counts[t.id] * t.expected_payout for t in types))


def historical_pass_rate(
    expenses: RecordsLike,
    account_types: RecordsLike,
    accounts: RecordsLike,
) -> int:
    """Passed accounts per eval purchased, as a whole percentage (0 with no evals)."""
    types = {t.id: t for t in coerce_account_types(account_types)}
    evals = sum(1 for e in coerce_ledger(Expense, expenses) if e.type in types)
    if evals == 0:
        return 0
    return int(round_half_up(total_passed(accounts) / evals * 100))


def firm_at_capacity(firm, account_types: RecordsLike, accounts: RecordsLike) -> bool:
    """True when the firm's passed/funded accounts already reach max_funded."""
    firm = as_record(Firm, firm)
    types = [t for t in coerce_account_types(account_types) if t.firm_id == firm.id]
    counts = seed_passed_counts(types, coerce_accounts(accounts))
    return sum(counts.values()) >= firm.max_funded
