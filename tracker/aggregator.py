"""
Aggregate recorded expenses and payouts into chart-ready tables.

All tables are pandas DataFrames with amounts rounded half-up to whole
currency units. Entries without a date are left out of the monthly tables;
entries with a zero amount are left out of every grouped table.
"""

from __future__ import annotations

from typing import List

import numpy as np
import pandas as pd

from core.utils import round_half_up
from data_prep.records import (
    Expense,
    Payout,
    RecordsLike,
    coerce_account_types,
    coerce_firms,
    coerce_ledger,
)

from .formatting import format_month, resolve_expense_type

OTHER = "Other"


class FinancialTracker:
    """
    Expense/payout analytics for the money tracker.

    Usage:
        tracker = FinancialTracker(expenses=..., payouts=..., account_types=..., firms=...)
        tracker.net_profit()
        tracker.cumulative_monthly_financials()   # running totals per month
        tracker.profit_by_firm()                  # firms sorted by profit
    """

    def __init__(
        self,
        expenses: RecordsLike = None,
        payouts: RecordsLike = None,
        account_types: RecordsLike = None,
        firms: RecordsLike = None,
    ):
        self.expenses: List[Expense] = coerce_ledger(Expense, expenses)
        self.payouts: List[Payout] = coerce_ledger(Payout, payouts)
        self.account_types = {t.id: t for t in coerce_account_types(account_types)}
        self.firms = coerce_firms(firms)

    # ---------------------------------------------------------------- totals

    def total_expenses(self) -> float:
        return float(sum(e.amount for e in self.expenses))

    def total_payouts(self) -> float:
        return float(sum(p.amount for p in self.payouts))

    def net_profit(self) -> float:
        return self.total_payouts() - self.total_expenses()

    def roi(self) -> float:
        """Payouts as a percentage of expenses, one decimal; 0 when nothing was spent."""
        spent = self.total_expenses()
        if spent == 0:
            return 0.0
        return round(self.total_payouts() / spent * 100, 1)

    # --------------------------------------------------------------- monthly

    @staticmethod
    def _monthly_sums(entries) -> pd.Series:
        rows = [(e.date[:7], e.amount) for e in entries if e.date and e.amount]
        if not rows:
            return pd.Series(dtype=float)
        df = pd.DataFrame(rows, columns=["raw_month", "amount"])
        return df.groupby("raw_month")["amount"].sum().sort_index()

    @classmethod
    def _by_month(cls, entries) -> pd.DataFrame:
        sums = cls._monthly_sums(entries)
        return pd.DataFrame({
            "month": [format_month(m) for m in sums.index],
            "raw_month": list(sums.index),
            "amount": round_half_up(sums.to_numpy()) if len(sums) else [],
        }, columns=["month", "raw_month", "amount"])

    def expenses_by_month(self) -> pd.DataFrame:
        return self._by_month(self.expenses)

    def payouts_by_month(self) -> pd.DataFrame:
        return self._by_month(self.payouts)

    def monthly_financials(self) -> pd.DataFrame:
        """Expenses, payouts and net for every month that has either."""
        exp = self._monthly_sums(self.expenses)
        pay = self._monthly_sums(self.payouts)
        months = sorted(set(exp.index) | set(pay.index))

        exp = exp.reindex(months, fill_value=0.0).to_numpy(dtype=float)
        pay = pay.reindex(months, fill_value=0.0).to_numpy(dtype=float)

        return pd.DataFrame({
            "month": [format_month(m) for m in months],
            "raw_month": months,
            "expenses": round_half_up(exp) if months else [],
            "payouts": round_half_up(pay) if months else [],
            "net": round_half_up(pay - exp) if months else [],
        }, columns=["month", "raw_month", "expenses", "payouts", "net"])

    def cumulative_monthly_financials(self) -> pd.DataFrame:
        """monthly_financials() plus running totals of the rounded monthly figures."""
        out = self.monthly_financials()
        out["cumulative_expenses"] = np.cumsum(out["expenses"].to_numpy(dtype=float))
        out["cumulative_payouts"] = np.cumsum(out["payouts"].to_numpy(dtype=float))
        out["cumulative_net"] = out["cumulative_payouts"] - out["cumulative_expenses"]
        return out

    # --------------------------------------------------------------- by firm

    def _expense_firm(self, expense: Expense) -> str:
        account_type, _ = resolve_expense_type(expense.type, self.account_types)
        if account_type is not None:
            firm = self.firms.get(account_type.firm_id)
            if firm is not None:
                return firm.name
        return OTHER

    def _payout_firm(self, payout: Payout) -> str:
        if payout.account_type_id and payout.account_type_id in self.account_types:
            firm = self.firms.get(self.account_types[payout.account_type_id].firm_id)
            return firm.name if firm is not None else OTHER
        if payout.firm_id and payout.firm_id in self.firms:
            return self.firms[payout.firm_id].name
        return OTHER

    @staticmethod
    def _by_name(rows) -> pd.DataFrame:
        if not rows:
            return pd.DataFrame(columns=["name", "amount"])
        df = pd.DataFrame(rows, columns=["name", "amount"])
        grouped = df.groupby("name", sort=False, as_index=False)["amount"].sum()
        grouped["amount"] = round_half_up(grouped["amount"].to_numpy())
        return grouped.sort_values("amount", ascending=False, kind="stable").reset_index(drop=True)

    def expenses_by_firm(self) -> pd.DataFrame:
        return self._by_name([(self._expense_firm(e), e.amount) for e in self.expenses if e.amount])

    def payouts_by_firm(self) -> pd.DataFrame:
        return self._by_name([(self._payout_firm(p), p.amount) for p in self.payouts if p.amount])

    def profit_by_firm(self) -> pd.DataFrame:
        """Per firm: expenses, payouts and profit, most profitable first."""
        exp = self.expenses_by_firm().set_index("name")["amount"]
        pay = self.payouts_by_firm().set_index("name")["amount"]
        names = list(dict.fromkeys(list(exp.index) + list(pay.index)))
        if not names:
            return pd.DataFrame(columns=["name", "expenses", "payouts", "profit"])

        out = pd.DataFrame({
            "name": names,
            "expenses": exp.reindex(names, fill_value=0.0).to_numpy(dtype=float),
            "payouts": pay.reindex(names, fill_value=0.0).to_numpy(dtype=float),
        })
        out["profit"] = out["payouts"] - out["expenses"]
        return out.sort_values("profit", ascending=False, kind="stable").reset_index(drop=True)
