"""
Display labels for ledger entries.

Expense types are either an account type id (an eval purchase), the same id
with an "-activation" suffix (an activation fee), or free text such as "other".
"""

from __future__ import annotations

import re
from datetime import date
from typing import Mapping, Optional

from core.schema import MONTH_LABELS
from data_prep.records import AccountType, Firm, Payout

_ACTIVATION_RE = re.compile(r"^(.+)-activation$")


def resolve_expense_type(
    expense_type: Optional[str],
    account_types: Mapping[str, AccountType],
):
    """(account_type, kind) for an expense type, kind in {"eval", "activation"}; (None, None) otherwise."""
    if not expense_type:
        return None, None
    if expense_type in account_types:
        return account_types[expense_type], "eval"
    m = _ACTIVATION_RE.match(expense_type)
    if m and m.group(1) in account_types:
        return account_types[m.group(1)], "activation"
    return None, None


def _firm_prefix(account_type: AccountType, firms: Mapping[str, Firm]) -> str:
    firm = firms.get(account_type.firm_id)
    return f"{firm.name} - " if firm else ""


def format_expense_type(
    expense_type: str,
    account_types: Mapping[str, AccountType],
    firms: Mapping[str, Firm],
) -> str:
    """e.g. "Apex - 50K Eval", "Apex - 50K Activation", "Other"."""
    account_type, kind = resolve_expense_type(expense_type, account_types)
    if account_type is not None:
        suffix = "Eval" if kind == "eval" else "Activation"
        return f"{_firm_prefix(account_type, firms)}{account_type.name} {suffix}"
    return "Other" if expense_type == "other" else expense_type


def format_payout_source(
    payout: Payout,
    account_types: Mapping[str, AccountType],
    firms: Mapping[str, Firm],
) -> str:
    if payout.account_type_id and payout.account_type_id in account_types:
        account_type = account_types[payout.account_type_id]
        firm = firms.get(account_type.firm_id)
        return f"{firm.name} - {account_type.name}" if firm else account_type.name
    if payout.firm_id and payout.firm_id in firms:
        return firms[payout.firm_id].name
    return "Other"


def format_month(raw_month: str) -> str:
    """"2025-01" -> "Jan 25"."""
    year, month = (int(p) for p in raw_month.split("-")[:2])
    return f"{MONTH_LABELS[month - 1]} {date(year, month, 1):%y}"
