"""
Input records supplied by the dashboard's storage layer.

The projection engine only reads a handful of fields, and the upstream data can
be mid-edit, so numeric fields are coerced instead of rejected:
  - missing / non-numeric costs      -> 0.0
  - missing / zero expected payout   -> DEFAULT_EXPECTED_PAYOUT
  - missing / non-numeric max_funded -> 0 (firm treated as full)
  - missing firm / account type reference -> None (skipped by the engine)
Records without an id still fail validation.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.schema import DEFAULT_EXPECTED_PAYOUT, SEED_STATUSES

logger = logging.getLogger(__name__)


def _as_float(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        out = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(out) else out


class _Record(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        coerce_numbers_to_str=True,
    )


class Firm(_Record):
    id: str
    name: str = ""
    max_funded: float = Field(default=0.0, alias="maxFunded")

    @field_validator("max_funded", mode="before")
    @classmethod
    def _coerce_max_funded(cls, v):
        return _as_float(v, 0.0)


class AccountType(_Record):
    id: str
    firm_id: Optional[str] = Field(default=None, alias="firmId")
    name: str = ""
    eval_cost: float = Field(default=0.0, alias="evalCost")
    activation_cost: float = Field(default=0.0, alias="activationCost")
    default_profit_target: float = Field(default=0.0, alias="defaultProfitTarget")
    expected_payout: float = Field(default=DEFAULT_EXPECTED_PAYOUT, alias="expectedPayout")
    has_consistency_rule: bool = Field(default=False, alias="hasConsistencyRule")

    @field_validator("eval_cost", "activation_cost", "default_profit_target", mode="before")
    @classmethod
    def _coerce_cost(cls, v):
        return _as_float(v, 0.0)

    @field_validator("expected_payout", mode="before")
    @classmethod
    def _coerce_payout(cls, v):
        # zero counts as unset, same as the dashboard's `|| 2000`
        return _as_float(v, 0.0) or DEFAULT_EXPECTED_PAYOUT

    @field_validator("has_consistency_rule", mode="before")
    @classmethod
    def _coerce_flag(cls, v):
        return False if v is None else v

    @field_validator("firm_id", mode="before")
    @classmethod
    def _blank_firm(cls, v):
        return None if v == "" else v


class Account(_Record):
    id: Optional[str] = None
    account_type_id: Optional[str] = Field(default=None, alias="accountTypeId")
    status: str = "in-progress"
    balance: float = 0.0
    profit_target: float = Field(default=0.0, alias="profitTarget")

    @field_validator("balance", "profit_target", mode="before")
    @classmethod
    def _coerce_amount(cls, v):
        return _as_float(v, 0.0)

    @field_validator("account_type_id", mode="before")
    @classmethod
    def _blank_type(cls, v):
        return None if v == "" else v

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, v):
        return v or "in-progress"


class Expense(_Record):
    date: Optional[str] = None
    amount: float = 0.0
    type: str = "other"
    note: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, v):
        return _as_float(v, 0.0)


class Payout(_Record):
    date: Optional[str] = None
    amount: float = 0.0
    account_type_id: Optional[str] = Field(default=None, alias="accountTypeId")
    firm_id: Optional[str] = Field(default=None, alias="firmId")

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, v):
        return _as_float(v, 0.0)


RecordsLike = Union[Mapping[str, Any], Iterable[Any], None]


def record_values(records: RecordsLike) -> List[Any]:
    if records is None:
        return []
    if isinstance(records, Mapping):
        return list(records.values())
    return list(records)


def as_record(model, raw):
    if isinstance(raw, model):
        return raw
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=False)
    return model.model_validate(raw)


def coerce_firms(firms: RecordsLike) -> Dict[str, Firm]:
    """Firms keyed by id. Accepts a list of records or an id-keyed mapping."""
    out: Dict[str, Firm] = {}
    for raw in record_values(firms):
        firm = as_record(Firm, raw)
        out[firm.id] = firm
    return out


def coerce_account_types(account_types: RecordsLike) -> Tuple[AccountType, ...]:
    """Account types in input order; that order is the engine's evaluation order."""
    out: List[AccountType] = []
    seen = set()
    for raw in record_values(account_types):
        t = as_record(AccountType, raw)
        if t.id in seen:
            logger.warning("Duplicate account type id %r ignored.", t.id)
            continue
        seen.add(t.id)
        out.append(t)
    return tuple(out)


def coerce_accounts(accounts: RecordsLike) -> List[Account]:
    """
    Flatten accounts into a list.

    Also accepts the dashboard's grouped shape {accountTypeId: [account, ...]},
    in which case the key supplies a missing accountTypeId.
    """
    if accounts is None:
        return []
    out: List[Account] = []
    if isinstance(accounts, Mapping):
        for type_id, group in accounts.items():
            for raw in group or []:
                if isinstance(raw, Mapping) and (
                    raw.get("accountTypeId") is None and raw.get("account_type_id") is None
                ):
                    raw = {**raw, "accountTypeId": type_id}
                out.append(as_record(Account, raw))
        return out
    return [as_record(Account, raw) for raw in accounts]


def coerce_ledger(model, entries: RecordsLike) -> list:
    """Expenses or payouts; entries that cannot be parsed are dropped with a warning."""
    out = []
    for raw in record_values(entries):
        try:
            out.append(as_record(model, raw))
        except ValidationError as exc:
            logger.warning("Dropping unreadable %s entry %r: %s", model.__name__, raw, exc)
    return out


def seed_passed_counts(
    account_types: Iterable[AccountType],
    accounts: Iterable[Account],
) -> Dict[str, int]:
    """Count of passed/funded accounts per account type (zero for types with none)."""
    counts = Counter(a.account_type_id for a in accounts if a.status in SEED_STATUSES)
    return {t.id: int(counts.get(t.id, 0)) for t in account_types}
