"""
Consistency checks for dashboard configuration before it is projected.

The engine itself tolerates every problem reported here (it skips what it
cannot resolve), so these checks are informational:
- Account types pointing at a firm that does not exist
- Accounts pointing at an account type that does not exist
- Unknown account statuses
- Firms already holding more passed/funded accounts than their cap
- Pass rates outside 0-100 (the engine does not clamp them)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from core.schema import ACCOUNT_STATUSES

from .records import (
    AccountType,
    Firm,
    RecordsLike,
    as_record,
    coerce_accounts,
    record_values,
    seed_passed_counts,
)


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a configuration."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_configuration(
    firms: RecordsLike,
    account_types: RecordsLike,
    accounts: RecordsLike = None,
    *,
    pass_rate_pct: Optional[float] = None,
) -> ValidationResult:
    """
    Run all consistency checks.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    firm_list = [as_record(Firm, raw) for raw in record_values(firms)]
    type_list = [as_record(AccountType, raw) for raw in record_values(account_types)]
    account_list = coerce_accounts(accounts)

    # --- Identity ---
    for label, ids in (("firm", [f.id for f in firm_list]), ("account type", [t.id for t in type_list])):
        dupes = sorted(i for i, n in Counter(ids).items() if n > 1)
        if dupes:
            result.errors.append(f"Duplicate {label} ids: {dupes}")

    firm_ids = {f.id for f in firm_list}
    type_ids = {t.id for t in type_list}

    # --- References ---
    for t in type_list:
        if t.firm_id is None:
            result.warnings.append(
                f"Account type {t.id!r} has no firm; it will not be projected."
            )
        elif t.firm_id not in firm_ids:
            result.warnings.append(
                f"Account type {t.id!r} references unknown firm {t.firm_id!r}; it will not be projected."
            )

    untyped = sum(1 for a in account_list if a.account_type_id is None)
    if untyped:
        result.warnings.append(f"{untyped} account(s) have no account type; they are not counted.")

    orphans = Counter(
        a.account_type_id for a in account_list
        if a.account_type_id is not None and a.account_type_id not in type_ids
    )
    for type_id, n in sorted(orphans.items()):
        result.warnings.append(f"{n} account(s) reference unknown account type {type_id!r}.")

    # --- Statuses ---
    bad_status = Counter(a.status for a in account_list if a.status not in ACCOUNT_STATUSES)
    for status, n in sorted(bad_status.items()):
        result.warnings.append(f"{n} account(s) have unknown status {status!r}.")

    # --- Capacity ---
    seeded = seed_passed_counts(type_list, account_list)
    for f in firm_list:
        held = sum(seeded[t.id] for t in type_list if t.firm_id == f.id)
        if held > f.max_funded:
            result.warnings.append(
                f"Firm {f.id!r} holds {held} passed/funded accounts, above its cap of {f.max_funded:g}."
            )

    # --- Pass rate ---
    if pass_rate_pct is not None and not 0 <= pass_rate_pct <= 100:
        result.warnings.append(
            f"Pass rate {pass_rate_pct:g}% is outside 0-100; projections will use it unclamped."
        )

    return result
