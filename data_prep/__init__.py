"""
Data preparation — coercing dashboard records into engine inputs, validation.
"""

from .records import (
    Firm,
    AccountType,
    Account,
    Expense,
    Payout,
    coerce_firms,
    coerce_account_types,
    coerce_accounts,
    coerce_ledger,
    seed_passed_counts,
)
from .validators import ValidationResult, validate_configuration

__all__ = [
    "Firm",
    "AccountType",
    "Account",
    "Expense",
    "Payout",
    "coerce_firms",
    "coerce_account_types",
    "coerce_accounts",
    "coerce_ledger",
    "seed_passed_counts",
    "ValidationResult",
    "validate_configuration",
]
