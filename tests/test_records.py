import logging

import pytest
from pydantic import ValidationError

from core.schema import DEFAULT_EXPECTED_PAYOUT
from data_prep import (
    AccountType,
    Expense,
    Firm,
    Payout,
    coerce_account_types,
    coerce_accounts,
    coerce_firms,
    coerce_ledger,
    seed_passed_counts,
)


def test_firm_aliases_and_coercion():
    by_camel = Firm.model_validate({"id": "apex", "name": "Apex", "maxFunded": "20"})
    by_snake = Firm.model_validate({"id": "apex", "name": "Apex", "max_funded": 20})
    assert by_camel == by_snake
    assert by_camel.max_funded == 20.0


@pytest.mark.parametrize("raw", [None, "", "lots", float("nan")])
def test_unreadable_max_funded_means_full(raw):
    assert Firm.model_validate({"id": "f", "maxFunded": raw}).max_funded == 0.0


def test_numeric_ids_become_strings():
    firm = Firm.model_validate({"id": 7})
    t = AccountType.model_validate({"id": 3, "firmId": 7})
    assert firm.id == "7"
    assert t.firm_id == firm.id


def test_account_type_defaults():
    t = AccountType.model_validate({
        "id": "t",
        "firmId": "f",
        "evalCost": "n/a",
        "activationCost": None,
        "expectedPayout": 0,
        "hasConsistencyRule": None,
    })
    assert t.eval_cost == 0.0
    assert t.activation_cost == 0.0
    assert t.expected_payout == DEFAULT_EXPECTED_PAYOUT
    assert t.has_consistency_rule is False


def test_explicit_expected_payout_kept():
    t = AccountType.model_validate({"id": "t", "firmId": "f", "expectedPayout": "1500"})
    assert t.expected_payout == 1500.0


def test_missing_id_is_rejected():
    with pytest.raises(ValidationError):
        Firm.model_validate({"name": "No id"})
    with pytest.raises(ValidationError):
        AccountType.model_validate({"firmId": "f"})


def test_unknown_fields_ignored():
    firm = Firm.model_validate({"id": "f", "website": "https://example.com"})
    assert not hasattr(firm, "website")


def test_coerce_firms_from_list_or_mapping():
    as_list = coerce_firms([{"id": "a"}, {"id": "b"}])
    as_map = coerce_firms({"a": {"id": "a"}, "b": {"id": "b"}})
    assert list(as_list) == ["a", "b"]
    assert as_list == as_map
    assert coerce_firms(None) == {}


def test_account_types_keep_order_and_drop_duplicates(caplog):
    raw = [
        {"id": "b", "firmId": "f"},
        {"id": "a", "firmId": "f"},
        {"id": "b", "firmId": "f", "evalCost": 99},
    ]
    with caplog.at_level(logging.WARNING, logger="data_prep.records"):
        types = coerce_account_types(raw)
    assert [t.id for t in types] == ["b", "a"]
    assert types[0].eval_cost == 0.0
    assert "Duplicate account type id" in caplog.text


def test_records_pass_through():
    firm = Firm(id="f", maxFunded=3)
    assert coerce_firms([firm])["f"] is firm


def test_grouped_accounts_take_type_from_key():
    accounts = coerce_accounts({
        "apex50": [{"id": "1", "status": "passed"}, {"id": "2", "status": "failed"}],
        "lucid": [{"id": "3", "accountTypeId": "lucid", "status": "funded"}],
        "empty": None,
    })
    assert [(a.id, a.account_type_id) for a in accounts] == [
        ("1", "apex50"), ("2", "apex50"), ("3", "lucid"),
    ]


def test_account_status_defaults_to_in_progress():
    [account] = coerce_accounts([{"accountTypeId": "t"}])
    assert account.status == "in-progress"


def test_ledger_drops_unreadable_entries(caplog):
    with caplog.at_level(logging.WARNING, logger="data_prep.records"):
        expenses = coerce_ledger(Expense, [{"date": "2025-01-02", "amount": "150", "type": "t"}, "garbage"])
    assert len(expenses) == 1
    assert expenses[0].amount == 150.0
    assert "Dropping unreadable Expense" in caplog.text


def test_payout_aliases():
    [payout] = coerce_ledger(Payout, [{"amount": 2000, "accountTypeId": "t", "firmId": "f"}])
    assert payout.account_type_id == "t"
    assert payout.firm_id == "f"
    assert payout.date is None


def test_seed_counts_passed_and_funded_only():
    types = coerce_account_types([{"id": "a", "firmId": "f"}, {"id": "b", "firmId": "f"}])
    accounts = coerce_accounts([
        {"accountTypeId": "a", "status": "passed"},
        {"accountTypeId": "a", "status": "funded"},
        {"accountTypeId": "a", "status": "halfway"},
        {"accountTypeId": "zzz", "status": "funded"},
    ])
    assert seed_passed_counts(types, accounts) == {"a": 2, "b": 0}


def test_missing_references_become_none():
    assert AccountType.model_validate({"id": "t"}).firm_id is None
    assert AccountType.model_validate({"id": "t", "firmId": ""}).firm_id is None
    [untyped, no_status] = coerce_accounts([{"accountTypeId": None}, {"accountTypeId": "t", "status": None}])
    assert untyped.account_type_id is None
    assert no_status.status == "in-progress"


def test_grouped_accounts_fill_none_type_from_key():
    [account] = coerce_accounts({"apex50": [{"accountTypeId": None, "status": "passed"}]})
    assert account.account_type_id == "apex50"
