"""
Unit tests for semantic validation of parsed instructions.
"""

import pytest

from payment_instructions.api.instructions import (
    Direction,
    Instruction,
    InstructionRejected,
    StatusCode,
    validate_instruction,
)


def debit(amount=100, debit_id="a", credit_id="b", currency="USD"):
    return Instruction(
        direction=Direction.DEBIT,
        amount=amount,
        currency=currency,
        debit_account_id=debit_id,
        credit_account_id=credit_id,
    )


def reject(instruction, accounts):
    with pytest.raises(InstructionRejected) as exc_info:
        validate_instruction(instruction, accounts)
    return exc_info.value


class TestAccountExistence:
    """Test AC03 account lookup."""

    def test_missing_credit_account_reports_found_one(self):
        accounts = [
            {"id": "other", "balance": 1, "currency": "USD"},
            {"id": "a", "balance": 500, "currency": "usd"},
        ]
        rejection = reject(debit(), accounts)
        assert rejection.status_code == StatusCode.AC03
        assert rejection.reason == "Account not found"
        assert [view.to_dict() for view in rejection.accounts] == [
            {"id": "a", "balance": 500, "balance_before": 500, "currency": "USD"},
        ]
        assert rejection.echo.debit_account == "a"
        assert rejection.echo.credit_account == "b"

    def test_no_accounts_supplied(self):
        rejection = reject(debit(), [])
        assert rejection.status_code == StatusCode.AC03
        assert rejection.accounts == []

    def test_ids_match_exactly(self):
        accounts = [
            {"id": "A", "balance": 500, "currency": "USD"},
            {"id": "b", "balance": 500, "currency": "USD"},
        ]
        assert reject(debit(), accounts).status_code == StatusCode.AC03

    def test_non_object_entries_are_skipped(self):
        accounts = [None, 42, {"id": "b", "balance": 0, "currency": "USD"}]
        rejection = reject(debit(), accounts)
        assert rejection.status_code == StatusCode.AC03
        assert [view.id for view in rejection.accounts] == ["b"]


class TestCurrencyChecks:
    """Test CU01 and account-level CU02."""

    def test_currency_mismatch(self):
        accounts = [
            {"id": "a", "balance": 100, "currency": "USD"},
            {"id": "b", "balance": 500, "currency": "GBP"},
        ]
        rejection = reject(debit(amount=50), accounts)
        assert rejection.status_code == StatusCode.CU01
        assert [view.id for view in rejection.accounts] == ["a", "b"]
        assert all(view.balance == view.balance_before for view in rejection.accounts)

    def test_currency_comparison_ignores_case(self):
        accounts = [
            {"id": "a", "balance": 100, "currency": "usd"},
            {"id": "b", "balance": 500, "currency": "USD"},
        ]
        resolved = validate_instruction(debit(amount=50), accounts)
        assert resolved.debit.currency == resolved.credit.currency == "USD"

    def test_unsupported_account_currency(self):
        accounts = [
            {"id": "b", "balance": 500, "currency": "EUR"},
            {"id": "a", "balance": 100, "currency": "eur"},
        ]
        rejection = reject(debit(amount=50), accounts)
        assert rejection.status_code == StatusCode.CU02
        assert [view.id for view in rejection.accounts] == ["b", "a"]
        assert rejection.accounts[1].currency == "EUR"


class TestSelfTransfer:
    """Test AC02 for identical debit and credit accounts."""

    def test_same_account(self):
        accounts = [{"id": "a", "balance": 500, "currency": "USD"}]
        rejection = reject(debit(credit_id="a"), accounts)
        assert rejection.status_code == StatusCode.AC02
        assert rejection.reason == "Debit and credit accounts cannot be the same"
        assert len(rejection.accounts) == 1


class TestSufficientFunds:
    """Test AC01 balance check."""

    def test_insufficient_funds(self):
        accounts = [
            {"id": "a", "balance": 99, "currency": "GHS"},
            {"id": "b", "balance": 0, "currency": "GHS"},
        ]
        rejection = reject(debit(amount=100, currency="GHS"), accounts)
        assert rejection.status_code == StatusCode.AC01
        assert [(view.balance, view.balance_before) for view in rejection.accounts] == [
            (99, 99),
            (0, 0),
        ]

    def test_exact_balance_is_enough(self):
        accounts = [
            {"id": "a", "balance": 100, "currency": "NGN"},
            {"id": "b", "balance": 0, "currency": "NGN"},
        ]
        resolved = validate_instruction(debit(amount=100, currency="NGN"), accounts)
        assert resolved.debit.id == "a"
        assert resolved.credit.id == "b"

    def test_first_match_wins_for_duplicate_ids(self):
        accounts = [
            {"id": "a", "balance": 10, "currency": "USD"},
            {"id": "a", "balance": 1000, "currency": "USD"},
            {"id": "b", "balance": 0, "currency": "USD"},
        ]
        assert reject(debit(amount=100), accounts).status_code == StatusCode.AC01

    def test_checks_run_in_order(self):
        # Mismatched currencies and insufficient funds: mismatch wins
        accounts = [
            {"id": "a", "balance": 1, "currency": "USD"},
            {"id": "b", "balance": 0, "currency": "NGN"},
        ]
        assert reject(debit(amount=100), accounts).status_code == StatusCode.CU01
