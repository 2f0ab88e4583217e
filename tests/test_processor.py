"""
Tests for the full instruction pipeline.
"""

import pytest

from payment_instructions.api.instructions import StatusCode, process_payment_instruction


class TestProcessPaymentInstruction:
    """End-to-end behaviour of process_payment_instruction."""

    def test_debit_executes(self, usd_accounts, today):
        result = process_payment_instruction(
            {
                "accounts": usd_accounts,
                "instruction": "DEBIT 500 USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122",
            },
            today=today,
        )
        assert result.http_status == 200
        body = result.body.to_dict()
        assert body == {
            "type": "DEBIT",
            "amount": 500,
            "currency": "USD",
            "debit_account": "N90394",
            "credit_account": "N9122",
            "execute_by": None,
            "status": "successful",
            "status_reason": "Transaction executed successfully",
            "status_code": "AP00",
            "accounts": [
                {"id": "N90394", "balance": 500, "balance_before": 1000, "currency": "USD"},
                {"id": "N9122", "balance": 1000, "balance_before": 500, "currency": "USD"},
            ],
        }

    def test_future_credit_is_pending(self, today):
        result = process_payment_instruction(
            {
                "accounts": [
                    {"id": "acc-001", "balance": 1000, "currency": "NGN"},
                    {"id": "acc-002", "balance": 500, "currency": "NGN"},
                ],
                "instruction": "CREDIT 300 NGN TO ACCOUNT acc-002 FOR DEBIT FROM ACCOUNT acc-001 ON 2999-12-31",
            },
            today=today,
        )
        assert result.http_status == 200
        assert result.body.status_code == StatusCode.AP02
        assert [view.balance for view in result.body.accounts] == [1000, 500]

    def test_date_equal_to_today_executes(self, usd_accounts, today):
        result = process_payment_instruction(
            {
                "accounts": usd_accounts,
                "instruction": f"DEBIT 100 USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122 ON {today}",
            },
            today=today,
        )
        assert result.body.status_code == StatusCode.AP00

    def test_lowercase_instruction_with_symbol_ids(self, today):
        result = process_payment_instruction(
            {
                "accounts": [
                    {"id": "abc@bank.com", "balance": 1000, "currency": "GBP"},
                    {"id": "xyz-01", "balance": 100, "currency": "GBP"},
                ],
                "instruction": "credit 100 gbp to account abc@bank.com for debit from account xyz-01",
            },
            today=today,
        )
        assert result.http_status == 200
        assert result.body.status_code == StatusCode.AP00
        assert [view.balance for view in result.body.accounts] == [1100, 0]

    @pytest.mark.parametrize("amount", ["100.50", "-100"])
    def test_bad_amount(self, usd_accounts, amount):
        result = process_payment_instruction(
            {
                "accounts": usd_accounts,
                "instruction": f"DEBIT {amount} USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122",
            }
        )
        assert result.http_status == 400
        assert result.body.status_code == StatusCode.AM01
        assert result.body.to_dict()["amount"] is None

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            "DEBIT 1 USD",
            {},
            {"instruction": 12345},
            {"instruction": "SEND 100 USD TO ACCOUNT b"},
            {"instruction": "SEND 100 USD TO ACCOUNT b FOR DEBIT"},
            {"accounts": "nope", "instruction": "DEBIT 1 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT b"},
        ],
    )
    def test_malformed_payloads(self, payload):
        result = process_payment_instruction(payload)
        assert result.http_status == 400
        body = result.body.to_dict()
        assert body["status"] == "failed"
        assert body["status_code"] == "SY03"
        assert body["status_reason"] == "Malformed instruction"
        assert body["type"] is None
        assert body["accounts"] == []

    def test_missing_accounts_key(self):
        result = process_payment_instruction(
            {"instruction": "DEBIT 1 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT b"}
        )
        assert result.body.status_code == StatusCode.AC03

    def test_unexpected_balance_type_propagates(self):
        with pytest.raises(TypeError):
            process_payment_instruction(
                {
                    "accounts": [
                        {"id": "a", "balance": None, "currency": "USD"},
                        {"id": "b", "balance": 1, "currency": "USD"},
                    ],
                    "instruction": "DEBIT 1 USD FROM ACCOUNT a FOR CREDIT TO ACCOUNT b",
                }
            )

    def test_identical_inputs_give_identical_results(self, usd_accounts, today):
        payload = {
            "accounts": usd_accounts,
            "instruction": "DEBIT 500 USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122 ON 2020-01-01",
        }
        first = process_payment_instruction(payload, today=today)
        second = process_payment_instruction(payload, today=today)
        assert first == second
        # Input accounts are never mutated
        assert usd_accounts[0]["balance"] == 1000
