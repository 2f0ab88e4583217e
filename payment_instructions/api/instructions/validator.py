"""
Semantic Validation of Parsed Instructions

Checks a parsed instruction against the accounts supplied with the request.
Checks run in a fixed order and the first failure rejects the instruction:

1. Both accounts exist
2. Account currencies match
3. Account currency is supported
4. Debit and credit accounts differ
5. Debit account holds enough funds

A rejection never changes a balance; every reported view has
balance == balance_before.
"""

import logging
from typing import Any, NamedTuple, Optional, Sequence

from .constants import (
    REASON_ACCOUNT_NOT_FOUND,
    REASON_CURRENCY_MISMATCH,
    REASON_INSUFFICIENT_FUNDS,
    REASON_SAME_ACCOUNT,
    REASON_UNSUPPORTED_CURRENCY,
    SUPPORTED_CURRENCIES,
    StatusCode,
)
from .models import (
    Account,
    Instruction,
    InstructionEcho,
    InstructionRejected,
    collect_views,
)

logger = logging.getLogger(__name__)


class ResolvedAccounts(NamedTuple):
    """The debit and credit accounts an instruction refers to."""
    debit: Account
    credit: Account


def find_account(accounts: Sequence[Any], account_id: str) -> Optional[Account]:
    """Return the first supplied account whose id matches exactly."""
    for entry in accounts:
        if isinstance(entry, dict) and entry.get("id") == account_id:
            return Account.from_payload(entry)
    return None


def validate_instruction(
    instruction: Instruction,
    accounts: Sequence[Any],
) -> ResolvedAccounts:
    """
    Validate an instruction against the request accounts.

    Args:
        instruction: Output of the grammar matcher.
        accounts: Raw account entries from the request, in request order.

    Returns:
        The resolved debit and credit accounts.

    Raises:
        InstructionRejected: AC03, CU01, CU02, AC02 or AC01.
    """
    echo = InstructionEcho.from_instruction(instruction)
    account_ids = (instruction.debit_account_id, instruction.credit_account_id)
    # Views follow request order, not debit-then-credit.

    debit = find_account(accounts, instruction.debit_account_id)
    credit = find_account(accounts, instruction.credit_account_id)
    if debit is None or credit is None:
        raise InstructionRejected(
            StatusCode.AC03,
            REASON_ACCOUNT_NOT_FOUND,
            accounts=collect_views(accounts, account_ids),
            echo=echo,
        )

    if debit.currency != credit.currency:
        raise InstructionRejected(
            StatusCode.CU01,
            REASON_CURRENCY_MISMATCH,
            accounts=collect_views(accounts, account_ids),
            echo=echo,
        )

    if debit.currency not in SUPPORTED_CURRENCIES:
        raise InstructionRejected(
            StatusCode.CU02,
            REASON_UNSUPPORTED_CURRENCY,
            accounts=collect_views(accounts, account_ids),
            echo=echo,
        )

    if debit.id == credit.id:
        raise InstructionRejected(
            StatusCode.AC02,
            REASON_SAME_ACCOUNT,
            accounts=collect_views(accounts, account_ids, limit=1),
            echo=echo,
        )

    if debit.balance < instruction.amount:
        logger.debug(
            f"Debit account {debit.id} holds {debit.balance}, "
            f"instruction needs {instruction.amount}"
        )
        raise InstructionRejected(
            StatusCode.AC01,
            REASON_INSUFFICIENT_FUNDS,
            accounts=collect_views(accounts, account_ids),
            echo=echo,
        )

    return ResolvedAccounts(debit=debit, credit=credit)
