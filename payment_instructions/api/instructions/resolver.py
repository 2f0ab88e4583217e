"""
Outcome Resolution

Decides whether a validated instruction executes now or is scheduled, and
computes the post-transaction balances when it executes.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from .constants import (
    REASON_EXECUTED,
    REASON_SCHEDULED,
    OutcomeStatus,
    StatusCode,
)
from .models import (
    Instruction,
    InstructionEcho,
    InstructionResult,
    collect_views,
)
from .validator import ResolvedAccounts

logger = logging.getLogger(__name__)


def today_utc() -> str:
    """Today's UTC calendar date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def is_future_date(execute_on: Optional[str], today: str) -> bool:
    # Both sides are fixed-width YYYY-MM-DD, so string order is date order
    return execute_on is not None and execute_on > today


def resolve_outcome(
    instruction: Instruction,
    resolved: ResolvedAccounts,
    accounts: Sequence[Any],
    today: Optional[str] = None,
) -> InstructionResult:
    """
    Resolve a validated instruction into a pending or successful result.

    Args:
        instruction: The parsed instruction.
        resolved: Debit and credit accounts returned by the validator.
        accounts: Raw request accounts, used to keep the request order.
        today: YYYY-MM-DD date to compare against, defaults to today (UTC).
    """
    today = today or today_utc()
    echo = InstructionEcho.from_instruction(instruction)
    account_ids = (resolved.debit.id, resolved.credit.id)

    if is_future_date(instruction.execute_on, today):
        logger.info(
            f"Instruction scheduled for {instruction.execute_on}: "
            f"{instruction.amount} {instruction.currency} "
            f"{resolved.debit.id} -> {resolved.credit.id}"
        )
        return InstructionResult(
            status=OutcomeStatus.PENDING,
            status_code=StatusCode.AP02,
            status_reason=REASON_SCHEDULED,
            echo=echo,
            accounts=collect_views(accounts, account_ids),
        )

    balances = {
        resolved.debit.id: resolved.debit.balance - instruction.amount,
        resolved.credit.id: resolved.credit.balance + instruction.amount,
    }
    logger.info(
        f"Instruction executed: {instruction.amount} {instruction.currency} "
        f"{resolved.debit.id} -> {resolved.credit.id}"
    )
    return InstructionResult(
        status=OutcomeStatus.SUCCESSFUL,
        status_code=StatusCode.AP00,
        status_reason=REASON_EXECUTED,
        echo=echo,
        accounts=collect_views(accounts, account_ids, balances=balances),
    )
