"""
Payment Instruction Processor

Runs an instruction through the full pipeline:

    tokenize -> parse_instruction -> validate_instruction -> resolve_outcome

Every rejection raised by a stage is rendered here into a failed result, so
callers always receive a ProcessingResult. Errors that are not rejections
(e.g. an account balance that is not a number) propagate to the caller.
"""

import logging
from typing import Any, Optional

from .constants import REASON_MALFORMED, OutcomeStatus, StatusCode
from .grammar import parse_instruction
from .models import (
    InstructionEcho,
    InstructionRejected,
    InstructionResult,
    ProcessingResult,
)
from .resolver import resolve_outcome
from .tokenizer import tokenize
from .validator import validate_instruction

logger = logging.getLogger(__name__)


def malformed_result(reason: str = REASON_MALFORMED) -> InstructionResult:
    """The generic SY03 result with nothing echoed."""
    return InstructionResult(
        status=OutcomeStatus.FAILED,
        status_code=StatusCode.SY03,
        status_reason=reason,
    )


def rejected_result(rejection: InstructionRejected) -> InstructionResult:
    return InstructionResult(
        status=OutcomeStatus.FAILED,
        status_code=rejection.status_code,
        status_reason=rejection.reason,
        echo=rejection.echo or InstructionEcho(),
        accounts=rejection.accounts,
    )


def process_payment_instruction(
    payload: Any,
    today: Optional[str] = None,
) -> ProcessingResult:
    """
    Process a raw request payload.

    Args:
        payload: Request body, expected as {"accounts": [...], "instruction": str}.
        today: YYYY-MM-DD date used for scheduling, defaults to today (UTC).

    Returns:
        ProcessingResult with a 200 hint for successful/pending outcomes and
        400 for every rejection.
    """
    if not isinstance(payload, dict):
        result = malformed_result()
        return ProcessingResult(result.http_status, result)

    accounts = payload.get("accounts")
    if accounts is None:
        accounts = []
    if not isinstance(accounts, list):
        result = malformed_result()
        return ProcessingResult(result.http_status, result)

    try:
        tokens = tokenize(payload.get("instruction"))
        instruction = parse_instruction(tokens, accounts)
        resolved = validate_instruction(instruction, accounts)
        result = resolve_outcome(instruction, resolved, accounts, today=today)
    except InstructionRejected as rejection:
        logger.info(f"Instruction rejected with {rejection.status_code.value}: {rejection.reason}")
        result = rejected_result(rejection)

    return ProcessingResult(result.http_status, result)
