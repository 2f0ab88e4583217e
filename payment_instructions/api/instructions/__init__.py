"""
Payment Instruction Processing Package

This package contains the pipeline that turns a payment instruction string
into an executed, scheduled or rejected result.

Structure:
- constants.py: Status codes, reasons, keywords and supported currencies
- models.py: Value objects passed between stages
- tokenizer.py: Splits the instruction into tokens
- grammar.py: Matches tokens against the DEBIT and CREDIT templates
- validator.py: Checks the instruction against the supplied accounts
- resolver.py: Executes or schedules a validated instruction
- processor.py: Runs the whole pipeline
"""

from .constants import (
    SUPPORTED_CURRENCIES,
    Direction,
    OutcomeStatus,
    StatusCode,
)
from .models import (
    Account,
    AccountView,
    Instruction,
    InstructionEcho,
    InstructionRejected,
    InstructionResult,
    ProcessingResult,
)
from .tokenizer import tokenize
from .grammar import parse_instruction
from .validator import validate_instruction
from .resolver import resolve_outcome
from .processor import malformed_result, process_payment_instruction

__all__ = [
    # Constants
    "SUPPORTED_CURRENCIES",
    "Direction",
    "OutcomeStatus",
    "StatusCode",
    # Models
    "Account",
    "AccountView",
    "Instruction",
    "InstructionEcho",
    "InstructionRejected",
    "InstructionResult",
    "ProcessingResult",
    # Pipeline
    "tokenize",
    "parse_instruction",
    "validate_instruction",
    "resolve_outcome",
    "malformed_result",
    "process_payment_instruction",
]
