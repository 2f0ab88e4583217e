"""
Instruction Tokenizer

Splits a raw instruction into tokens on the space character. Tabs and
newlines inside the instruction are not separators and stay part of the
token they appear in.
"""

from typing import Any

from .constants import MIN_TOKEN_COUNT, REASON_MALFORMED, StatusCode
from .models import InstructionRejected


def split_tokens(instruction: str) -> list[str]:
    """Trim the instruction and split it on spaces, dropping empty fragments."""
    return [token for token in instruction.strip().split(" ") if token]


def tokenize(instruction: Any) -> list[str]:
    """
    Tokenize an instruction field from the request.

    Raises:
        InstructionRejected: SY03 if the field is not a string or yields
            fewer tokens than the shortest valid instruction.
    """
    if not isinstance(instruction, str):
        raise InstructionRejected(StatusCode.SY03, REASON_MALFORMED)

    tokens = split_tokens(instruction)
    if len(tokens) < MIN_TOKEN_COUNT:
        raise InstructionRejected(StatusCode.SY03, REASON_MALFORMED)
    return tokens
