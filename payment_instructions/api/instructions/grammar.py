"""
Instruction Grammar Matcher

Matches a token list against the two fixed instruction templates:

    DEBIT <amount> <currency> FROM ACCOUNT <debit> FOR CREDIT TO ACCOUNT <credit> [ON <date>]
    CREDIT <amount> <currency> TO ACCOUNT <credit> FOR DEBIT FROM ACCOUNT <debit> [ON <date>]

Tokens are consumed by a single forward-only cursor. Fields are validated
with plain character-class predicates as they are consumed, and the first
mismatch rejects the instruction.
"""

import logging
from typing import Any, NamedTuple, Optional, Sequence

from .constants import (
    ACCOUNT_ID_SYMBOLS,
    DATE_LENGTH,
    DATE_SEPARATOR,
    DATE_SEPARATOR_POSITIONS,
    KEYWORD_ACCOUNT,
    KEYWORD_CREDIT,
    KEYWORD_DEBIT,
    KEYWORD_FOR,
    KEYWORD_FROM,
    KEYWORD_ON,
    KEYWORD_TO,
    MAX_ACCOUNT_VIEWS,
    REASON_INVALID_AMOUNT,
    REASON_INVALID_DATE,
    REASON_MALFORMED,
    REASON_UNSUPPORTED_CURRENCY,
    SUPPORTED_CURRENCIES,
    Direction,
    StatusCode,
)
from .models import (
    Account,
    AccountView,
    Instruction,
    InstructionEcho,
    InstructionRejected,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Character Predicates
# =============================================================================

def is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_ascii_letter(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


def is_digit_string(value: Optional[str]) -> bool:
    """True for a non-empty string made only of ASCII digits."""
    if not value:
        return False
    return all(is_ascii_digit(ch) for ch in value)


def is_valid_account_id(value: Optional[str]) -> bool:
    """Account ids allow ASCII letters, digits and the symbols - . @"""
    if not value:
        return False
    for ch in value:
        if not (is_ascii_letter(ch) or is_ascii_digit(ch) or ch in ACCOUNT_ID_SYMBOLS):
            return False
    return True


def is_supported_currency(code: str) -> bool:
    return code.upper() in SUPPORTED_CURRENCIES


def parse_iso_date(value: Optional[str]) -> Optional[str]:
    """
    Validate a YYYY-MM-DD date token.

    Month must be 1-12 and day 1-31; month lengths and leap years are not
    checked, so 2024-02-31 is accepted.

    Returns:
        The date string unchanged, or None if the token is not a valid date.
    """
    if value is None or len(value) != DATE_LENGTH:
        return None
    if any(value[pos] != DATE_SEPARATOR for pos in DATE_SEPARATOR_POSITIONS):
        return None

    year, month, day = value[0:4], value[5:7], value[8:10]
    if not (is_digit_string(year) and is_digit_string(month) and is_digit_string(day)):
        return None
    if not 1 <= int(month) <= 12:
        return None
    if not 1 <= int(day) <= 31:
        return None
    return value


# =============================================================================
# Templates
# =============================================================================

class Keyword(NamedTuple):
    """A literal keyword slot; context names its position in the reason."""
    word: str
    context: Optional[str] = None

    @property
    def reason(self) -> str:
        reason = f"Missing required keyword {self.word}"
        if self.context:
            reason = f"{reason} {self.context}"
        return reason


class AccountSlot(NamedTuple):
    """An account identifier slot for one side of the transfer."""
    side: Direction


DEBIT_TEMPLATE = (
    Keyword(KEYWORD_FROM),
    Keyword(KEYWORD_ACCOUNT, "after FROM"),
    AccountSlot(Direction.DEBIT),
    Keyword(KEYWORD_FOR),
    Keyword(KEYWORD_CREDIT, "after FOR"),
    Keyword(KEYWORD_TO),
    Keyword(KEYWORD_ACCOUNT, "before credit account"),
    AccountSlot(Direction.CREDIT),
)

CREDIT_TEMPLATE = (
    Keyword(KEYWORD_TO),
    Keyword(KEYWORD_ACCOUNT, "after TO"),
    AccountSlot(Direction.CREDIT),
    Keyword(KEYWORD_FOR),
    Keyword(KEYWORD_DEBIT, "after FOR"),
    Keyword(KEYWORD_FROM),
    Keyword(KEYWORD_ACCOUNT, "before debit account"),
    AccountSlot(Direction.DEBIT),
)

TEMPLATES = {
    Direction.DEBIT: DEBIT_TEMPLATE,
    Direction.CREDIT: CREDIT_TEMPLATE,
}


# =============================================================================
# Cursor
# =============================================================================

class TokenCursor:
    """Forward-only cursor over the instruction tokens."""

    def __init__(self, tokens: Sequence[str]):
        self._tokens = tokens
        self._index = 0

    @property
    def position(self) -> int:
        return self._index

    def peek(self) -> Optional[str]:
        if self._index >= len(self._tokens):
            return None
        return self._tokens[self._index]

    def advance(self) -> Optional[str]:
        token = self.peek()
        self._index += 1
        return token

    def peek_keyword(self, word: str) -> bool:
        """True if the next token is the keyword, compared case-insensitively."""
        return (self.peek() or "").upper() == word


# =============================================================================
# Matcher
# =============================================================================

def _views_from_request(accounts: Sequence[Any]) -> list[AccountView]:
    """Unchanged views of the first supplied accounts that carry an id."""
    views = []
    for entry in accounts:
        if len(views) >= MAX_ACCOUNT_VIEWS:
            break
        account = Account.from_payload(entry)
        if account is not None and account.id:
            views.append(AccountView.unchanged(account))
    return views


def _match_direction(cursor: TokenCursor) -> Direction:
    verb = (cursor.advance() or "").upper()
    if verb == KEYWORD_DEBIT:
        return Direction.DEBIT
    if verb == KEYWORD_CREDIT:
        return Direction.CREDIT
    raise InstructionRejected(StatusCode.SY03, REASON_MALFORMED)


def _match_amount(cursor: TokenCursor, echo: InstructionEcho) -> int:
    token = cursor.advance()
    if not is_digit_string(token):
        raise InstructionRejected(StatusCode.AM01, REASON_INVALID_AMOUNT, echo=echo)
    return int(token)


def _match_currency(
    cursor: TokenCursor,
    echo: InstructionEcho,
    accounts: Sequence[Any],
) -> str:
    currency = (cursor.advance() or "").upper()
    echo.currency = currency
    if not is_supported_currency(currency):
        raise InstructionRejected(
            StatusCode.CU02,
            REASON_UNSUPPORTED_CURRENCY,
            accounts=_views_from_request(accounts),
            echo=echo,
        )
    return currency


def _match_template(
    cursor: TokenCursor,
    direction: Direction,
    echo: InstructionEcho,
) -> dict[Direction, str]:
    account_ids: dict[Direction, str] = {}
    for slot in TEMPLATES[direction]:
        if isinstance(slot, Keyword):
            if not cursor.peek_keyword(slot.word):
                raise InstructionRejected(StatusCode.SY01, slot.reason, echo=echo)
            cursor.advance()
            continue

        account_id = cursor.advance()
        if not is_valid_account_id(account_id):
            side = slot.side.value.lower()
            raise InstructionRejected(
                StatusCode.AC04,
                f"Invalid account ID format for {side} account",
                echo=echo,
            )
        account_ids[slot.side] = account_id
    return account_ids


def _match_date_clause(cursor: TokenCursor, echo: InstructionEcho) -> Optional[str]:
    """Parse the optional trailing ON <date> clause."""
    if not cursor.peek_keyword(KEYWORD_ON):
        return None
    cursor.advance()

    execute_on = parse_iso_date(cursor.advance())
    if execute_on is None:
        raise InstructionRejected(StatusCode.DT01, REASON_INVALID_DATE, echo=echo)
    return execute_on


def parse_instruction(
    tokens: Sequence[str],
    accounts: Sequence[Any] = (),
) -> Instruction:
    """
    Match tokens against the DEBIT or CREDIT template.

    Args:
        tokens: Output of the tokenizer.
        accounts: Raw account entries from the request, used only to report
            balances when the instruction currency is unsupported.

    Returns:
        The parsed Instruction. Tokens after a complete template are ignored.

    Raises:
        InstructionRejected: SY03, AM01, CU02, SY01, AC04 or DT01.
    """
    cursor = TokenCursor(tokens)
    direction = _match_direction(cursor)

    echo = InstructionEcho(type=direction.value)
    amount = _match_amount(cursor, echo)
    echo.amount = amount
    currency = _match_currency(cursor, echo, accounts)

    account_ids = _match_template(cursor, direction, echo)
    execute_on = _match_date_clause(cursor, echo)

    if cursor.position < len(tokens):
        logger.debug(f"Ignoring {len(tokens) - cursor.position} trailing token(s)")

    return Instruction(
        direction=direction,
        amount=amount,
        currency=currency,
        debit_account_id=account_ids[Direction.DEBIT],
        credit_account_id=account_ids[Direction.CREDIT],
        execute_on=execute_on,
    )
