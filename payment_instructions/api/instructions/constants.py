"""
Payment Instruction Constants

This module contains all constant values used while processing payment
instructions, including status codes, status reasons, grammar keywords
and the set of supported currencies.
"""

from enum import Enum


# =============================================================================
# Grammar Constants
# =============================================================================

MIN_TOKEN_COUNT = 7  # Shortest token run that can still be a valid instruction

KEYWORD_DEBIT = "DEBIT"
KEYWORD_CREDIT = "CREDIT"
KEYWORD_FROM = "FROM"
KEYWORD_TO = "TO"
KEYWORD_ACCOUNT = "ACCOUNT"
KEYWORD_FOR = "FOR"
KEYWORD_ON = "ON"

ACCOUNT_ID_SYMBOLS = frozenset("-.@")

DATE_LENGTH = 10
DATE_SEPARATOR = "-"
DATE_SEPARATOR_POSITIONS = (4, 7)

# =============================================================================
# Currencies
# =============================================================================

SUPPORTED_CURRENCIES = ("NGN", "USD", "GBP", "GHS")

# Views are capped at the two accounts an instruction can touch
MAX_ACCOUNT_VIEWS = 2


# =============================================================================
# Status Codes
# =============================================================================

class Direction(str, Enum):
    """Which side of the transfer the instruction names first."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class OutcomeStatus(str, Enum):
    """Terminal status of a processed instruction."""
    FAILED = "failed"
    PENDING = "pending"
    SUCCESSFUL = "successful"


class StatusCode(str, Enum):
    """
    Status codes returned for every processed instruction.

    AP* codes are outcomes, every other code is a rejection.
    """

    # Syntax
    SY01 = "SY01"  # Missing or out-of-place keyword
    SY03 = "SY03"  # Malformed instruction

    # Amount
    AM01 = "AM01"  # Amount is not a non-negative integer

    # Currency
    CU01 = "CU01"  # Account currency mismatch
    CU02 = "CU02"  # Unsupported currency

    # Accounts
    AC01 = "AC01"  # Insufficient funds
    AC02 = "AC02"  # Debit and credit account are the same
    AC03 = "AC03"  # Account not found
    AC04 = "AC04"  # Invalid account identifier

    # Dates
    DT01 = "DT01"  # Invalid date format

    # Outcomes
    AP00 = "AP00"  # Executed
    AP02 = "AP02"  # Scheduled


# =============================================================================
# Status Reasons
# =============================================================================

REASON_MALFORMED = "Malformed instruction"
REASON_MALFORMED_FALLBACK = "Malformed instruction: unable to parse keywords"
REASON_INVALID_AMOUNT = "Amount must be a positive integer"
REASON_UNSUPPORTED_CURRENCY = (
    "Unsupported currency. Only NGN, USD, GBP, and GHS are supported"
)
REASON_INVALID_DATE = "Invalid date format"
REASON_ACCOUNT_NOT_FOUND = "Account not found"
REASON_CURRENCY_MISMATCH = "Account currency mismatch"
REASON_SAME_ACCOUNT = "Debit and credit accounts cannot be the same"
REASON_INSUFFICIENT_FUNDS = "Insufficient funds in debit account"
REASON_EXECUTED = "Transaction executed successfully"
REASON_SCHEDULED = "Transaction scheduled for future execution"

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
