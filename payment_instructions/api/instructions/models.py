"""
Payment Instruction Models

Value objects passed between the processing stages. All of them are built
fresh for each instruction and discarded once the result is rendered.
"""

from dataclasses import dataclass, field, replace
from typing import Any, NamedTuple, Optional, Sequence

from .constants import (
    MAX_ACCOUNT_VIEWS,
    Direction,
    OutcomeStatus,
    StatusCode,
    HTTP_OK,
    HTTP_BAD_REQUEST,
)


@dataclass(frozen=True)
class Account:
    """An account record as supplied by the caller."""
    id: Any
    balance: Any
    currency: str  # upper-cased

    @classmethod
    def from_payload(cls, entry: Any) -> Optional["Account"]:
        """Build an account from a raw request entry, or None for non-objects."""
        if not isinstance(entry, dict):
            return None
        return cls(
            id=entry.get("id"),
            balance=entry.get("balance"),
            currency=(entry.get("currency") or "").upper(),
        )


@dataclass(frozen=True)
class AccountView:
    """Account as reported back to the caller."""
    id: Any
    balance: Any
    balance_before: Any
    currency: str

    @classmethod
    def unchanged(cls, account: Account) -> "AccountView":
        return cls(
            id=account.id,
            balance=account.balance,
            balance_before=account.balance,
            currency=account.currency,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "balance": self.balance,
            "balance_before": self.balance_before,
            "currency": self.currency,
        }


def collect_views(
    accounts: Sequence[Any],
    account_ids: Sequence[Any],
    balances: Optional[dict] = None,
    limit: int = MAX_ACCOUNT_VIEWS,
) -> list[AccountView]:
    """
    Build views for the request accounts whose id is in account_ids.

    Views keep the original request order and stop at limit entries.
    balances maps an account id to its post-transaction balance; accounts
    without an entry are reported unchanged.
    """
    views: list[AccountView] = []
    for entry in accounts:
        if not isinstance(entry, dict) or entry.get("id") not in account_ids:
            continue
        account = Account.from_payload(entry)
        view = AccountView.unchanged(account)
        if balances and account.id in balances:
            view = replace(view, balance=balances[account.id])
        views.append(view)
        if len(views) >= limit:
            break
    return views


@dataclass(frozen=True)
class Instruction:
    """A fully parsed payment instruction."""
    direction: Direction
    amount: int
    currency: str
    debit_account_id: str
    credit_account_id: str
    execute_on: Optional[str] = None  # YYYY-MM-DD


@dataclass
class InstructionEcho:
    """
    The parts of an instruction echoed back in every result.

    Fields are filled in as the grammar matcher gets further, so a
    rejection reports exactly how much of the instruction was understood.
    """
    type: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    debit_account: Optional[str] = None
    credit_account: Optional[str] = None
    execute_by: Optional[str] = None

    @classmethod
    def from_instruction(cls, instruction: Instruction) -> "InstructionEcho":
        return cls(
            type=instruction.direction.value,
            amount=instruction.amount,
            currency=instruction.currency,
            debit_account=instruction.debit_account_id,
            credit_account=instruction.credit_account_id,
            execute_by=instruction.execute_on,
        )


class InstructionRejected(Exception):
    """
    Raised by a processing stage to reject the instruction.

    Never escapes the processor: it is rendered into a failed result.
    """

    def __init__(
        self,
        status_code: StatusCode,
        reason: str,
        accounts: Optional[list[AccountView]] = None,
        echo: Optional[InstructionEcho] = None,
    ):
        super().__init__(f"{status_code.value}: {reason}")
        self.status_code = status_code
        self.reason = reason
        self.accounts = accounts or []
        self.echo = echo


@dataclass
class InstructionResult:
    """Outcome of processing one instruction."""
    status: OutcomeStatus
    status_code: StatusCode
    status_reason: str
    echo: InstructionEcho = field(default_factory=InstructionEcho)
    accounts: list[AccountView] = field(default_factory=list)

    @property
    def http_status(self) -> int:
        """200 for accepted outcomes, 400 for every rejection."""
        if self.status == OutcomeStatus.FAILED:
            return HTTP_BAD_REQUEST
        return HTTP_OK

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "type": self.echo.type,
            "amount": self.echo.amount,
            "currency": self.echo.currency,
            "debit_account": self.echo.debit_account,
            "credit_account": self.echo.credit_account,
            "execute_by": self.echo.execute_by,
            "status": self.status.value,
            "status_reason": self.status_reason,
            "status_code": self.status_code.value,
            "accounts": [view.to_dict() for view in self.accounts],
        }


class ProcessingResult(NamedTuple):
    """HTTP status hint paired with the result body."""
    http_status: int
    body: InstructionResult
