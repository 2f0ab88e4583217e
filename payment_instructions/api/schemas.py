"""
Centralized Pydantic Schemas for the Payment Instructions API

This module provides a single source of truth for the request and response
models of the HTTP layer. The processing pipeline itself works on plain
value objects (see api/instructions/models.py); these models only describe
and validate what goes over the wire.
"""

from pydantic import BaseModel, Field
from typing import Optional


# =============================================================================
# 1. Payment Instructions
# =============================================================================

class AccountInput(BaseModel):
    """Account record supplied with an instruction."""
    id: str
    balance: int = Field(description="Balance in minor currency units")
    currency: str = Field(description="3-letter currency code, any case")


class PaymentInstructionRequest(BaseModel):
    """
    Request body for POST /payment-instructions.

    Documentation only: the endpoint reads the raw JSON body so that
    malformed payloads are answered with a SY03 result instead of a 422.
    """
    accounts: list[AccountInput] = []
    instruction: str = Field(
        examples=["DEBIT 500 USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122"]
    )


class AccountViewResponse(BaseModel):
    """Account balance before and after the instruction."""
    id: str | int
    balance: Optional[int | float]
    balance_before: Optional[int | float]
    currency: str


class PaymentInstructionResponse(BaseModel):
    """Result of processing a payment instruction."""
    type: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    debit_account: Optional[str] = None
    credit_account: Optional[str] = None
    execute_by: Optional[str] = None
    status: str
    status_reason: str
    status_code: str
    accounts: list[AccountViewResponse] = Field(default_factory=list, max_length=2)


# =============================================================================
# 2. Operational
# =============================================================================

class HealthResponse(BaseModel):
    """Liveness check response."""
    status: str
    service: str
    timestamp: float
