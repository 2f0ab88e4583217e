"""
Payment Instructions API Endpoint

Accepts a payment instruction together with the account records it refers
to and returns the executed, scheduled or rejected result.

The raw JSON body is handed to the processor verbatim. Rejections come back
as 400 with the result body; anything unexpected is answered with the
generic SY03 result so no internal detail leaks to the caller.
"""

from fastapi import APIRouter, Depends, Request, Response
import logging

from .instructions import malformed_result, process_payment_instruction
from .instructions.constants import HTTP_BAD_REQUEST, REASON_MALFORMED_FALLBACK
from .instructions.resolver import today_utc
from .schemas import PaymentInstructionRequest, PaymentInstructionResponse

router = APIRouter()
logger = logging.getLogger(__name__)


def _fallback_response(response: Response) -> PaymentInstructionResponse:
    response.status_code = HTTP_BAD_REQUEST
    return PaymentInstructionResponse.model_validate(
        malformed_result(REASON_MALFORMED_FALLBACK).to_dict()
    )


@router.post(
    "/payment-instructions",
    response_model=PaymentInstructionResponse,
    responses={400: {"model": PaymentInstructionResponse}},
    summary="Process a payment instruction",
    description="""
    Parses and executes a payment instruction of the form:

    - `DEBIT <amount> <currency> FROM ACCOUNT <id> FOR CREDIT TO ACCOUNT <id> [ON YYYY-MM-DD]`
    - `CREDIT <amount> <currency> TO ACCOUNT <id> FOR DEBIT FROM ACCOUNT <id> [ON YYYY-MM-DD]`

    Returns 200 when the instruction executed (AP00) or was scheduled for a
    future date (AP02), and 400 with the status code of the first failed
    check otherwise. Balances are computed, never stored.
    """,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": PaymentInstructionRequest.model_json_schema(),
                },
            },
        },
    },
)
async def process_payment_instructions(
    request: Request,
    response: Response,
    today: str = Depends(today_utc),
) -> PaymentInstructionResponse:
    """Process a payment instruction against the supplied accounts."""
    try:
        payload = await request.json()
    except ValueError as e:
        logger.info(f"Rejected unreadable request body: {e}")
        return _fallback_response(response)

    if not isinstance(payload, dict):
        logger.info(f"Rejected request body of type {type(payload).__name__}")
        return _fallback_response(response)

    try:
        result = process_payment_instruction(payload, today=today)
        body = PaymentInstructionResponse.model_validate(result.body.to_dict())
    except Exception:
        logger.exception("Unexpected error while processing payment instruction")
        return _fallback_response(response)

    response.status_code = result.http_status
    return body
