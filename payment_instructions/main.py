"""
Payment Instructions Service - Main Application

This module wires the payment instruction pipeline into a FastAPI
application.

The service parses instructions such as

    DEBIT 500 USD FROM ACCOUNT N90394 FOR CREDIT TO ACCOUNT N9122 ON 2999-12-31

validates them against the accounts supplied with the request, and returns
either the executed transaction, a scheduled transaction, or a typed
rejection. Nothing is persisted: callers apply the returned balances.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from payment_instructions.api import health
from payment_instructions.api import payment_instructions as payment_instructions_router
from payment_instructions.config import settings
from payment_instructions.observability import setup_logging, setup_tracing

logger = logging.getLogger(__name__)


# Application lifespan for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle.

    The service holds no connections; startup only configures logging.
    """
    # Startup
    setup_logging()
    logger.info(f"{settings.service_name} {settings.app_version} starting")

    yield

    # Shutdown
    logger.info(f"{settings.service_name} shutting down")


# Create FastAPI application
app = FastAPI(
    title="Payment Instructions Service",
    description="""
## Payment Instructions API

Parses human-readable payment instructions and executes them against the
account balances supplied with each request.

### Instruction Grammar

| Verb | Template |
|------|----------|
| DEBIT | `DEBIT <amount> <currency> FROM ACCOUNT <id> FOR CREDIT TO ACCOUNT <id> [ON YYYY-MM-DD]` |
| CREDIT | `CREDIT <amount> <currency> TO ACCOUNT <id> FOR DEBIT FROM ACCOUNT <id> [ON YYYY-MM-DD]` |

Supported currencies: NGN, USD, GBP, GHS.

### Status Codes

| Code | Meaning |
|------|---------|
| AP00 | Executed successfully |
| AP02 | Scheduled for future execution |
| SY01 | Missing required keyword |
| SY03 | Malformed instruction |
| AM01 | Invalid amount |
| CU01 | Account currency mismatch |
| CU02 | Unsupported currency |
| AC01 | Insufficient funds |
| AC02 | Debit and credit accounts are the same |
| AC03 | Account not found |
| AC04 | Invalid account identifier |
| DT01 | Invalid date format |
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=[
        {
            "name": "Health",
            "description": "Service health check",
        },
        {
            "name": "Payment Instructions",
            "description": "Parse, validate and execute payment instructions.",
        },
    ],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup OpenTelemetry tracing
if settings.otel_enabled:
    setup_tracing(app)
    FastAPIInstrumentor.instrument_app(app)

# =============================================================================
# API Routes
# =============================================================================

app.include_router(health.router, tags=["Health"])

app.include_router(
    payment_instructions_router.router,
    tags=["Payment Instructions"],
)


# =============================================================================
# Root endpoint
# =============================================================================

@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Payment Instructions Service",
        "version": settings.app_version,
        "documentation": "/docs",
    }
