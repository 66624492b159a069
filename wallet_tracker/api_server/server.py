"""
FastAPI server: HTTP surface for the wallet history widget.

GET /wallet/{address}/transactions runs the history pipeline once and maps
its outcome to a response: 200 for success and for "no history", 400 for an
invalid address, 429 when the RPC node rate-limits, 502 for other fetch errors.
"""

from __future__ import annotations

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from wallet_tracker import __version__
from wallet_tracker.config import get_settings
from wallet_tracker.config.env import get_cors_allow_origins
from wallet_tracker.config.settings import MAX_HISTORY_LIMIT
from wallet_tracker.core.exceptions import ErrorKind
from wallet_tracker.history import Failed, NoHistory, fetch_history
from wallet_tracker.tracker_logging import get_logger, short_wallet

logger = get_logger(__name__)

_FAILURE_STATUS = {
    ErrorKind.INVALID_ADDRESS: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.TRANSIENT_FETCH_ERROR: 502,
    ErrorKind.CANCELLED: 503,
}


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class TransactionItem(BaseModel):
    signature: str = Field(..., description="Transaction signature (base58)")
    display_time: str = Field(..., description="Local block time, or 'Unknown'")
    amount: str = Field(..., description="SOL balance change, 9 decimal places")
    slot: int | None = Field(None, description="Slot reported by getSignaturesForAddress")
    failed: bool = Field(False, description="True if the transaction failed on chain")


class HistoryResponse(BaseModel):
    """GET /wallet/{address}/transactions success / no-history body."""

    wallet: str = Field(..., description="Wallet address as requested")
    network: str = Field(..., description="devnet | testnet | mainnet")
    status: str = Field(..., description="success | no_history")
    message: str | None = Field(None, description="Guidance text when status is no_history")
    transactions: list[TransactionItem] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    status: str = Field("failed")
    error_kind: str = Field(..., description="invalid_address | rate_limited | transient_fetch_error | cancelled")
    message: str = Field(..., description="User-facing error message")


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Wallet Tracker API",
    description="Recent Solana transactions and SOL balance changes for one wallet.",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_allow_origins(),
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get(
    "/wallet/{address}/transactions",
    response_model=HistoryResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def wallet_transactions(
    address: str,
    limit: int | None = Query(None, ge=1, le=MAX_HISTORY_LIMIT),
):
    """Fetch the most recent transactions for address (newest first)."""
    settings = get_settings()
    logger.info("api_history_requested", wallet_id=short_wallet(address), limit=limit)
    outcome = await fetch_history(address, limit=limit, settings=settings)

    if isinstance(outcome, Failed):
        body = ErrorResponse(error_kind=outcome.kind.value, message=outcome.message)
        return JSONResponse(
            status_code=_FAILURE_STATUS.get(outcome.kind, 502),
            content=body.model_dump(),
        )
    if isinstance(outcome, NoHistory):
        return HistoryResponse(
            wallet=address,
            network=settings.network,
            status="no_history",
            message=outcome.message,
        )
    return HistoryResponse(
        wallet=address,
        network=settings.network,
        status="success",
        transactions=[TransactionItem(**s.to_dict()) for s in outcome.summaries],
    )
