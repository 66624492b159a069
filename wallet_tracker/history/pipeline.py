"""
History pipeline: address string in, Outcome out.

Idle -> Validating -> Fetching -> Resolving -> Assembling -> Success | NoHistory | Failed

Validation and the history fetch fail fast; detail lookups are contained per
record by the resolver. Nothing is retried here. A CancellationToken lets a
caller abandon a superseded fetch; outstanding lookups are cancelled and the
outcome is Failed(CANCELLED).
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from wallet_tracker.config.settings import Settings, get_settings, validate_limit
from wallet_tracker.core.exceptions import (
    FetchCancelled,
    InvalidAddress,
    TransientFetchError,
    WalletTrackerError,
)
from wallet_tracker.history.assembler import assemble
from wallet_tracker.history.fetcher import fetch_signatures
from wallet_tracker.history.models import (
    Failed,
    HistoryRequest,
    NoHistory,
    Outcome,
    PipelineState,
    Success,
)
from wallet_tracker.history.resolver import resolve_details
from wallet_tracker.history.rpc import SolanaRpcClient
from wallet_tracker.history.validator import validate_address
from wallet_tracker.tracker_logging import bind_wallet

T = TypeVar("T")

_TEST_NETWORKS = ("devnet", "testnet")


class CancellationToken:
    """One per invocation; cancel() abandons the fetch at its next suspension point."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


def no_history_message(network: str) -> str:
    msg = f"No transactions found for this address on {network}."
    if network in _TEST_NETWORKS:
        msg += " Try airdropping some SOL first."
    return msg


async def _unless_cancelled(aw: Awaitable[T], token: CancellationToken | None) -> T:
    """Await aw, or cancel it and raise FetchCancelled if token fires first."""
    if token is None:
        return await aw
    if token.cancelled:
        if asyncio.iscoroutine(aw):
            aw.close()
        raise FetchCancelled()
    work = asyncio.ensure_future(aw)
    waiter = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        work.cancel()
        raise
    finally:
        waiter.cancel()
    if work.done():
        return work.result()
    work.cancel()
    await asyncio.gather(work, return_exceptions=True)
    raise FetchCancelled()


class _Run:
    """State tracking for one invocation; logs every transition."""

    def __init__(self, address: str) -> None:
        self.state = PipelineState.IDLE
        self.log = bind_wallet(address)

    def advance(self, state: PipelineState) -> None:
        self.log.debug("history_pipeline_state", from_state=self.state.value, to_state=state.value)
        self.state = state


async def fetch_history(
    address: str,
    *,
    limit: int | None = None,
    settings: Settings | None = None,
    client: SolanaRpcClient | None = None,
    cancel_token: CancellationToken | None = None,
) -> Outcome:
    """
    Fetch and summarize the most recent transactions for address.

    Args:
        address: Raw user input; validated before any RPC call.
        limit: Number of signatures to fetch (default: settings.history_limit).
        settings: Resolved configuration (default: get_settings()).
        client: Shared RPC client; when None one is created and closed here.
        cancel_token: Optional token to abandon this invocation.

    Returns:
        Success(summaries) in RPC order (newest first), NoHistory(message), or
        Failed(kind, message). Never raises for pipeline errors.
    """
    settings = settings or get_settings()
    limit = validate_limit(limit if limit is not None else settings.history_limit)
    run = _Run(address)

    run.advance(PipelineState.VALIDATING)
    try:
        validated = validate_address(address)
    except InvalidAddress as e:
        return _fail(run, e)
    request = HistoryRequest(address=validated, limit=limit, commitment=settings.commitment)

    if client is None:
        async with SolanaRpcClient(
            settings.rpc_url, timeout_sec=settings.request_timeout_sec
        ) as owned:
            return await _execute(run, request, owned, settings, cancel_token)
    return await _execute(run, request, client, settings, cancel_token)


async def _execute(
    run: _Run,
    request: HistoryRequest,
    client: SolanaRpcClient,
    settings: Settings,
    cancel_token: CancellationToken | None,
) -> Outcome:
    try:
        run.advance(PipelineState.FETCHING)
        records = await _unless_cancelled(
            fetch_signatures(
                client,
                request.address,
                limit=request.limit,
                commitment=request.commitment,
            ),
            cancel_token,
        )
        if not records:
            run.advance(PipelineState.NO_HISTORY)
            run.log.info("history_empty", network=settings.network)
            return NoHistory(message=no_history_message(settings.network))

        run.advance(PipelineState.RESOLVING)
        details = await _unless_cancelled(
            resolve_details(
                client,
                records,
                commitment=request.commitment,
                timeout_sec=settings.detail_timeout_sec,
            ),
            cancel_token,
        )

        run.advance(PipelineState.ASSEMBLING)
        summaries = assemble(
            records,
            details,
            address=request.address.value,
            mode=settings.balance_index_mode,
            tz=settings.tz,
        )
    except WalletTrackerError as e:
        return _fail(run, e)

    run.advance(PipelineState.SUCCESS)
    run.log.info("history_fetched", transaction_count=len(summaries))
    return Success(summaries=tuple(summaries))


def _fail(run: _Run, error: WalletTrackerError) -> Failed:
    run.advance(PipelineState.FAILED)
    log = run.log.error if isinstance(error, TransientFetchError) else run.log.warning
    log(
        "history_fetch_failed",
        error_kind=error.kind.value,
        detail=error.detail,
    )
    return Failed(kind=error.kind, message=error.message)
