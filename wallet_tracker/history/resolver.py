"""
Detail resolver: concurrent getTransaction fan-out with per-lookup isolation.

All lookups are started together and joined with asyncio.gather; each one is
bounded by its own timeout. A lookup that fails, times out, returns null, or
returns something unparseable becomes an unresolved TransactionDetail for that
index instead of failing the batch. Output is aligned index-for-index with
the input records.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from wallet_tracker.config.settings import DEFAULT_COMMITMENT, DEFAULT_DETAIL_TIMEOUT_SEC
from wallet_tracker.core.exceptions import WalletTrackerError
from wallet_tracker.history.models import SignatureInfo, TransactionDetail
from wallet_tracker.history.rpc import SolanaRpcClient
from wallet_tracker.tracker_logging import get_logger

logger = get_logger(__name__)


async def _lookup(
    client: SolanaRpcClient,
    signature: str,
    *,
    commitment: str,
    timeout_sec: float,
) -> TransactionDetail:
    try:
        raw = await asyncio.wait_for(
            client.get_transaction(signature, commitment=commitment),
            timeout=timeout_sec,
        )
    except asyncio.TimeoutError:
        logger.warning("detail_lookup_timeout", signature=signature[:16], timeout_sec=timeout_sec)
        return TransactionDetail.unresolved(signature, f"lookup timed out after {timeout_sec}s")
    except WalletTrackerError as e:
        logger.warning("detail_lookup_failed", signature=signature[:16], error=str(e))
        return TransactionDetail.unresolved(signature, str(e))
    try:
        detail = TransactionDetail.from_rpc_result(signature, raw)
    except Exception as e:
        logger.warning("detail_parse_failed", signature=signature[:16], error=repr(e))
        return TransactionDetail.unresolved(signature, "malformed transaction payload")
    if detail.error:
        logger.info("detail_lookup_degraded", signature=signature[:16], reason=detail.error)
    return detail


async def resolve_details(
    client: SolanaRpcClient,
    records: Sequence[SignatureInfo],
    *,
    commitment: str = DEFAULT_COMMITMENT,
    timeout_sec: float = DEFAULT_DETAIL_TIMEOUT_SEC,
) -> list[TransactionDetail]:
    """Resolve every record concurrently; returns one detail per record, same order."""
    if not records:
        return []
    details = await asyncio.gather(
        *(
            _lookup(client, r.signature, commitment=commitment, timeout_sec=timeout_sec)
            for r in records
        )
    )
    resolved = sum(1 for d in details if d.has_balances)
    logger.info(
        "details_resolved",
        requested=len(records),
        resolved=resolved,
        degraded=len(records) - resolved,
    )
    return list(details)
