"""
History fetcher: the most recent signatures for one validated address.

One getSignaturesForAddress call; results stay newest-first as the RPC
returns them. An empty list is a valid answer (the pipeline turns it into
NoHistory). RPC errors propagate as typed exceptions from the client.
"""

from __future__ import annotations

from wallet_tracker.config.settings import DEFAULT_COMMITMENT, DEFAULT_HISTORY_LIMIT, validate_limit
from wallet_tracker.history.models import Address, SignatureInfo
from wallet_tracker.history.rpc import SolanaRpcClient
from wallet_tracker.tracker_logging import get_logger, short_wallet

logger = get_logger(__name__)


async def fetch_signatures(
    client: SolanaRpcClient,
    address: Address,
    *,
    limit: int = DEFAULT_HISTORY_LIMIT,
    commitment: str = DEFAULT_COMMITMENT,
) -> list[SignatureInfo]:
    """Return up to limit SignatureInfo records for address, newest first."""
    validate_limit(limit)
    raw = await client.get_signatures_for_address(
        address.value, limit=limit, commitment=commitment
    )
    infos: list[SignatureInfo] = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("signature"), str):
            logger.debug("history_skip_item", reason="missing_signature")
            continue
        infos.append(SignatureInfo.from_rpc_item(item))
    logger.info(
        "history_signatures_fetched",
        wallet_id=short_wallet(address.value),
        signature_count=len(infos),
        newest_slot=infos[0].slot if infos else None,
    )
    return infos
