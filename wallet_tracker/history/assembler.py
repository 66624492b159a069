"""
Result assembler: signature + detail pairs to TransactionSummary rows.

Keeps the fetch order exactly; no sorting, filtering or deduplication.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Sequence

from wallet_tracker.config.settings import BALANCE_INDEX_FEE_PAYER
from wallet_tracker.history.balance import balance_delta
from wallet_tracker.history.models import (
    UNKNOWN_TIME,
    SignatureInfo,
    TransactionDetail,
    TransactionSummary,
)

DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_block_time(block_time: int | None, tz: tzinfo | None = None) -> str:
    """Unix seconds to a display string in tz (host local zone if None); "Unknown" if absent."""
    if not block_time:
        return UNKNOWN_TIME
    dt = datetime.fromtimestamp(block_time, tz=timezone.utc).astimezone(tz)
    return dt.strftime(DISPLAY_TIME_FORMAT)


def assemble(
    records: Sequence[SignatureInfo],
    details: Sequence[TransactionDetail],
    *,
    address: str | None = None,
    mode: str = BALANCE_INDEX_FEE_PAYER,
    tz: tzinfo | None = None,
) -> list[TransactionSummary]:
    if len(records) != len(details):
        raise ValueError(
            f"records and details are misaligned ({len(records)} vs {len(details)})"
        )
    summaries: list[TransactionSummary] = []
    for record, detail in zip(records, details):
        if detail.signature != record.signature:
            raise ValueError(f"detail for {detail.signature} paired with {record.signature}")
        summaries.append(
            TransactionSummary(
                signature=record.signature,
                display_time=format_block_time(detail.block_time, tz),
                amount=balance_delta(detail, address=address, mode=mode),
                slot=record.slot,
                failed=record.err is not None,
            )
        )
    return summaries
