"""
Balance delta: net SOL change for the tracked account in one transaction.

fee_payer mode reads index 0 of pre/post balances, which is only the tracked
wallet when it is the fee payer. account_key mode looks the wallet up in the
transaction's account keys first.
"""

from __future__ import annotations

from decimal import Decimal

from wallet_tracker.config.settings import (
    BALANCE_INDEX_FEE_PAYER,
    BALANCE_INDEX_MODES,
)
from wallet_tracker.history.models import TransactionDetail

LAMPORTS_PER_SOL = 1_000_000_000
AMOUNT_QUANTUM = Decimal("0.000000001")
ZERO_AMOUNT = Decimal(0).quantize(AMOUNT_QUANTUM)


def lamports_to_sol(lamports: int) -> Decimal:
    return (Decimal(lamports) / LAMPORTS_PER_SOL).quantize(AMOUNT_QUANTUM)


def account_index(detail: TransactionDetail, address: str | None, mode: str) -> int | None:
    """Index into the balance arrays for the tracked account, or None if unknown."""
    if mode == BALANCE_INDEX_FEE_PAYER:
        return 0
    if not address:
        return None
    try:
        return detail.account_keys.index(address)
    except ValueError:
        return None


def balance_delta(
    detail: TransactionDetail,
    *,
    address: str | None = None,
    mode: str = BALANCE_INDEX_FEE_PAYER,
) -> Decimal:
    """
    (post - pre) / 1e9 for the tracked account, 9 fractional digits.
    Missing balances, unknown account or out-of-range index give 0.
    """
    if mode not in BALANCE_INDEX_MODES:
        raise ValueError(f"unknown balance index mode: {mode}")
    if not detail.has_balances:
        return ZERO_AMOUNT
    idx = account_index(detail, address, mode)
    pre, post = detail.pre_balances, detail.post_balances
    if idx is None or idx >= len(pre) or idx >= len(post):
        return ZERO_AMOUNT
    return lamports_to_sol(post[idx] - pre[idx])
