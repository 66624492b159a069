"""
Balance delta: (post - pre) / 1e9 for the tracked account, 9 decimal places.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from wallet_tracker.config.settings import BALANCE_INDEX_ACCOUNT_KEY, BALANCE_INDEX_FEE_PAYER
from wallet_tracker.history.balance import balance_delta, lamports_to_sol
from wallet_tracker.history.models import TransactionDetail


def _detail(pre, post, keys=()):
    return TransactionDetail(
        signature="sig",
        block_time=1700000000,
        pre_balances=tuple(pre),
        post_balances=tuple(post),
        account_keys=tuple(keys),
    )


def test_half_sol_received():
    amount = balance_delta(_detail([1_000_000_000], [1_500_000_000]))
    assert amount == Decimal("0.5")
    assert f"{amount:.9f}" == "0.500000000"


def test_negative_delta_keeps_lamport_precision():
    # 0.1 SOL sent plus a 5000 lamport fee
    amount = balance_delta(_detail([2_000_000_000, 0], [1_899_995_000, 100_000_000]))
    assert amount == Decimal("-0.100005")
    assert str(amount) == "-0.100005000"


def test_single_lamport():
    assert balance_delta(_detail([0], [1])) == Decimal("0.000000001")


def test_missing_balances_give_zero():
    amount = balance_delta(TransactionDetail.unresolved("sig", "lookup failed"))
    assert amount == 0
    assert f"{amount:.9f}" == "0.000000000"


def test_empty_balance_arrays_give_zero():
    assert balance_delta(_detail([], [])) == 0


def test_fee_payer_mode_reads_index_zero_even_for_receiver():
    detail = _detail([5_000_000_000, 0], [3_999_995_000, 1_000_000_000], keys=["Sender", "Receiver"])
    assert balance_delta(detail, address="Receiver", mode=BALANCE_INDEX_FEE_PAYER) == Decimal("-1.000005")


def test_account_key_mode_resolves_tracked_index():
    detail = _detail([5_000_000_000, 0], [3_999_995_000, 1_000_000_000], keys=["Sender", "Receiver"])
    assert balance_delta(detail, address="Receiver", mode=BALANCE_INDEX_ACCOUNT_KEY) == Decimal("1")
    assert balance_delta(detail, address="Sender", mode=BALANCE_INDEX_ACCOUNT_KEY) == Decimal("-1.000005")


def test_account_key_mode_unknown_address_gives_zero():
    detail = _detail([10], [20], keys=["Someone"])
    assert balance_delta(detail, address="Other", mode=BALANCE_INDEX_ACCOUNT_KEY) == 0
    assert balance_delta(detail, address=None, mode=BALANCE_INDEX_ACCOUNT_KEY) == 0


def test_unknown_mode_rejected():
    with pytest.raises(ValueError, match="unknown balance index mode"):
        balance_delta(_detail([0], [0]), mode="last")


def test_lamports_to_sol():
    assert lamports_to_sol(1_000_000_000) == Decimal("1")
    assert lamports_to_sol(-250_000_000) == Decimal("-0.25")
