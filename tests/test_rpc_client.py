"""
SolanaRpcClient error classification and request shape, against a fake node.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from tests.fakes import FakeSolanaRpc, make_sig, sig_item, tx_result
from wallet_tracker.core.exceptions import (
    ErrorKind,
    InvalidAddress,
    RateLimited,
    TransientFetchError,
)
from wallet_tracker.history.rpc import SolanaRpcClient, SolanaRpcError


def _run(fake: FakeSolanaRpc, method: str, *args, **kwargs):
    async def scenario():
        async with fake.client() as client:
            return await getattr(client, method)(*args, **kwargs)

    return asyncio.run(scenario())


def test_get_signatures_request_shape(wallet):
    fake = FakeSolanaRpc(signatures=[sig_item(make_sig(1), 10)])
    result = _run(fake, "get_signatures_for_address", wallet, limit=10, commitment="confirmed")

    assert result[0]["signature"] == make_sig(1)
    method, params = fake.calls[0]
    assert method == "getSignaturesForAddress"
    assert params == [wallet, {"limit": 10, "commitment": "confirmed"}]


def test_get_transaction_request_shape():
    sig = make_sig(1)
    fake = FakeSolanaRpc(transactions={sig: tx_result([1], [2])})
    result = _run(fake, "get_transaction", sig, commitment="finalized")

    assert result["meta"]["postBalances"] == [2]
    method, params = fake.calls[0]
    assert method == "getTransaction"
    assert params == [
        sig,
        {"encoding": "json", "commitment": "finalized", "maxSupportedTransactionVersion": 0},
    ]


def test_get_transaction_not_found_returns_none():
    assert _run(FakeSolanaRpc(), "get_transaction", make_sig(9)) is None


def test_http_429_is_rate_limited(wallet):
    fake = FakeSolanaRpc()
    fake.history_status = 429
    fake.history_headers = {"Retry-After": "3"}
    with pytest.raises(RateLimited) as exc:
        _run(fake, "get_signatures_for_address", wallet, limit=10)
    assert exc.value.kind is ErrorKind.RATE_LIMITED
    assert exc.value.retry_after == 3.0
    assert not isinstance(exc.value, TransientFetchError)


def test_http_500_is_transient(wallet):
    fake = FakeSolanaRpc()
    fake.history_status = 503
    with pytest.raises(TransientFetchError, match="HTTP 503"):
        _run(fake, "get_signatures_for_address", wallet, limit=10)


def test_transport_error_is_transient(wallet):
    fake = FakeSolanaRpc()
    fake.history_exception = httpx.ConnectError("connection refused")
    with pytest.raises(TransientFetchError, match="transport error"):
        _run(fake, "get_signatures_for_address", wallet, limit=10)


def test_timeout_is_transient(wallet):
    fake = FakeSolanaRpc()
    fake.history_exception = httpx.ReadTimeout("read timed out")
    with pytest.raises(TransientFetchError, match="timed out"):
        _run(fake, "get_signatures_for_address", wallet, limit=10)


def test_invalid_params_error_is_invalid_address(wallet):
    fake = FakeSolanaRpc()
    fake.history_error = {"code": -32602, "message": "Invalid param: WrongSize"}
    with pytest.raises(InvalidAddress):
        _run(fake, "get_signatures_for_address", wallet, limit=10)


def test_other_rpc_error_is_transient(wallet):
    fake = FakeSolanaRpc()
    fake.history_error = {"code": -32005, "message": "Node is behind"}
    with pytest.raises(SolanaRpcError) as exc:
        _run(fake, "get_signatures_for_address", wallet, limit=10)
    assert exc.value.code == -32005
    assert exc.value.kind is ErrorKind.TRANSIENT_FETCH_ERROR
    assert "Node is behind" in exc.value.message


def test_rate_limit_message_text_is_not_used_for_classification(wallet):
    fake = FakeSolanaRpc()
    fake.history_error = {"code": -32000, "message": "429 Too Many Requests"}
    with pytest.raises(TransientFetchError) as exc:
        _run(fake, "get_signatures_for_address", wallet, limit=10)
    assert exc.value.kind is ErrorKind.TRANSIENT_FETCH_ERROR


def test_empty_rpc_url_rejected():
    with pytest.raises(ValueError, match="non-empty"):
        SolanaRpcClient("  ")


def test_invalid_url_is_transient(wallet):
    async def scenario():
        async with SolanaRpcClient("http://[::1", transport=httpx.MockTransport(lambda r: httpx.Response(200))) as client:
            return await client.get_signatures_for_address(wallet, limit=10)

    with pytest.raises(TransientFetchError, match="transport error"):
        asyncio.run(scenario())
