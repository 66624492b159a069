"""
fetch_history CLI: rendering and exit codes, with the pipeline driven by a fake node.
"""

from __future__ import annotations

import io
import json

import pytest

from tests.fakes import FakeSolanaRpc, make_sig, sig_item, tx_result


@pytest.fixture
def fake_node(monkeypatch):
    import wallet_tracker.history.pipeline as pipeline

    fake = FakeSolanaRpc()
    monkeypatch.setattr(pipeline, "SolanaRpcClient", lambda rpc_url, *, timeout_sec: fake.client())
    return fake


def _ledger(fake: FakeSolanaRpc) -> None:
    sig = make_sig(0)
    fake.signatures = [sig_item(sig, 11)]
    fake.transactions = {sig: tx_result([2_000_000_000], [1_750_000_000], block_time=1700000000)}


def test_text_output(fake_node, wallet, monkeypatch):
    from wallet_tracker.tools.fetch_history import main

    monkeypatch.setenv("DISPLAY_TIMEZONE", "UTC")
    _ledger(fake_node)
    out = io.StringIO()
    assert main([wallet], out=out) == 0
    text = out.getvalue()
    assert "Recent Transactions (devnet)" in text
    assert f"Signature: {make_sig(0)}" in text
    assert "Time: 2023-11-14 22:13:20" in text
    assert "Amount: -0.250000000 SOL" in text


def test_json_output(fake_node, wallet):
    from wallet_tracker.tools.fetch_history import main

    _ledger(fake_node)
    out = io.StringIO()
    assert main([wallet, "--json", "--limit", "5"], out=out) == 0
    payload = json.loads(out.getvalue())
    assert payload["status"] == "success"
    assert payload["transactions"][0]["amount"] == "-0.250000000"
    assert fake_node.calls[0][1][1]["limit"] == 5


def test_no_history_exit_zero(fake_node, wallet):
    from wallet_tracker.tools.fetch_history import main

    out = io.StringIO()
    assert main([wallet], out=out) == 0
    assert "No transactions found for this address on devnet" in out.getvalue()


def test_invalid_address_exit_one(fake_node):
    from wallet_tracker.tools.fetch_history import main

    out = io.StringIO()
    assert main(["bad-pubkey", "--json"], out=out) == 1
    assert json.loads(out.getvalue())["error_kind"] == "invalid_address"
    assert fake_node.calls == []


def test_bad_limit_exit_two(fake_node, wallet):
    from wallet_tracker.tools.fetch_history import main

    assert main([wallet, "--limit", "5000"], out=io.StringIO()) == 2


def test_unparseable_rpc_url_exit_one(wallet):
    from wallet_tracker.tools.fetch_history import main

    out = io.StringIO()
    assert main([wallet, "--json", "--rpc-url", "http://[::1"], out=out) == 1
    assert json.loads(out.getvalue())["error_kind"] == "transient_fetch_error"
