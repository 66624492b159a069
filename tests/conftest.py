"""
Pytest fixtures for wallet tracker tests. RPC is faked; no network access.
"""

from __future__ import annotations

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from wallet_tracker.config.settings import Settings

SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host configuration out of the tests."""
    for name in (
        "SOLANA_NETWORK",
        "SOLANA_RPC_URL",
        "HISTORY_LIMIT",
        "HISTORY_COMMITMENT",
        "RPC_REQUEST_TIMEOUT_SEC",
        "DETAIL_TIMEOUT_SEC",
        "BALANCE_INDEX_MODE",
        "DISPLAY_TIMEZONE",
        "CORS_ALLOW_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def wallet() -> str:
    """A freshly generated ed25519 public key (always on curve)."""
    return str(Keypair().pubkey())


@pytest.fixture
def off_curve_wallet() -> str:
    """A program-derived address: valid base58, 32 bytes, but off the curve."""
    pda, _bump = Pubkey.find_program_address([b"wallet-tracker"], Pubkey.from_string(SYSTEM_PROGRAM_ID))
    return str(pda)


@pytest.fixture
def settings() -> Settings:
    return Settings(display_timezone="UTC")
