"""
Environment variable loading for the wallet tracker.

- SOLANA_NETWORK: devnet | testnet | mainnet (default: devnet)
- SOLANA_RPC_URL: explicit RPC endpoint; overrides the network default
- CORS_ALLOW_ORIGINS: comma-separated origins allowed to call the HTTP API
- Loads .env from the project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is wallet_tracker/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEVNET_RPC_URL = "https://api.devnet.solana.com"
TESTNET_RPC_URL = "https://api.testnet.solana.com"
MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"

_NETWORK_RPC_URLS = {
    "devnet": DEVNET_RPC_URL,
    "testnet": TESTNET_RPC_URL,
    "mainnet": MAINNET_RPC_URL,
}


def load_tracker_env() -> None:
    """Load .env from project root. Existing environment variables win."""
    load_dotenv(_ENV_PATH, override=False)


def get_solana_network() -> str:
    """
    Return SOLANA_NETWORK from env: devnet | testnet | mainnet.
    mainnet-beta is accepted as mainnet; anything unknown falls back to devnet.
    """
    load_tracker_env()
    raw = (os.getenv("SOLANA_NETWORK") or "devnet").strip().lower()
    if raw == "mainnet-beta":
        return "mainnet"
    return raw if raw in _NETWORK_RPC_URLS else "devnet"


def get_solana_rpc_url() -> str:
    """
    Resolve the RPC URL.
    Order: SOLANA_RPC_URL > default public endpoint for SOLANA_NETWORK.
    """
    load_tracker_env()
    url = (os.getenv("SOLANA_RPC_URL") or "").strip()
    if url:
        return url
    return _NETWORK_RPC_URLS[get_solana_network()]


def mask_rpc_url(url: str) -> str:
    """Hide API keys embedded in provider URLs before logging."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url


def get_cors_allow_origins() -> list[str]:
    """CORS_ALLOW_ORIGINS as a comma-separated list; defaults to any origin."""
    load_tracker_env()
    raw = (os.getenv("CORS_ALLOW_ORIGINS") or "*").strip()
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]
