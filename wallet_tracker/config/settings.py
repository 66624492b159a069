"""
Application settings.

Reads environment variables (after .env is loaded) into a frozen Settings
object. Invalid values raise ValueError naming the offending variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from wallet_tracker.config.env import (
    DEVNET_RPC_URL,
    get_solana_network,
    get_solana_rpc_url,
    load_tracker_env,
)

DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 1000
DEFAULT_COMMITMENT = "confirmed"
# "processed" is rejected by getSignaturesForAddress and getTransaction
COMMITMENT_LEVELS = ("confirmed", "finalized")
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0
DEFAULT_DETAIL_TIMEOUT_SEC = 15.0

BALANCE_INDEX_FEE_PAYER = "fee_payer"
BALANCE_INDEX_ACCOUNT_KEY = "account_key"
BALANCE_INDEX_MODES = (BALANCE_INDEX_FEE_PAYER, BALANCE_INDEX_ACCOUNT_KEY)


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    network: str = "devnet"
    rpc_url: str = DEVNET_RPC_URL
    history_limit: int = DEFAULT_HISTORY_LIMIT
    commitment: str = DEFAULT_COMMITMENT
    request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC
    detail_timeout_sec: float = DEFAULT_DETAIL_TIMEOUT_SEC
    balance_index_mode: str = BALANCE_INDEX_FEE_PAYER
    display_timezone: str | None = None

    def __post_init__(self) -> None:
        validate_limit(self.history_limit)
        if self.commitment not in COMMITMENT_LEVELS:
            raise ValueError(f"HISTORY_COMMITMENT must be one of {COMMITMENT_LEVELS}")
        if self.request_timeout_sec <= 0:
            raise ValueError("RPC_REQUEST_TIMEOUT_SEC must be positive")
        if self.detail_timeout_sec <= 0:
            raise ValueError("DETAIL_TIMEOUT_SEC must be positive")
        if self.balance_index_mode not in BALANCE_INDEX_MODES:
            raise ValueError(f"BALANCE_INDEX_MODE must be one of {BALANCE_INDEX_MODES}")
        if self.display_timezone:
            _load_zone(self.display_timezone)

    @property
    def tz(self) -> tzinfo | None:
        """Display timezone; None means the host's local zone."""
        return _load_zone(self.display_timezone) if self.display_timezone else None


def _load_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"DISPLAY_TIMEZONE is not a known zone: {name}") from e


def validate_limit(limit: int) -> int:
    if not (1 <= limit <= MAX_HISTORY_LIMIT):
        raise ValueError(f"HISTORY_LIMIT must be between 1 and {MAX_HISTORY_LIMIT}")
    return limit


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def get_settings() -> Settings:
    """Build Settings from the environment (and .env). Not cached; cheap to call."""
    load_tracker_env()
    return Settings(
        network=get_solana_network(),
        rpc_url=get_solana_rpc_url(),
        history_limit=_env_int("HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT),
        commitment=(os.getenv("HISTORY_COMMITMENT") or DEFAULT_COMMITMENT).strip().lower(),
        request_timeout_sec=_env_float("RPC_REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC),
        detail_timeout_sec=_env_float("DETAIL_TIMEOUT_SEC", DEFAULT_DETAIL_TIMEOUT_SEC),
        balance_index_mode=(os.getenv("BALANCE_INDEX_MODE") or BALANCE_INDEX_FEE_PAYER).strip().lower(),
        display_timezone=(os.getenv("DISPLAY_TIMEZONE") or "").strip() or None,
    )
