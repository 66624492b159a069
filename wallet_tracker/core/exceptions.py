"""
Application-level exceptions.

Every failure the history pipeline can surface carries an ErrorKind and a
user-facing message. Classification happens where structured data is
available (HTTP status, JSON-RPC error code), never by matching message text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ADDRESS = "invalid_address"
    RATE_LIMITED = "rate_limited"
    TRANSIENT_FETCH_ERROR = "transient_fetch_error"
    CANCELLED = "cancelled"


class WalletTrackerError(Exception):
    """Base class; subclasses set kind and a default user message."""

    kind: ErrorKind = ErrorKind.TRANSIENT_FETCH_ERROR
    user_message: str = "Error fetching transactions."

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return self.user_message


class InvalidAddress(WalletTrackerError):
    """Input is not a base58 ed25519 public key (or the RPC node rejected it)."""

    kind = ErrorKind.INVALID_ADDRESS
    user_message = "Invalid wallet address. Please check and try again."


class RateLimited(WalletTrackerError):
    """Upstream answered HTTP 429. Not retried here; the caller decides."""

    kind = ErrorKind.RATE_LIMITED
    user_message = "Too many requests. Please wait a moment and try again."

    def __init__(self, detail: str | None = None, retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(detail)


class TransientFetchError(WalletTrackerError):
    """Network, timeout or RPC-level failure; safe to retry by re-invoking."""

    kind = ErrorKind.TRANSIENT_FETCH_ERROR

    @property
    def message(self) -> str:
        return f"Error fetching transactions: {self.detail or 'unknown error'}"


class FetchCancelled(WalletTrackerError):
    kind = ErrorKind.CANCELLED
    user_message = "Fetch cancelled."
