"""
Core cross-cutting pieces: error kinds and the exception hierarchy.
"""

from wallet_tracker.core.exceptions import (
    ErrorKind,
    FetchCancelled,
    InvalidAddress,
    RateLimited,
    TransientFetchError,
    WalletTrackerError,
)

__all__ = [
    "ErrorKind",
    "FetchCancelled",
    "InvalidAddress",
    "RateLimited",
    "TransientFetchError",
    "WalletTrackerError",
]
