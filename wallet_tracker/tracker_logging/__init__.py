"""
Structured logging for the wallet tracker.

Use get_logger() in every module; JSON or console output via LOG_FORMAT.
"""

from wallet_tracker.tracker_logging.logger import (
    bind_wallet,
    configure_structlog,
    get_logger,
    short_wallet,
)

__all__ = ["bind_wallet", "configure_structlog", "get_logger", "short_wallet"]
