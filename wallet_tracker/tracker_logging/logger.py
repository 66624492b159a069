"""
Structured logging for history fetches.

Every record carries event_type plus wallet_id (first 8 chars of the address)
where a wallet is involved, so one fetch can be followed from
history_pipeline_state through history_signatures_fetched, the per-lookup
detail_lookup_* events and details_resolved, to history_fetched or
history_fetch_failed. RPC endpoints are logged through mask_rpc_url.

Records go to stderr: the CLI keeps stdout for its own text/JSON output.
LOG_FORMAT=json (default) or console; LOG_LEVEL filters.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601, UTC)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep a plain message alongside."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog(log_format: str | None = None, level: int | None = None) -> None:
    """Configure structlog processors and renderer. Called once on import."""
    fmt = (log_format or LOG_FORMAT).strip().lower()
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            LOG_LEVEL_VALUE if level is None else level
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger bound to the module name.

        logger = get_logger(__name__)
        logger.info("history_fetched", wallet_id=short_wallet(addr), signature_count=10)
    """
    return structlog.get_logger(name).bind(logger=name)


def short_wallet(wallet: str, keep: int = 8) -> str:
    """Truncate an address for log output."""
    wallet = wallet or ""
    return wallet if len(wallet) <= keep else wallet[:keep] + "..."


def bind_wallet(wallet_id: str) -> structlog.BoundLogger:
    """Return a logger with wallet_id bound to every subsequent call."""
    return get_logger("wallet_tracker").bind(wallet_id=short_wallet(wallet_id))
