"""
Async Solana JSON-RPC client.

Responsibilities:
- Hold one httpx.AsyncClient shared by the history fetch and every detail lookup.
- Build getSignaturesForAddress / getTransaction request bodies.
- Classify failures at the boundary from structured data: HTTP 429 ->
  RateLimited, transport / timeout / non-2xx / JSON-RPC error -> TransientFetchError,
  JSON-RPC "invalid params" on an address -> InvalidAddress.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from wallet_tracker.config.env import mask_rpc_url
from wallet_tracker.config.settings import DEFAULT_COMMITMENT, DEFAULT_REQUEST_TIMEOUT_SEC
from wallet_tracker.core.exceptions import InvalidAddress, RateLimited, TransientFetchError
from wallet_tracker.tracker_logging import get_logger

logger = get_logger(__name__)

# JSON-RPC 2.0 "Invalid params"
RPC_INVALID_PARAMS = -32602

_request_ids = itertools.count(1)


def _next_id() -> int:
    return next(_request_ids)


def build_rpc_body(method: str, params: list[Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": _next_id(), "method": method, "params": params}


def _retry_after(resp: httpx.Response) -> float | None:
    raw = resp.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


class SolanaRpcError(TransientFetchError):
    """JSON-RPC error object returned with HTTP 200."""

    def __init__(self, code: int | None, rpc_message: str) -> None:
        self.code = code
        self.rpc_message = rpc_message
        super().__init__(f"Solana RPC error: {rpc_message} (code={code})")


class SolanaRpcClient:
    """
    Minimal async client for the two calls the history pipeline needs.

    Use as an async context manager, or pass an existing httpx.AsyncClient
    (which the caller then owns and closes).
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self._rpc_url = rpc_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_sec),
            transport=transport,
        )

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    async def __aenter__(self) -> "SolanaRpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def call(self, method: str, params: list[Any]) -> Any:
        """POST one JSON-RPC request and return its result (may be None)."""
        body = build_rpc_body(method, params)
        try:
            resp = await self._client.post(self._rpc_url, json=body)
        except httpx.TimeoutException as e:
            raise TransientFetchError(f"{method} timed out") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransientFetchError(f"{method} transport error: {e}") from e

        if resp.status_code == 429:
            logger.warning(
                "rpc_rate_limited",
                method=method,
                rpc_url=mask_rpc_url(self._rpc_url),
                retry_after=_retry_after(resp),
            )
            raise RateLimited(f"{method} returned HTTP 429", retry_after=_retry_after(resp))
        if resp.is_error:
            raise TransientFetchError(f"{method} returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise TransientFetchError(f"{method} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise TransientFetchError(f"{method} returned an unexpected payload")
        if "error" in data and data["error"] is not None:
            err = data["error"]
            if isinstance(err, dict):
                raise SolanaRpcError(err.get("code"), str(err.get("message", err)))
            raise SolanaRpcError(None, str(err))
        return data.get("result")

    async def get_signatures_for_address(
        self,
        address: str,
        *,
        limit: int,
        commitment: str = DEFAULT_COMMITMENT,
    ) -> list[dict[str, Any]]:
        """getSignaturesForAddress; newest first. Node-side address rejection -> InvalidAddress."""
        opts = {"limit": limit, "commitment": commitment}
        try:
            result = await self.call("getSignaturesForAddress", [address, opts])
        except SolanaRpcError as e:
            if e.code == RPC_INVALID_PARAMS:
                raise InvalidAddress(e.rpc_message) from e
            raise
        if result is None:
            raise TransientFetchError("getSignaturesForAddress returned no result")
        if not isinstance(result, list):
            raise TransientFetchError("getSignaturesForAddress returned a non-list result")
        return result

    async def get_transaction(
        self,
        signature: str,
        *,
        commitment: str = DEFAULT_COMMITMENT,
    ) -> dict[str, Any] | None:
        """getTransaction (json encoding, versioned transactions allowed); None if not found."""
        opts = {
            "encoding": "json",
            "commitment": commitment,
            "maxSupportedTransactionVersion": 0,
        }
        return await self.call("getTransaction", [signature, opts])
