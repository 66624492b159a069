"""
Value objects passed through the history pipeline.

All are frozen and created fresh per fetch invocation:
- Address: validated base58 public key.
- HistoryRequest: what the caller asked for (address, limit, commitment).
- SignatureInfo: one getSignaturesForAddress item (newest first).
- TransactionDetail: balances and block time from getTransaction; degraded
  to None fields when the lookup failed.
- TransactionSummary: final per-transaction row.
- Success / NoHistory / Failed: pipeline outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from wallet_tracker.core.exceptions import ErrorKind

UNKNOWN_TIME = "Unknown"


@dataclass(frozen=True)
class Address:
    """A base58 public key that decoded to 32 bytes on the ed25519 curve."""

    value: str
    raw: bytes = field(repr=False)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HistoryRequest:
    address: Address
    limit: int
    commitment: str


@dataclass(frozen=True)
class SignatureInfo:
    """
    Normalized transaction signature info from getSignaturesForAddress.

    Mirrors the RPC response fields; err is the on-chain execution error
    (None if the transaction succeeded), not a lookup failure.
    """

    signature: str
    slot: int | None
    err: Any
    block_time: int | None
    memo: str | None
    confirmation_status: str | None  # processed | confirmed | finalized

    @classmethod
    def from_rpc_item(cls, item: dict[str, Any]) -> "SignatureInfo":
        """
        Build from a single getSignaturesForAddress result item.
        Only the signature is required; unreadable slot/blockTime become None.
        """
        return cls(
            signature=item["signature"],
            slot=_opt_int(item.get("slot")),
            err=item.get("err"),
            block_time=_opt_int(item.get("blockTime")),
            memo=item.get("memo"),
            confirmation_status=item.get("confirmationStatus"),
        )


def _opt_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _account_keys(message: dict[str, Any], meta: dict[str, Any]) -> tuple[str, ...]:
    """
    Resolve accountKeys to base58 strings (json and jsonParsed shapes).
    Versioned transactions append meta.loadedAddresses (writable, then readonly),
    which is the order pre/post balances follow. Unreadable entries become ""
    so positions still line up with the balance arrays.
    """
    keys = message.get("accountKeys")
    out: list[str] = []
    for k in keys if isinstance(keys, list) else []:
        if isinstance(k, dict):
            k = k.get("pubkey")
        out.append(k if isinstance(k, str) else "")
    loaded = meta.get("loadedAddresses")
    if isinstance(loaded, dict):
        for role in ("writable", "readonly"):
            extra = loaded.get(role)
            if isinstance(extra, list):
                out.extend(a if isinstance(a, str) else "" for a in extra)
    return tuple(out)


def _int_tuple(values: Any) -> tuple[int, ...] | None:
    if not isinstance(values, list):
        return None
    return tuple(int(v) for v in values)


@dataclass(frozen=True)
class TransactionDetail:
    """
    Per-signature detail from getTransaction.

    pre_balances/post_balances are lamports in account-key order. When the
    lookup failed or the transaction is pruned they are None and error holds
    the reason.
    """

    signature: str
    block_time: int | None
    pre_balances: tuple[int, ...] | None
    post_balances: tuple[int, ...] | None
    account_keys: tuple[str, ...] = ()
    slot: int | None = None
    fee: int | None = None
    error: str | None = None

    @property
    def has_balances(self) -> bool:
        return self.pre_balances is not None and self.post_balances is not None

    @classmethod
    def unresolved(cls, signature: str, reason: str) -> "TransactionDetail":
        return cls(
            signature=signature,
            block_time=None,
            pre_balances=None,
            post_balances=None,
            error=reason,
        )

    @classmethod
    def from_rpc_result(cls, signature: str, raw: dict[str, Any] | None) -> "TransactionDetail":
        """
        Build from a getTransaction result. None (not found / pruned) and
        malformed payloads degrade to an unresolved detail instead of raising.
        """
        if raw is None:
            return cls.unresolved(signature, "transaction not found")
        if not isinstance(raw, dict):
            return cls.unresolved(signature, "malformed transaction payload")

        block_time = _opt_int(raw.get("blockTime"))
        meta = raw.get("meta")
        tx_obj = raw.get("transaction")
        message = tx_obj.get("message") if isinstance(tx_obj, dict) else None
        try:
            pre = _int_tuple(meta.get("preBalances")) if isinstance(meta, dict) else None
            post = _int_tuple(meta.get("postBalances")) if isinstance(meta, dict) else None
        except (TypeError, ValueError):
            pre = post = None
        if pre is None or post is None:
            pre = post = None
        keys = (
            _account_keys(message, meta)
            if isinstance(message, dict) and isinstance(meta, dict)
            else ()
        )
        return cls(
            signature=signature,
            block_time=block_time,
            pre_balances=pre,
            post_balances=post,
            account_keys=keys,
            slot=_opt_int(raw.get("slot")),
            fee=_opt_int(meta.get("fee")) if isinstance(meta, dict) else None,
            error=None if pre is not None else "transaction meta unavailable",
        )


@dataclass(frozen=True)
class TransactionSummary:
    """One output row; amount is in SOL with 9 fractional digits."""

    signature: str
    display_time: str
    amount: Decimal
    slot: int | None = None
    failed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "display_time": self.display_time,
            "amount": f"{self.amount:.9f}",
            "slot": self.slot,
            "failed": self.failed,
        }


class PipelineState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    FETCHING = "fetching"
    RESOLVING = "resolving"
    ASSEMBLING = "assembling"
    SUCCESS = "success"
    NO_HISTORY = "no_history"
    FAILED = "failed"


@dataclass(frozen=True)
class Success:
    summaries: tuple[TransactionSummary, ...]

    status = PipelineState.SUCCESS


@dataclass(frozen=True)
class NoHistory:
    message: str

    status = PipelineState.NO_HISTORY


@dataclass(frozen=True)
class Failed:
    kind: ErrorKind
    message: str

    status = PipelineState.FAILED


Outcome = Union[Success, NoHistory, Failed]
