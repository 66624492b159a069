"""
Transaction history retrieval for one Solana wallet.

validate -> fetch signatures -> resolve details concurrently -> compute
balance deltas -> assemble ordered summaries.
"""

from wallet_tracker.history.models import (
    Address,
    Failed,
    NoHistory,
    Outcome,
    PipelineState,
    SignatureInfo,
    Success,
    TransactionDetail,
    TransactionSummary,
)
from wallet_tracker.history.pipeline import CancellationToken, fetch_history
from wallet_tracker.history.rpc import SolanaRpcClient
from wallet_tracker.history.validator import is_valid_wallet, validate_address

__all__ = [
    "Address",
    "CancellationToken",
    "Failed",
    "NoHistory",
    "Outcome",
    "PipelineState",
    "SignatureInfo",
    "SolanaRpcClient",
    "Success",
    "TransactionDetail",
    "TransactionSummary",
    "fetch_history",
    "is_valid_wallet",
    "validate_address",
]
