"""Wallet address validation: base58 decode, length and on-curve checks."""

from __future__ import annotations

import base58
from solders.pubkey import Pubkey

from wallet_tracker.core.exceptions import InvalidAddress
from wallet_tracker.history.models import Address

PUBKEY_LENGTH = 32


def validate_address(raw: str) -> Address:
    """
    Return the validated Address for raw, or raise InvalidAddress.

    raw must base58-decode to exactly 32 bytes that lie on the ed25519 curve.
    Program-derived addresses are off-curve and therefore rejected.
    """
    value = (raw or "").strip()
    if not value:
        raise InvalidAddress("address is empty")
    try:
        decoded = base58.b58decode(value)
    except ValueError as e:
        raise InvalidAddress(f"not base58: {e}") from e
    if len(decoded) != PUBKEY_LENGTH:
        raise InvalidAddress(f"decodes to {len(decoded)} bytes, expected {PUBKEY_LENGTH}")
    if not Pubkey(decoded).is_on_curve():
        raise InvalidAddress("public key is not on the ed25519 curve")
    return Address(value=value, raw=bytes(decoded))


def is_valid_wallet(w: str) -> bool:
    """Return True if w is a valid on-curve Solana wallet address."""
    try:
        validate_address(w)
        return True
    except InvalidAddress:
        return False
