"""
Print the recent transactions of one Solana wallet.

How to run:
    python -m wallet_tracker.tools.fetch_history <ADDRESS> [--limit 10] [--rpc-url URL] [--json]

Env: SOLANA_NETWORK, SOLANA_RPC_URL and the other wallet_tracker settings
(see wallet_tracker.config). --rpc-url overrides SOLANA_RPC_URL.

Exit code: 0 on success or when the wallet has no history, 1 on failure.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import sys
from typing import TextIO

from wallet_tracker.config import Settings, get_settings
from wallet_tracker.config.env import mask_rpc_url
from wallet_tracker.history import Failed, NoHistory, Outcome, fetch_history


def render_text(outcome: Outcome, settings: Settings, out: TextIO) -> None:
    """Human-readable listing: one block per transaction, newest first."""
    if isinstance(outcome, (Failed, NoHistory)):
        print(outcome.message, file=out)
        return
    print(f"Recent Transactions ({settings.network})", file=out)
    for s in outcome.summaries:
        print(f"Signature: {s.signature}", file=out)
        print(f"Time: {s.display_time}", file=out)
        status = " (failed)" if s.failed else ""
        print(f"Amount: {s.amount:.9f} SOL{status}", file=out)
        print("", file=out)


def render_json(outcome: Outcome, out: TextIO) -> None:
    if isinstance(outcome, Failed):
        payload = {"status": "failed", "error_kind": outcome.kind.value, "message": outcome.message}
    elif isinstance(outcome, NoHistory):
        payload = {"status": "no_history", "message": outcome.message}
    else:
        payload = {"status": "success", "transactions": [s.to_dict() for s in outcome.summaries]}
    json.dump(payload, out, indent=2)
    out.write("\n")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Show recent Solana transactions for a wallet.")
    p.add_argument("address", help="Wallet address (base58)")
    p.add_argument("--limit", type=int, default=None, help="Number of signatures to fetch (1-1000)")
    p.add_argument("--rpc-url", default=None, help="Override SOLANA_RPC_URL")
    p.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    return p


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout
    settings = get_settings()
    if args.rpc_url:
        settings = dataclasses.replace(settings, rpc_url=args.rpc_url)
    if args.limit is not None:
        try:
            settings = dataclasses.replace(settings, history_limit=args.limit)
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 2
    if not args.json:
        print(f"Fetching from {mask_rpc_url(settings.rpc_url)} ...", file=sys.stderr)

    outcome = asyncio.run(fetch_history(args.address, settings=settings))
    if args.json:
        render_json(outcome, out)
    else:
        render_text(outcome, settings, out)
    return 1 if isinstance(outcome, Failed) else 0


if __name__ == "__main__":
    sys.exit(main())
