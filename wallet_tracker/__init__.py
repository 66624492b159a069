"""
Wallet Tracker: recent Solana transaction history for a single wallet.

Validates an address, fetches its latest signatures over JSON-RPC, resolves
each transaction concurrently, and reports the per-transaction SOL balance
change. Exposed as an async function, a small HTTP API, and a CLI.
"""

__version__ = "0.1.0"
