"""
Main entrypoint: serve the wallet history API with uvicorn.

Env: SOLANA_NETWORK, SOLANA_RPC_URL, API_HOST, API_PORT, LOG_LEVEL, etc.

Equivalent: uvicorn wallet_tracker.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured logging before other imports that may log
from wallet_tracker.tracker_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI app in the main thread."""
    api_host = os.getenv("API_HOST", "0.0.0.0").strip()
    api_port = int(os.getenv("API_PORT", "8000").strip() or "8000")

    from wallet_tracker.api_server.app import app
    from wallet_tracker.config import get_settings
    from wallet_tracker.config.env import mask_rpc_url
    import uvicorn

    settings = get_settings()
    logger.info(
        "main_server_starting",
        host=api_host,
        port=api_port,
        network=settings.network,
        rpc_url=mask_rpc_url(settings.rpc_url),
    )
    uvicorn.run(app, host=api_host, port=api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
