"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn wallet_tracker.api_server.app:app --host 0.0.0.0 --port 8000
"""

from wallet_tracker.api_server.server import app

__all__ = ["app"]
