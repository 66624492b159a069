"""
Configuration management for the wallet tracker.

Loads settings from environment variables and an optional .env file.
"""

from wallet_tracker.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
