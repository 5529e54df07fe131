"""Telegram handlers."""

from memeiq.handlers.router import setup_routers

__all__ = ["setup_routers"]
