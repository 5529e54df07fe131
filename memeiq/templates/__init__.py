"""Message templates."""

from memeiq.templates.messages import (
    ANALYZING,
    ERROR_GENERIC,
    HELP,
    TRENDING,
    UPGRADE,
    WELCOME,
)

__all__ = [
    "WELCOME",
    "HELP",
    "UPGRADE",
    "TRENDING",
    "ANALYZING",
    "ERROR_GENERIC",
]
