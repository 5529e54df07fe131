"""Utility functions."""

from memeiq.utils.formatters import (
    format_analysis,
    format_price,
    format_quick,
    format_usd,
    recommendation_emoji,
    score_emoji,
)
from memeiq.utils.validators import extract_address, validate_solana_address

__all__ = [
    "validate_solana_address",
    "extract_address",
    "format_usd",
    "format_price",
    "score_emoji",
    "recommendation_emoji",
    "format_analysis",
    "format_quick",
]
