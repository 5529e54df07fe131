"""
Core module - models, protocols, and exceptions.

This module contains the fundamental building blocks of the application:
- Data models (Pydantic)
- Protocol definitions (interfaces)
- Custom exceptions
"""

from memeiq.core.exceptions import (
    InvalidAddressFormat,
    MemeIQError,
    QuotaExceeded,
    RemoteDataError,
    RemoteServiceError,
    RemoteUnavailable,
    WatchlistError,
)
from memeiq.core.models import (
    AnalysisReport,
    AnalyticsSnapshot,
    ApiResponse,
    QuotaDecision,
    Recommendation,
    SuggestedAction,
    Tier,
    TokenAnalysis,
    TokenScores,
    UserRecord,
)
from memeiq.core.protocols import TokenAnalysisClient, UserRepository

__all__ = [
    # Exceptions
    "MemeIQError",
    "InvalidAddressFormat",
    "QuotaExceeded",
    "RemoteServiceError",
    "RemoteDataError",
    "RemoteUnavailable",
    "WatchlistError",
    # Models
    "Tier",
    "Recommendation",
    "TokenScores",
    "TokenAnalysis",
    "ApiResponse",
    "UserRecord",
    "AnalyticsSnapshot",
    "QuotaDecision",
    "SuggestedAction",
    "AnalysisReport",
    # Protocols
    "TokenAnalysisClient",
    "UserRepository",
]
