"""Middleware for aiogram."""

from memeiq.middleware.analytics import AnalyticsMiddleware
from memeiq.middleware.error_handler import ErrorHandlerMiddleware
from memeiq.middleware.logging import LoggingMiddleware

__all__ = ["AnalyticsMiddleware", "ErrorHandlerMiddleware", "LoggingMiddleware"]
