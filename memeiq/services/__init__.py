"""
Services module - business logic layer.

Contains all services and the ServiceFactory for dependency injection.
"""

from memeiq.services.factory import ServiceFactory
from memeiq.services.orchestrator import AnalysisOrchestrator

__all__ = ["ServiceFactory", "AnalysisOrchestrator"]
