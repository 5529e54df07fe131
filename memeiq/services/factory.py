"""
Service factory for dependency injection.

Creates and configures all services based on application settings.
Switches between the mock and the real analysis client automatically.

This is the single point of service creation - all services
should be created through this factory. Stateful services (the user
store) are created once and shared by everything built afterwards.
"""

import logging
from functools import cached_property

from memeiq.config.settings import Settings
from memeiq.core.protocols import TokenAnalysisClient
from memeiq.services.orchestrator import AnalysisOrchestrator
from memeiq.services.scheduler import BackgroundScheduler
from memeiq.services.token_api.client import MemeIQApiClient
from memeiq.services.token_api.mock_client import MockTokenAnalysisClient
from memeiq.services.users.quota import QuotaPolicy
from memeiq.services.users.referrals import ReferralService
from memeiq.services.users.store import UserStore
from memeiq.services.watchlist import WatchlistService

logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory for creating application services.

    Reads configuration and creates appropriate service implementations:
    - Mock analysis client for development (USE_MOCK_SERVICES=true)
    - Real API client otherwise

    Usage:
        factory = ServiceFactory(settings)
        orchestrator = factory.create_orchestrator()
    """

    def __init__(self, settings: Settings):
        """
        Initialize factory with application settings.

        Args:
            settings: Application configuration
        """
        self._settings = settings
        self._log_mode()

    def _log_mode(self) -> None:
        """Log the current mode for debugging."""
        mode = "MOCK" if self._settings.use_mock_services else "PRODUCTION"
        logger.info(f"ServiceFactory initialized in {mode} mode")

    @cached_property
    def store(self) -> UserStore:
        """The one user store for this process."""
        logger.debug("Creating UserStore")
        return UserStore()

    def create_analysis_client(self) -> TokenAnalysisClient:
        """
        Create the token analysis client.

        Returns:
            TokenAnalysisClient implementation based on settings
        """
        if self._settings.use_mock_services:
            logger.debug("Creating MockTokenAnalysisClient")
            return MockTokenAnalysisClient()

        logger.debug(f"Creating MemeIQApiClient for {self._settings.api_base_url}")
        return MemeIQApiClient(
            base_url=self._settings.api_base_url,
            timeout=self._settings.api_timeout_seconds,
            client_identifier=self._settings.client_identifier,
        )

    @cached_property
    def quota(self) -> QuotaPolicy:
        """The one quota policy, shared by the orchestrator and /stats."""
        return QuotaPolicy(free_daily_limit=self._settings.free_daily_limit)

    def create_watchlist_service(self) -> WatchlistService:
        return WatchlistService(free_limit=self._settings.free_watchlist_limit)

    def create_referral_service(self) -> ReferralService:
        return ReferralService(self.store, bot_username=self._settings.bot_username)

    def create_scheduler(self) -> BackgroundScheduler:
        return BackgroundScheduler(
            self.store,
            alert_interval=self._settings.alert_sweep_interval_seconds,
            stats_interval=self._settings.stats_log_interval_seconds,
            heartbeat_interval=self._settings.heartbeat_interval_seconds,
        )

    def create_orchestrator(self) -> AnalysisOrchestrator:
        """
        Create the main analysis orchestrator.

        This is the primary service used by handlers.
        Creates all dependencies automatically.

        Returns:
            AnalysisOrchestrator ready for use
        """
        logger.info("Creating AnalysisOrchestrator with all dependencies")

        return AnalysisOrchestrator(
            client=self.create_analysis_client(),
            store=self.store,
            quota=self.quota,
            website_url=self._settings.website_url,
        )
