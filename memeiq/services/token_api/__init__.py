"""Token analysis API clients."""

from memeiq.services.token_api.client import MemeIQApiClient
from memeiq.services.token_api.mock_client import MockTokenAnalysisClient

__all__ = ["MemeIQApiClient", "MockTokenAnalysisClient"]
