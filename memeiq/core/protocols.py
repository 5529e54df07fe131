"""
Protocol definitions (interfaces) for services.

Using typing.Protocol instead of ABC because:
1. Supports duck typing (no inheritance required)
2. Easier to mock in tests
3. Lets the in-memory store be swapped for a persistent one later

Each protocol defines the contract that implementations must follow.
"""

from typing import Iterable, Protocol, runtime_checkable

from memeiq.core.models import AnalyticsSnapshot, TokenAnalysis, UserRecord


@runtime_checkable
class TokenAnalysisClient(Protocol):
    """
    Protocol for token analysis clients.

    Implementations:
    - MemeIQApiClient - calls the remote analysis API (production)
    - MockTokenAnalysisClient - deterministic fake data (development)
    """

    async def analyze(self, address: str) -> TokenAnalysis:
        """
        Fetch the analysis for a token address.

        Args:
            address: Validated Solana token address

        Returns:
            Decoded TokenAnalysis

        Raises:
            RemoteServiceError: Non-2xx status
            RemoteDataError: Malformed or empty payload
            RemoteUnavailable: Network failure or timeout
        """
        ...


@runtime_checkable
class UserRepository(Protocol):
    """
    Protocol for user state storage.

    The bundled implementation keeps everything in process memory.
    A persistent key-value store can be dropped in behind the same
    interface.
    """

    @property
    def analytics(self) -> AnalyticsSnapshot:
        ...

    def __contains__(self, user_id: object) -> bool:
        ...

    def get(self, user_id: int) -> UserRecord | None:
        ...

    def get_or_create(self, user_id: int) -> UserRecord:
        ...

    def users(self) -> Iterable[UserRecord]:
        ...
