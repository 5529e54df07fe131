"""
Pytest configuration and fixtures.

Provides reusable test fixtures for:
- A controllable calendar clock
- User store, quota policy and orchestrator wired together
- Sample API payloads
- Fake aiogram messages
"""

from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from memeiq.core.models import Recommendation, TokenAnalysis, TokenScores
from memeiq.services.orchestrator import AnalysisOrchestrator
from memeiq.services.token_api.client import MemeIQApiClient
from memeiq.services.token_api.mock_client import MockTokenAnalysisClient
from memeiq.services.users.quota import QuotaPolicy
from memeiq.services.users.referrals import ReferralService
from memeiq.services.users.store import UserStore
from memeiq.services.watchlist import WatchlistService

API_BASE_URL = "https://api.memeiq.test/api"

# =============================================================================
# Clock
# =============================================================================


class FakeClock:
    """Calendar clock that tests can move forward."""

    def __init__(self, day: date = date(2024, 3, 14)):
        self.day = day

    def __call__(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> None:
        self.day += timedelta(days=days)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def bonk_address() -> str:
    """Bonk mint address (44 chars)."""
    return "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"


@pytest.fixture
def valid_solana_address() -> str:
    """Valid Solana token address (USDC)."""
    return "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


@pytest.fixture
def another_valid_address() -> str:
    """Another valid Solana address (wrapped SOL)."""
    return "So11111111111111111111111111111111111111112"


@pytest.fixture
def bonk_payload() -> dict:
    """Successful /analyze response for Bonk."""
    return {
        "ok": True,
        "token": {
            "name": "Bonk",
            "symbol": "BONK",
            "verified": True,
            "price": 0.0000234,
            "priceChange24h": 5.2,
            "marketCap": 1_500_000_000,
            "fdv": 2_000_000_000,
            "liquidityUSD": 25_000_000,
            "lpLockedPct": 99.5,
            "mcapLiqRatio": 60,
            "volume24hUSD": 120_000_000,
            "washRiskLabel": "LOW",
            "holders": 850_000,
            "top10Pct": 32.1,
            "concentrationLabel": "HEALTHY",
            "recommendation": "CAUTION",
            "scores": {"overall": 73, "liquidity": 80, "volume": 70, "holders": 69},
            "summary": "Established meme coin with deep liquidity.",
        },
    }


@pytest.fixture
def bonk_token(bonk_payload: dict) -> TokenAnalysis:
    return TokenAnalysis.model_validate(bonk_payload["token"])


@pytest.fixture
def minimal_token() -> TokenAnalysis:
    """Token with only the required fields."""
    return TokenAnalysis(
        name="Tiny",
        symbol="TINY",
        recommendation=Recommendation.AVOID,
        scores=TokenScores(liquidity=20, volume=30, holders=40),
    )


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def store(clock: FakeClock) -> UserStore:
    return UserStore(today=clock)


@pytest.fixture
def quota(clock: FakeClock) -> QuotaPolicy:
    return QuotaPolicy(free_daily_limit=5, today=clock)


@pytest.fixture
def watchlist() -> WatchlistService:
    return WatchlistService(free_limit=5)


@pytest.fixture
def referrals(store: UserStore) -> ReferralService:
    return ReferralService(store, bot_username="MemeIQTestBot")


@pytest.fixture
def api_client() -> MemeIQApiClient:
    """Real HTTP client pointed at a test host (mock it with aioresponses)."""
    return MemeIQApiClient(base_url=API_BASE_URL, timeout=1.0, client_identifier="MemeIQ-Test/1.0")


@pytest.fixture
def orchestrator(
    api_client: MemeIQApiClient,
    store: UserStore,
    quota: QuotaPolicy,
) -> AnalysisOrchestrator:
    """Orchestrator talking HTTP through the real client."""
    return AnalysisOrchestrator(
        client=api_client,
        store=store,
        quota=quota,
        website_url="https://memeiq.test",
    )


@pytest.fixture
def spy_client(bonk_token: TokenAnalysis) -> MagicMock:
    """Client double that records calls and returns Bonk."""
    client = MagicMock()
    client.analyze = AsyncMock(return_value=bonk_token)
    return client


@pytest.fixture
def spy_orchestrator(
    spy_client: MagicMock,
    store: UserStore,
    quota: QuotaPolicy,
) -> AnalysisOrchestrator:
    return AnalysisOrchestrator(client=spy_client, store=store, quota=quota)


@pytest.fixture
def mock_orchestrator(store: UserStore, quota: QuotaPolicy) -> AnalysisOrchestrator:
    """Orchestrator with the offline mock client."""
    return AnalysisOrchestrator(client=MockTokenAnalysisClient(), store=store, quota=quota)


# =============================================================================
# Fake aiogram objects
# =============================================================================


def make_message(text: str | None = "hello", user_id: int = 42) -> MagicMock:
    """
    Fake aiogram Message.

    message.answer returns a placeholder message whose edit_text and
    delete calls can be inspected via message.placeholder.
    """
    placeholder = MagicMock()
    placeholder.edit_text = AsyncMock()
    placeholder.delete = AsyncMock()

    message = MagicMock()
    message.text = text
    message.from_user.id = user_id
    message.from_user.username = "tester"
    message.answer = AsyncMock(return_value=placeholder)
    message.bot.send_message = AsyncMock()
    message.placeholder = placeholder
    return message


def make_callback(data: str, user_id: int = 42) -> MagicMock:
    """Fake aiogram CallbackQuery."""
    callback = MagicMock()
    callback.data = data
    callback.from_user.id = user_id
    callback.answer = AsyncMock()
    callback.message.edit_text = AsyncMock()
    return callback


@pytest.fixture
def message_factory():
    return make_message


@pytest.fixture
def callback_factory():
    return make_callback
