"""
Analysis orchestrator.

Coordinates one token analysis request. This is the entry point for
/analyze, /quick and auto-detected addresses - it calls the services
in the correct order and returns the final report.

Workflow:
1. Validate the address format
2. QuotaPolicy -> reserve a slot for the user
3. TokenAnalysisClient -> fetch the analysis
4. Commit the quota slot and update analytics
5. Formatter -> render text and suggested actions
"""

import logging
from urllib.parse import urlencode

from memeiq.core.exceptions import InvalidAddressFormat
from memeiq.core.models import AnalysisReport, SuggestedAction
from memeiq.core.protocols import TokenAnalysisClient
from memeiq.services.users.quota import QuotaPolicy
from memeiq.services.users.store import UserStore
from memeiq.utils.formatters import format_analysis, format_quick
from memeiq.utils.keyboards import ALERT_SET, WATCH_ADD
from memeiq.utils.validators import validate_solana_address

logger = logging.getLogger(__name__)

CHART_URL_TEMPLATE = "https://dexscreener.com/{chain}/{address}"
DEFAULT_CHAIN = "solana"
DEFAULT_WEBSITE_URL = "https://meme-iq.vercel.app"


class AnalysisOrchestrator:
    """
    Orchestrates the token analysis workflow.

    Each step is delegated to a specialized service:
    - Quota bookkeeping -> QuotaPolicy / UserStore
    - Remote analysis -> TokenAnalysisClient
    - Rendering -> formatters

    Quota is only consumed when the API call succeeds. Errors are raised
    as MemeIQError subclasses for the caller to turn into chat text.

    Usage:
        orchestrator = AnalysisOrchestrator(client, store, quota)
        report = await orchestrator.analyze(user_id, "DezX...")
    """

    def __init__(
        self,
        client: TokenAnalysisClient,
        store: UserStore,
        quota: QuotaPolicy,
        website_url: str = DEFAULT_WEBSITE_URL,
        chain: str = DEFAULT_CHAIN,
    ):
        """
        Initialize orchestrator with all required services.

        Args:
            client: Analysis API client (real or mock)
            store: User store holding quota counters and analytics
            quota: Daily quota policy
            website_url: Base URL for the full web report link
            chain: Chain name used in chart links
        """
        self._client = client
        self._store = store
        self._quota = quota
        self._website_url = website_url.rstrip("/")
        self._chain = chain

    async def analyze(
        self,
        user_id: int,
        raw_address: str | None,
        auto_detected: bool = False,
        compact: bool = False,
    ) -> AnalysisReport:
        """
        Perform one token analysis for a user.

        Args:
            user_id: Telegram id of the requesting user
            raw_address: Address text as typed or detected
            auto_detected: Address was found in free text, not a command
            compact: Render the short /quick layout

        Returns:
            AnalysisReport with rendered text and suggested actions

        Raises:
            InvalidAddressFormat: Address fails the format check
            QuotaExceeded: Free tier daily limit reached
            RemoteServiceError: API returned non-2xx
            RemoteDataError: API payload unusable
            RemoteUnavailable: Network failure or timeout
        """
        address = (raw_address or "").strip()
        is_valid, error = validate_solana_address(address)
        if not is_valid:
            raise InvalidAddressFormat(technical_message=f"Rejected address: {error}")

        user = self._store.get_or_create(user_id)
        source = "auto" if auto_detected else "command"
        logger.info(f"Starting analysis for {address[:8]}... (user={user_id}, source={source})")

        with self._quota.reserve(user) as reservation:
            token = await self._client.analyze(address)
            reservation.commit()

        self._store.record_analysis()

        overall = token.overall_score
        render = format_quick if compact else format_analysis
        report = AnalysisReport(
            address=address,
            token=token,
            overall_score=overall,
            text=render(token, address, overall),
            actions=self.suggested_actions(address),
            auto_detected=auto_detected,
        )

        logger.info(
            f"Analysis complete for {token.symbol}: score={overall}, "
            f"recommendation={token.recommendation.value if token.recommendation else None}, "
            f"daily={user.daily_analyses}"
        )
        return report

    def chart_url(self, address: str) -> str:
        return CHART_URL_TEMPLATE.format(chain=self._chain, address=address)

    def report_url(self, address: str) -> str:
        query = urlencode({"address": address, "ref": "telegram", "utm_source": "telegram_bot"})
        return f"{self._website_url}/?{query}"

    def suggested_actions(self, address: str) -> list[SuggestedAction]:
        """Buttons attached to an analysis result."""
        return [
            SuggestedAction(label="⭐ Watchlist", callback_data=f"{WATCH_ADD}{address}"),
            SuggestedAction(label="🔔 Set Alert", callback_data=f"{ALERT_SET}{address}"),
            SuggestedAction(label="📈 Chart", url=self.chart_url(address)),
            SuggestedAction(label="🌐 Full Report", url=self.report_url(address)),
        ]
