"""
Pydantic models for the MemeIQ bot.

Two groups of models live here:
- The analysis API contract (TokenAnalysis, ApiResponse). This is the single
  place where the remote JSON is decoded and defaulted.
- In-memory bot state (UserRecord, AnalyticsSnapshot) and the values passed
  between services and handlers (QuotaDecision, AnalysisReport).
"""

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up."""
    return math.floor(value + 0.5)


TRUTHY_STRINGS = frozenset({"true", "1", "yes"})


def _finite_or_none(value: Any) -> float | None:
    """Coerce an optional API number, dropping garbage and NaN/inf."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class Tier(str, Enum):
    """Subscription level gating the daily quota and watchlist size."""

    FREE = "free"
    PRO = "pro"
    WHALE = "whale"


class Recommendation(str, Enum):
    """
    Recommendation returned by the analysis API.

    Values match the API output format exactly.
    """

    BUY = "BUY"
    CAUTION = "CAUTION"
    AVOID = "AVOID"


# =============================================================================
# Analysis API contract
# =============================================================================


class TokenScores(BaseModel):
    """Score breakdown, each on a 0-100 scale."""

    overall: float | None = None
    liquidity: float | None = None
    volume: float | None = None
    holders: float | None = None

    @field_validator("overall", "liquidity", "volume", "holders", mode="before")
    @classmethod
    def _lenient_score(cls, value: Any) -> float | None:
        return _finite_or_none(value)

    def resolve_overall(self) -> int:
        """
        Overall score as shown to users.

        Uses the API-supplied overall score when present, otherwise the
        mean of the liquidity, volume and holders sub-scores (missing
        sub-scores count as 0).
        """
        if self.overall is not None:
            return round_half_up(self.overall)
        parts = [self.liquidity or 0.0, self.volume or 0.0, self.holders or 0.0]
        return round_half_up(sum(parts) / len(parts))


class TokenAnalysis(BaseModel):
    """
    Token analysis as returned by the API under "token".

    Only name and symbol are required; a payload without them is
    treated as "token not found". Every metric is optional and None
    means the API did not provide it.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    symbol: str = Field(min_length=1)
    verified: bool = False

    # Market
    price: float | None = None
    price_change_24h: float | None = Field(default=None, alias="priceChange24h")
    market_cap: float | None = Field(default=None, alias="marketCap")
    fdv: float | None = None

    # Liquidity
    liquidity_usd: float | None = Field(default=None, alias="liquidityUSD")
    lp_locked_pct: float | None = Field(default=None, alias="lpLockedPct")
    mcap_liq_ratio: float | None = Field(default=None, alias="mcapLiqRatio")

    # Volume
    volume_24h_usd: float | None = Field(default=None, alias="volume24hUSD")
    wash_risk_label: str | None = Field(default=None, alias="washRiskLabel")

    # Holders
    holders: int | None = None
    top10_pct: float | None = Field(default=None, alias="top10Pct")
    concentration_label: str | None = Field(default=None, alias="concentrationLabel")

    # Verdict
    recommendation: Recommendation | None = None
    scores: TokenScores = Field(default_factory=TokenScores)
    summary: str | None = None

    @field_validator(
        "price",
        "price_change_24h",
        "market_cap",
        "fdv",
        "liquidity_usd",
        "lp_locked_pct",
        "mcap_liq_ratio",
        "volume_24h_usd",
        "top10_pct",
        mode="before",
    )
    @classmethod
    def _lenient_number(cls, value: Any) -> float | None:
        return _finite_or_none(value)

    @field_validator("holders", mode="before")
    @classmethod
    def _lenient_holders(cls, value: Any) -> int | None:
        number = _finite_or_none(value)
        return int(number) if number is not None else None

    @field_validator("verified", mode="before")
    @classmethod
    def _lenient_verified(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY_STRINGS
        if isinstance(value, (int, float)):
            return value == 1
        return False

    @field_validator("recommendation", mode="before")
    @classmethod
    def _lenient_recommendation(cls, value: Any) -> Recommendation | None:
        if not isinstance(value, str):
            return None
        try:
            return Recommendation(value.strip().upper())
        except ValueError:
            return None

    @field_validator("scores", mode="before")
    @classmethod
    def _default_scores(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, TokenScores)) else {}

    @property
    def overall_score(self) -> int:
        return self.scores.resolve_overall()


class ApiResponse(BaseModel):
    """
    Envelope returned by GET /analyze.

    JSON example:
    {
        "ok": true,
        "token": {"name": "Bonk", "symbol": "BONK", "scores": {"overall": 73}}
    }
    """

    ok: bool = False
    error: str | None = None
    token: TokenAnalysis | None = None

    @field_validator("error", mode="before")
    @classmethod
    def _lenient_error(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return str(value)


# =============================================================================
# Bot state
# =============================================================================


class UserRecord(BaseModel):
    """
    Per-user state kept for the process lifetime.

    Created on first contact and never deleted. The daily counter is
    reset lazily by the quota policy on the first touch of a new day.
    """

    user_id: int
    referral_code: str
    joined_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    tier: Tier = Tier.FREE

    # Quota counters
    daily_analyses: int = Field(default=0, ge=0)
    last_analysis_date: date | None = None
    total_analyses: int = Field(default=0, ge=0)
    pending_analyses: int = Field(default=0, ge=0)
    """Analyses reserved but not yet finished (in-flight HTTP calls)"""

    # Watchlist and alert subscriptions, in insertion order
    watchlist: list[str] = Field(default_factory=list)
    alerts: list[str] = Field(default_factory=list)

    # Referral program
    referred_by: int | None = None
    referrals: set[int] = Field(default_factory=set)

    @property
    def is_premium(self) -> bool:
        return self.tier is not Tier.FREE


class DailyStats(BaseModel):
    """Activity for one calendar day."""

    analyses: int = 0
    active_users: set[int] = Field(default_factory=set)


class AnalyticsSnapshot(BaseModel):
    """Process-wide counters, reset on restart."""

    total_users: int = 0
    total_analyses: int = 0
    command_usage: dict[str, int] = Field(default_factory=dict)
    daily: dict[date, DailyStats] = Field(default_factory=dict)

    def for_day(self, day: date) -> DailyStats:
        """Stats bucket for the given day, created on demand."""
        if day not in self.daily:
            self.daily[day] = DailyStats()
        return self.daily[day]


class QuotaDecision(BaseModel):
    """Outcome of a quota check."""

    allowed: bool
    remaining: int | None = None
    """Analyses left today after this check (None = unlimited)"""

    message: str | None = None
    """User-facing denial text, set when allowed is False"""


class SuggestedAction(BaseModel):
    """
    Interactive action attached to an analysis result.

    Exactly one of callback_data or url is set.
    """

    label: str
    callback_data: str | None = None
    url: str | None = None


class AnalysisReport(BaseModel):
    """Result of one successful analysis, ready to be sent to chat."""

    address: str
    token: TokenAnalysis
    overall_score: int
    text: str
    actions: list[SuggestedAction] = Field(default_factory=list)
    auto_detected: bool = False
