"""
Output formatters for Telegram messages.

Pure functions that turn token metrics and bot state into chat text.
Uses HTML formatting; every string coming from the analysis API is
escaped before it is embedded.
"""

import math
from datetime import date
from html import escape

from memeiq.core.models import (
    AnalyticsSnapshot,
    Recommendation,
    Tier,
    TokenAnalysis,
    UserRecord,
)

SCORE_GOOD = 80
SCORE_FAIR = 60

# Emoji mappings for recommendations
RECOMMENDATION_EMOJI = {
    Recommendation.BUY: "💚",
    Recommendation.CAUTION: "⚠️",
    Recommendation.AVOID: "🛑",
}

TIER_EMOJI = {
    Tier.FREE: "🆓",
    Tier.PRO: "⭐",
    Tier.WHALE: "🐋",
}

NOT_AVAILABLE = "N/A"

USD_UNITS = [(1, ""), (1e3, "K"), (1e6, "M"), (1e9, "B")]


def _is_number(value: float | int | None) -> bool:
    return (
        value is not None
        and not isinstance(value, bool)
        and isinstance(value, (int, float))
        and math.isfinite(value)
    )


def format_usd(value: float | int | None) -> str:
    """
    Format a dollar amount with a magnitude suffix.

    Examples:
        >>> format_usd(1_500_000)
        '$1.50M'
        >>> format_usd(999)
        '$999.00'
        >>> format_usd(float("nan"))
        '$0'
    """
    if not _is_number(value):
        return "$0"

    sign = "-" if value < 0 else ""
    amount = abs(value)

    index = 0
    while index + 1 < len(USD_UNITS) and amount >= USD_UNITS[index + 1][0]:
        index += 1

    # Carry into the next unit when rounding reaches 1000
    while index + 1 < len(USD_UNITS) and round(amount / USD_UNITS[index][0], 2) >= 1000:
        index += 1

    divisor, suffix = USD_UNITS[index]
    return f"{sign}${amount / divisor:.2f}{suffix}"


def format_price(value: float | int | None) -> str:
    """
    Format a token price.

    Meme coin prices span many orders of magnitude, so the number of
    decimals grows as the price shrinks: 4 above $1, 6 above one cent,
    10 below.
    """
    if not _is_number(value):
        return "$0"

    if value >= 1:
        return f"${value:.4f}"
    if value >= 0.01:
        return f"${value:.6f}"
    return f"${value:.10f}"


def format_percent(value: float | int | None, signed: bool = True) -> str:
    """Format a percentage with two decimals, N/A when missing."""
    if not _is_number(value):
        return NOT_AVAILABLE
    if signed:
        return f"{value:+.2f}%"
    return f"{value:.2f}%"


def format_count(value: int | None) -> str:
    """Format an integer with thousands separators."""
    if not _is_number(value):
        return NOT_AVAILABLE
    return f"{int(value):,}"


def score_emoji(score: float | int | None) -> str:
    """Traffic light for a 0-100 score."""
    if not _is_number(score):
        return ""
    if score >= SCORE_GOOD:
        return "✅"
    if score >= SCORE_FAIR:
        return "⚠️"
    return "🔴"


def recommendation_emoji(recommendation: Recommendation | str | None) -> str:
    """Emoji for BUY / CAUTION; everything else gets a stop sign."""
    if isinstance(recommendation, str) and not isinstance(recommendation, Recommendation):
        try:
            recommendation = Recommendation(recommendation.upper())
        except ValueError:
            recommendation = None
    return RECOMMENDATION_EMOJI.get(recommendation, "🛑")


def _label(value: str | None) -> str:
    return escape(value) if value else NOT_AVAILABLE


def _recommendation_label(recommendation: Recommendation | None) -> str:
    return recommendation.value if recommendation else NOT_AVAILABLE


def format_analysis(token: TokenAnalysis, address: str, overall: int | None = None) -> str:
    """
    Format a full token analysis as a Telegram message.

    Args:
        token: Decoded analysis from the API
        address: Token address that was analysed
        overall: Overall score; computed from the token if omitted

    Returns:
        Formatted HTML string for Telegram
    """
    if overall is None:
        overall = token.overall_score
    scores = token.scores

    verified = " ✅ Verified" if token.verified else ""
    ratio = f"{token.mcap_liq_ratio:.2f}x" if _is_number(token.mcap_liq_ratio) else NOT_AVAILABLE

    lines = [
        "🧠 <b>MemeIQ Analysis</b>",
        "",
        f"<b>{escape(token.name)}</b> (${escape(token.symbol)}){verified}",
        f"<code>{escape(address)}</code>",
        "",
        f"💰 <b>Price:</b> {format_price(token.price)} ({format_percent(token.price_change_24h)})",
        f"📊 <b>Market Cap:</b> {format_usd(token.market_cap)}",
        f"💎 <b>FDV:</b> {format_usd(token.fdv)}",
        "",
        f"💧 <b>Liquidity</b> {score_emoji(scores.liquidity)}".rstrip(),
        f"• Liquidity: {format_usd(token.liquidity_usd)}",
        f"• LP Locked: {format_percent(token.lp_locked_pct, signed=False)}",
        f"• MCap/Liq: {ratio}",
        "",
        f"📈 <b>Volume</b> {score_emoji(scores.volume)}".rstrip(),
        f"• 24h Volume: {format_usd(token.volume_24h_usd)}",
        f"• Wash Risk: {_label(token.wash_risk_label)}",
        "",
        f"👥 <b>Holders</b> {score_emoji(scores.holders)}".rstrip(),
        f"• Holders: {format_count(token.holders)}",
        f"• Top 10: {format_percent(token.top10_pct, signed=False)}",
        f"• Concentration: {_label(token.concentration_label)}",
        "",
        f"🎯 <b>Score: {overall}/100</b> {score_emoji(overall)}",
        f"{recommendation_emoji(token.recommendation)} "
        f"<b>Recommendation: {_recommendation_label(token.recommendation)}</b>",
    ]

    if token.summary:
        lines += ["", f"<i>{escape(token.summary)}</i>"]

    return "\n".join(lines)


def format_quick(token: TokenAnalysis, address: str, overall: int | None = None) -> str:
    """Format a compact analysis for /quick."""
    if overall is None:
        overall = token.overall_score

    return "\n".join(
        [
            f"⚡ <b>{escape(token.name)}</b> (${escape(token.symbol)})",
            f"<code>{escape(address)}</code>",
            f"💰 {format_price(token.price)} ({format_percent(token.price_change_24h)})"
            f" | 📊 MC {format_usd(token.market_cap)}",
            f"💧 Liq {format_usd(token.liquidity_usd)}"
            f" | 📈 Vol {format_usd(token.volume_24h_usd)}",
            f"🎯 <b>{overall}/100</b> {score_emoji(overall)} | "
            f"{recommendation_emoji(token.recommendation)} "
            f"{_recommendation_label(token.recommendation)}",
        ]
    )


def format_watchlist(user: UserRecord, limit: int | None) -> str:
    """Render a user's watchlist."""
    capacity = "unlimited" if limit is None else f"{len(user.watchlist)}/{limit}"

    if not user.watchlist:
        return (
            "👀 <b>Your Watchlist</b>\n\n"
            "Your watchlist is empty.\n"
            "Analyze a token and tap <b>⭐ Watchlist</b> to add it.\n\n"
            f"Slots: {capacity}"
        )

    lines = ["👀 <b>Your Watchlist</b>", ""]
    for index, address in enumerate(user.watchlist, start=1):
        bell = " 🔔" if address in user.alerts else ""
        lines.append(f"{index}. <code>{address}</code>{bell}")
    lines += ["", f"Slots: {capacity}", "Send /analyze &lt;address&gt; to refresh a token."]
    return "\n".join(lines)


def format_user_stats(user: UserRecord, remaining: int | None, referral_link: str) -> str:
    """Render /stats for one user."""
    left = "unlimited" if remaining is None else str(remaining)
    return "\n".join(
        [
            "📊 <b>Your Stats</b>",
            "",
            f"{TIER_EMOJI[user.tier]} Tier: <b>{user.tier.value.upper()}</b>",
            f"🔍 Analyses today: {user.daily_analyses}",
            f"⏳ Remaining today: {left}",
            f"📈 Total analyses: {user.total_analyses}",
            f"👀 Watchlist: {len(user.watchlist)}",
            f"🔔 Alerts: {len(user.alerts)}",
            f"👥 Referrals: {len(user.referrals)}",
            f"📅 Joined: {user.joined_at:%Y-%m-%d}",
            "",
            f"🎁 Your referral link:\n{referral_link}",
        ]
    )


def format_admin_dashboard(
    analytics: AnalyticsSnapshot,
    tiers: dict[Tier, int],
    today: date,
    top_commands: int = 10,
) -> str:
    """Render the /admin dashboard."""
    day = analytics.daily.get(today)
    usage = sorted(analytics.command_usage.items(), key=lambda item: item[1], reverse=True)

    lines = [
        "🛠 <b>Admin Dashboard</b>",
        "",
        f"👥 Total users: {analytics.total_users}",
        f"🔍 Total analyses: {analytics.total_analyses}",
        f"📅 Today: {day.analyses if day else 0} analyses, "
        f"{len(day.active_users) if day else 0} active users",
        "",
        "<b>Tiers</b>",
    ]
    lines += [f"{TIER_EMOJI[tier]} {tier.value}: {tiers.get(tier, 0)}" for tier in Tier]

    lines += ["", "<b>Commands</b>"]
    if usage:
        lines += [f"/{command}: {count}" for command, count in usage[:top_commands]]
    else:
        lines.append("No commands yet")

    return "\n".join(lines)
