"""
Mock analysis client for development.

Generates realistic-looking analyses without calling the API.
Uses deterministic random generation based on address for consistent results.
"""

import hashlib
import random

from memeiq.core.models import Recommendation, TokenAnalysis, TokenScores


class MockTokenAnalysisClient:
    """
    Mock implementation of TokenAnalysisClient protocol.

    The same address always returns the same analysis.

    Usage:
        client = MockTokenAnalysisClient()
        token = await client.analyze("DezX...")
    """

    # Realistic token name/symbol pairs for mocking
    MOCK_TOKENS = [
        ("Bonk", "BONK"),
        ("Dogwifhat", "WIF"),
        ("Popcat", "POPCAT"),
        ("Book of Meme", "BOME"),
        ("Myro", "MYRO"),
        ("Slerf", "SLERF"),
        ("Wen", "WEN"),
        ("Samoyedcoin", "SAMO"),
        ("Mother Iggy", "MOTHER"),
        ("Gigachad", "GIGA"),
    ]

    WASH_RISK_LABELS = ["LOW", "MEDIUM", "HIGH"]
    CONCENTRATION_LABELS = ["HEALTHY", "MODERATE", "CONCENTRATED"]

    async def analyze(self, address: str) -> TokenAnalysis:
        """
        Generate a mock analysis for the given address.

        Args:
            address: Solana token address

        Returns:
            TokenAnalysis with mock values
        """
        # Create deterministic seed from address
        seed = int(hashlib.md5(address.encode()).hexdigest(), 16) % (2**32)
        rng = random.Random(seed)

        name, symbol = rng.choice(self.MOCK_TOKENS)

        price = 10 ** rng.uniform(-9, 0)
        supply = rng.choice([1e9, 1e10, 1e12])
        market_cap = price * supply * rng.uniform(0.5, 1.0)
        liquidity = market_cap * rng.uniform(0.02, 0.3)
        top10 = rng.uniform(10, 90)

        scores = TokenScores(
            liquidity=rng.randint(10, 100),
            volume=rng.randint(10, 100),
            holders=max(0, min(100, round(100 - top10 + rng.randint(-10, 10)))),
        )
        overall = scores.resolve_overall()

        if overall >= 75:
            recommendation = Recommendation.BUY
        elif overall >= 50:
            recommendation = Recommendation.CAUTION
        else:
            recommendation = Recommendation.AVOID

        return TokenAnalysis(
            name=name,
            symbol=symbol,
            verified=rng.random() > 0.5,
            price=price,
            price_change_24h=round(rng.uniform(-60, 150), 2),
            market_cap=round(market_cap, 2),
            fdv=round(price * supply, 2),
            liquidity_usd=round(liquidity, 2),
            lp_locked_pct=round(rng.uniform(0, 100), 2),
            mcap_liq_ratio=round(market_cap / liquidity, 2),
            volume_24h_usd=round(liquidity * rng.uniform(0.1, 5), 2),
            wash_risk_label=rng.choice(self.WASH_RISK_LABELS),
            holders=rng.randint(50, 200_000),
            top10_pct=round(top10, 2),
            concentration_label=rng.choice(self.CONCENTRATION_LABELS),
            recommendation=recommendation,
            scores=scores,
            summary=f"Mock analysis for {symbol}. Generated offline, not real market data.",
        )
