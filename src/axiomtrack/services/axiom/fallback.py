"""Canned Axiom data served when live data is unavailable.

The records have the same shape as live responses, so consumers only see the
difference in content. Launch identifiers carry random base-36 suffixes; pass
a seeded ``random.Random`` and a fixed clock to make them reproducible.
"""

from __future__ import annotations

import random
import string
from collections.abc import Callable

from axiomtrack.models.token import LaunchEvent, TrendingMetrics
from axiomtrack.services.axiom.normalize import now_ms

_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 6

_TRENDING_RECORDS: tuple[dict, ...] = (
    {
        "rank": 1,
        "score": 95,
        "mint": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
        "name": "Bonk",
        "symbol": "BONK",
        "liquidity_sol": 50_000,
        "liquidity_usd": 7_500_000,
        "volume_24h": 25_000_000,
        "price_usd": 0.00003,
        "price_change_24h": 15.5,
        "holders": 500_000,
        "market_cap": 2_000_000_000,
        "created_at": "2022-12-25",
    },
    {
        "rank": 2,
        "score": 88,
        "mint": "7GCihgDB8fe6KNjn2MYtkzZcRjQy3t9GHdC8uHYmW2hr",
        "name": "Popcat",
        "symbol": "POPCAT",
        "liquidity_sol": 30_000,
        "liquidity_usd": 4_500_000,
        "volume_24h": 15_000_000,
        "price_usd": 1.25,
        "price_change_24h": 8.2,
        "holders": 150_000,
        "market_cap": 1_200_000_000,
        "created_at": "2024-01-15",
    },
    {
        "rank": 3,
        "score": 82,
        "mint": "MEW1gQWJ3nEXg2qgERiKu7FAFj79PHvQVREQUzScPP5",
        "name": "Cat in a Dogs World",
        "symbol": "MEW",
        "liquidity_sol": 25_000,
        "liquidity_usd": 3_750_000,
        "volume_24h": 10_000_000,
        "price_usd": 0.008,
        "price_change_24h": -3.5,
        "holders": 200_000,
        "market_cap": 800_000_000,
        "created_at": "2024-03-01",
    },
)

# (mint prefix, name, symbol, liquidity SOL, age in ms)
_LAUNCH_TEMPLATES: tuple[tuple[str, str, str, float, int], ...] = (
    ("NEW1", "New Meme Token", "NEWMEME", 50, 60_000),
    ("NEW2", "Fresh Launch", "FRESH", 100, 120_000),
)
_DEPLOYER_PREFIX = "DeP1oy3r"


class FallbackDataset:
    """Factory for the fixed fallback records."""

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """Initialize the dataset.

        Args:
            rng: Source of randomness for identifier suffixes.
            clock: Returns the current time in epoch milliseconds.
        """
        self._rng = rng or random.Random()
        self._clock = clock

    def trending(self) -> list[TrendingMetrics]:
        return [TrendingMetrics(**record) for record in _TRENDING_RECORDS]

    def new_launches(self) -> list[LaunchEvent]:
        now = self._clock()
        return [
            LaunchEvent(
                mint=prefix + self._suffix(),
                name=name,
                symbol=symbol,
                liquidity_sol=liquidity,
                deployer=_DEPLOYER_PREFIX + self._suffix(),
                timestamp=now - age_ms,
            )
            for prefix, name, symbol, liquidity, age_ms in _LAUNCH_TEMPLATES
        ]

    def _suffix(self) -> str:
        return "".join(self._rng.choices(_SUFFIX_ALPHABET, k=_SUFFIX_LENGTH))
