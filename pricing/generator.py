"""SyntheticSeriesGenerator -- believable demo prices in place of a market feed.

Series are random walks with a slight upward drift and a floor at 70% of
the base price. Exact values are not reproducible unless a seeded or
scripted RandomSource is injected; shapes and ranges always hold.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Mapping

from core.errors import InvalidArgument
from core.models.market import METALS, CurrentPrice, PricePoint
from core.protocols import RandomSource
from pricing.rounding import round2

logger = logging.getLogger(__name__)

BASE_PRICES: dict[str, float] = {
    "gold": 2650.0,  # USD per oz
    "silver": 31.50,  # USD per oz
}

# Fraction of the base price below which a series never falls
PRICE_FLOOR = 0.7
# Max daily move as a fraction of the running price
DAILY_MOVE = 0.03
# Centre of the daily draw; below 0.5 gives an upward bias
DAILY_BIAS = 0.48
# Max intraday distance of high/low from the running price
INTRADAY_BAND = 0.015


@dataclass(frozen=True)
class QuoteProfile:
    """Per-metal shape of a live quote."""

    change_spread: float  # width of the uniform daily change window
    range_band: float  # high/low distance from price, as a fraction


QUOTE_PROFILES: dict[str, QuoteProfile] = {
    "gold": QuoteProfile(change_spread=40.0, range_band=0.008),
    "silver": QuoteProfile(change_spread=0.8, range_band=0.012),
}


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SyntheticSeriesGenerator:
    """Generates historical OHLC series and current quotes.

    Usage:
        generator = SyntheticSeriesGenerator(rng=random.Random(42))
        points = generator.generate_series(2650.0, days=30)   # 31 points
        quote = generator.generate_current_quote("silver")
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        base_prices: Mapping[str, float] | None = None,
        volatility: float = 0.02,
        today: Callable[[], date] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._base_prices = {**BASE_PRICES, **(base_prices or {})}
        self._volatility = volatility
        self._today = today or _utc_today
        self._clock = clock or _utc_now

        for metal, price in self._base_prices.items():
            if price <= 0:
                raise InvalidArgument(f"base price for {metal} must be positive, got {price}")
        if not 0 <= volatility < 1:
            raise InvalidArgument(f"volatility must be in [0, 1), got {volatility}")

    def base_price(self, metal: str) -> float:
        if metal not in METALS:
            raise InvalidArgument(f"metal must be one of {list(METALS)}, got {metal!r}")
        return self._base_prices[metal]

    def generate_series(
        self,
        base_price: float,
        days: int,
        trend: float = 0.0001,
    ) -> list[PricePoint]:
        """Daily OHLC points from `days` ago through today, oldest first.

        Returns days + 1 points on consecutive calendar days. The running
        price starts `trend * days` below the base so the walk ends near it.
        """
        if isinstance(days, bool) or not isinstance(days, int):
            raise InvalidArgument(f"days must be an integer, got {days!r}")
        if days < 0:
            raise InvalidArgument(f"days must not be negative, got {days}")
        if not math.isfinite(base_price) or base_price <= 0:
            raise InvalidArgument(f"base_price must be positive, got {base_price!r}")

        rng = self._rng
        today = self._today()
        floor = base_price * PRICE_FLOOR
        current = base_price * (1 - trend * days)
        points: list[PricePoint] = []

        for offset in range(days, -1, -1):
            daily_change = (rng.random() - DAILY_BIAS) * DAILY_MOVE * current
            current = max(current + daily_change, floor)

            high = current * (1 + rng.random() * INTRADAY_BAND)
            low = current * (1 - rng.random() * INTRADAY_BAND)
            open_ = low + rng.random() * (high - low)
            close = low + rng.random() * (high - low)

            points.append(PricePoint(
                date=today - timedelta(days=offset),
                price=round2(close),
                open=round2(open_),
                high=round2(high),
                low=round2(low),
                close=round2(close),
            ))

        logger.debug("Generated %d-point series from base %.2f", len(points), base_price)
        return points

    def generate_current_quote(self, metal: str) -> CurrentPrice:
        """A live quote: the base price jittered by up to +/- volatility."""
        base = self.base_price(metal)
        profile = QUOTE_PROFILES[metal]
        rng = self._rng

        variation = (rng.random() - 0.5) * 2 * self._volatility * base
        price = round2(base + variation)
        change = (rng.random() - 0.5) * profile.change_spread

        return CurrentPrice(
            metal=metal,
            price=price,
            currency="USD",
            change=round2(change),
            change_percent=round2(change / price * 100),
            high_24h=price * (1 + profile.range_band),
            low_24h=price * (1 - profile.range_band),
            timestamp=self._clock(),
            unit="oz",
        )
