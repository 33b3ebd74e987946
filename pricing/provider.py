"""SyntheticQuoteProvider -- serves generated quotes through the QuoteProvider protocol.

Stands in for a live market-data client: same method names, same return
shapes, and an artificial delay on historical requests so consumers see
realistic loading behaviour.
"""

from __future__ import annotations

import asyncio
import logging

from core.errors import InvalidArgument
from core.models.market import METALS, CurrentPrice, PricePoint
from core.models.reference import NewsArticle
from pricing.generator import SyntheticSeriesGenerator
from pricing.news import market_news
from pricing.ranges import fetch_historical_days

logger = logging.getLogger(__name__)


class SyntheticQuoteProvider:
    """Implements the QuoteProvider protocol on top of SyntheticSeriesGenerator.

    Usage:
        provider = SyntheticQuoteProvider(SyntheticSeriesGenerator(), latency=0.3)
        quotes = await provider.fetch_current_prices()
        series = await provider.fetch_historical_prices("gold", "1M")
    """

    def __init__(
        self,
        generator: SyntheticSeriesGenerator | None = None,
        latency: float = 0.3,
        trend: float = 0.0001,
    ) -> None:
        self._generator = generator or SyntheticSeriesGenerator()
        self._latency = max(latency, 0.0)
        self._trend = trend

    @property
    def name(self) -> str:
        return "synthetic"

    @property
    def generator(self) -> SyntheticSeriesGenerator:
        return self._generator

    async def fetch_current_prices(self) -> dict[str, CurrentPrice]:
        """Fresh quotes for every metal, keyed by metal name."""
        quotes = {metal: self._generator.generate_current_quote(metal) for metal in METALS}
        logger.debug(
            "Generated quotes: %s",
            ", ".join(f"{m}={q.price:.2f}" for m, q in quotes.items()),
        )
        return quotes

    async def fetch_historical_prices(self, metal: str, time_range: str) -> list[PricePoint]:
        """Daily series for `metal` covering `time_range` (e.g. '1M')."""
        if metal not in METALS:
            raise InvalidArgument(f"metal must be one of {list(METALS)}, got {metal!r}")
        days = fetch_historical_days(time_range)

        if self._latency:
            await asyncio.sleep(self._latency)

        base_price = self._generator.base_price(metal)
        return self._generator.generate_series(base_price, days, trend=self._trend)

    async def fetch_market_news(self) -> list[NewsArticle]:
        return market_news()
