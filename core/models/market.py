"""Market data models -- spot quotes, historical price points and series summaries."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

Metal = Literal["gold", "silver"]
TimeRange = Literal["1D", "1W", "1M", "3M", "6M", "1Y", "5Y", "ALL"]

METALS: tuple[str, ...] = ("gold", "silver")
TIME_RANGES: tuple[str, ...] = ("1D", "1W", "1M", "3M", "6M", "1Y", "5Y", "ALL")


class PricePoint(BaseModel):
    """One calendar day of a historical series.

    `price` always equals `close`; both are kept because chart consumers
    plot `price` while candle consumers read the OHLC fields.
    """

    date: date
    price: float
    open: float
    high: float
    low: float
    close: float


class CurrentPrice(BaseModel):
    """A live spot quote for one metal, per troy ounce in USD."""

    metal: Metal
    price: float
    currency: str = "USD"
    change: float = 0.0
    change_percent: float = 0.0
    high_24h: float
    low_24h: float
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    unit: str = "oz"


class SeriesSummary(BaseModel):
    """Period statistics shown alongside a price chart."""

    start_price: float
    end_price: float
    change: float
    change_percent: float
    high: float
    low: float
    average: float
    points: int
