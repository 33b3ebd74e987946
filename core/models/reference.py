"""Reference and derived models -- lookup lists, calculator results, ratio analysis, news."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from core.models.market import Metal


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    symbol: str


class WeightUnit(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str


class ConversionResult(BaseModel):
    """Value of an amount of metal expressed in a currency.

    `to_unit` carries the currency code the value is expressed in.
    """

    from_amount: float
    from_unit: str
    to_amount: float
    to_unit: str
    metal: Metal
    price_per_unit: float


class RatioAnalysis(BaseModel):
    """Gold/silver ratio compared against its long-run average."""

    gold_price: float
    silver_price: float
    ratio: float
    historical_average: float = 60.0
    deviation_percent: float
    is_above_average: bool
    status: str
    description: str


class NewsArticle(BaseModel):
    id: str
    title: str
    summary: str
    url: str
    source: str
    published_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    image_url: str | None = None
