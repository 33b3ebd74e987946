"""Pricing core -- conversions, synthetic quotes and series, and derived analytics."""

from pricing.conversion import ConversionEngine
from pricing.generator import SyntheticSeriesGenerator
from pricing.provider import SyntheticQuoteProvider
from pricing.ranges import fetch_historical_days
from pricing.ratio import analyze_ratio
from pricing.rounding import round2
from pricing.summary import summarize_series

__all__ = [
    "ConversionEngine",
    "SyntheticSeriesGenerator",
    "SyntheticQuoteProvider",
    "analyze_ratio",
    "fetch_historical_days",
    "round2",
    "summarize_series",
]
