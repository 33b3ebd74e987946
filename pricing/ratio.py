"""Gold/silver ratio analysis -- ounces of silver needed to buy one ounce of gold."""

from __future__ import annotations

import math

from core.errors import InvalidArgument
from core.models.reference import RatioAnalysis

HISTORICAL_AVERAGE = 60.0
# Ratio bands: silver is relatively cheap above the first, gold below the second
SILVER_FAVOURED_ABOVE = 80.0
GOLD_FAVOURED_BELOW = 50.0


def analyze_ratio(
    gold_price: float,
    silver_price: float,
    historical_average: float = HISTORICAL_AVERAGE,
) -> RatioAnalysis:
    """Compare the current gold/silver ratio with its long-run average."""
    for label, value in (("gold_price", gold_price), ("silver_price", silver_price),
                         ("historical_average", historical_average)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidArgument(f"{label} must be positive, got {value!r}")

    ratio = gold_price / silver_price

    if ratio > SILVER_FAVOURED_ABOVE:
        status = "Silver Undervalued"
        description = "Silver may be a better value relative to gold at current prices."
    elif ratio < GOLD_FAVOURED_BELOW:
        status = "Gold Undervalued"
        description = "Gold may be a better value relative to silver at current prices."
    else:
        status = "Normal Range"
        description = "The gold/silver ratio is within historical norms."

    return RatioAnalysis(
        gold_price=gold_price,
        silver_price=silver_price,
        ratio=round(ratio, 2),
        historical_average=historical_average,
        deviation_percent=round((ratio - historical_average) / historical_average * 100, 1),
        is_above_average=ratio > historical_average,
        status=status,
        description=description,
    )
