"""Period statistics over a historical series, as shown under the price chart."""

from __future__ import annotations

from typing import Sequence

from core.errors import InvalidArgument
from core.models.market import PricePoint, SeriesSummary
from pricing.rounding import round2


def summarize_series(points: Sequence[PricePoint]) -> SeriesSummary:
    """Change over the period plus the high, low and mean price.

    The change is measured from the first point's price to the last one's.
    """
    if not points:
        raise InvalidArgument("cannot summarize an empty series")

    start = points[0].price
    end = points[-1].price
    change = end - start
    change_percent = change / start * 100 if start else 0.0

    return SeriesSummary(
        start_price=start,
        end_price=end,
        change=round2(change),
        change_percent=round2(change_percent),
        high=max(p.high or p.price for p in points),
        low=min(p.low or p.price for p in points),
        average=round2(sum(p.price for p in points) / len(points)),
        points=len(points),
    )
