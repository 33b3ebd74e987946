"""Chart time ranges and the number of calendar days each one covers."""

from __future__ import annotations

from core.errors import InvalidArgument

HISTORY_DAYS: dict[str, int] = {
    "1D": 1,
    "1W": 7,
    "1M": 30,
    "3M": 90,
    "6M": 180,
    "1Y": 365,
    "5Y": 1825,
    "ALL": 3650,
}


def fetch_historical_days(time_range: str) -> int:
    """Return the day count for a chart range such as '1M' or 'ALL'."""
    key = (time_range or "").strip().upper()
    if key not in HISTORY_DAYS:
        raise InvalidArgument(
            f"Unknown time range {time_range!r}. Must be one of: {list(HISTORY_DAYS)}"
        )
    return HISTORY_DAYS[key]
