"""Core protocols -- the extension points between pricing components.

All protocols use Python's structural subtyping (typing.Protocol):
if your class has the right methods, it implements the protocol.
No inheritance required.
"""

from __future__ import annotations

from typing import Any, Callable, Coroutine, Protocol, runtime_checkable

from core.models.events import Event
from core.models.market import CurrentPrice, PricePoint
from core.models.reference import NewsArticle


# ---------------------------------------------------------------------------
# 1. RandomSource -- entropy for the synthetic generators
# ---------------------------------------------------------------------------

@runtime_checkable
class RandomSource(Protocol):
    """Yields floats uniformly distributed in [0, 1).

    `random.Random` and the `random` module itself satisfy this protocol.
    Tests inject seeded or scripted sources to pin exact outputs.
    """

    def random(self) -> float:
        ...


# ---------------------------------------------------------------------------
# 2. EventBus -- fan-out of refreshed quotes
# ---------------------------------------------------------------------------

@runtime_checkable
class EventBus(Protocol):
    """Publish/subscribe event bus.

    Default implementation: AsyncIOBus (in-process pub/sub).
    """

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribers of its type."""
        ...

    def subscribe(self, event_type: str, callback: Callable[[Event], Coroutine[Any, Any, None]]) -> None:
        """Register a callback for events of the given type."""
        ...

    def unsubscribe(self, event_type: str, callback: Callable[[Event], Coroutine[Any, Any, None]]) -> None:
        """Remove a previously registered callback."""
        ...


# ---------------------------------------------------------------------------
# 3. QuoteProvider -- source of current and historical prices
# ---------------------------------------------------------------------------

@runtime_checkable
class QuoteProvider(Protocol):
    """Supplies spot quotes, historical series and headlines.

    The bundled implementation is SyntheticQuoteProvider. A live market-data
    client would implement the same methods and return the same shapes.
    """

    @property
    def name(self) -> str:
        """Unique provider name, e.g. 'synthetic'."""
        ...

    async def fetch_current_prices(self) -> dict[str, CurrentPrice]:
        """Return the current quote for every supported metal, keyed by metal."""
        ...

    async def fetch_historical_prices(self, metal: str, time_range: str) -> list[PricePoint]:
        """Return a daily series covering `time_range`, oldest first."""
        ...

    async def fetch_market_news(self) -> list[NewsArticle]:
        """Return recent market headlines, newest first."""
        ...
