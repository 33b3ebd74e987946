"""Lightweight aiohttp server -- the JSON API behind the price site.

Exposes live quotes, historical series, the converter/calculator, the
gold/silver ratio and reference lists. No framework magic, no middleware stack.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from aiohttp import web

from core.errors import MetalRatesError
from core.models.market import METALS
from pricing.ratio import analyze_ratio
from pricing.summary import summarize_series

if TYPE_CHECKING:
    from core.bus import AsyncIOBus
    from core.config import AppConfig
    from core.models.events import Event
    from core.protocols import QuoteProvider
    from pricing.conversion import ConversionEngine
    from scheduler.refresher import QuoteRefresher

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig,
    bus: AsyncIOBus,
    provider: QuoteProvider,
    engine: ConversionEngine,
    refresher: QuoteRefresher,
) -> web.Application:
    """Create and configure the aiohttp application."""
    app = web.Application()

    # Store references for route handlers
    app["config"] = config
    app["bus"] = bus
    app["provider"] = provider
    app["engine"] = engine
    app["refresher"] = refresher

    # Register routes
    app.router.add_get("/health", handle_health)
    app.router.add_get("/prices/current", handle_current_prices)
    app.router.add_get("/prices/history/{metal}", handle_history)
    app.router.add_get("/convert", handle_convert)
    app.router.add_get("/calculate", handle_calculate)
    app.router.add_get("/ratio", handle_ratio)
    app.router.add_get("/reference/currencies", handle_currencies)
    app.router.add_get("/reference/units", handle_units)
    app.router.add_get("/news", handle_news)
    app.router.add_get("/events", handle_stream_events)

    return app


def _error(message: str, status: int = 400) -> web.Response:
    return web.json_response({"error": message}, status=status)


async def _latest_quotes(request: web.Request) -> dict:
    """Latest refreshed quotes, refreshing once if none exist yet."""
    refresher: QuoteRefresher = request.app["refresher"]
    quotes = refresher.latest
    if not quotes:
        quotes = await refresher.refresh_now()
    return quotes


# ---------------------------------------------------------------------------
# Route handlers
# ---------------------------------------------------------------------------

async def handle_health(request: web.Request) -> web.Response:
    """GET /health -- health check."""
    refresher: QuoteRefresher = request.app["refresher"]
    provider: QuoteProvider = request.app["provider"]
    last_update = refresher.last_update
    return web.json_response({
        "status": "ok",
        "provider": provider.name,
        "auto_refresh": refresher.running,
        "refresh_count": refresher.refresh_count,
        "last_update": last_update.isoformat() if last_update else None,
    })


async def handle_current_prices(request: web.Request) -> web.Response:
    """GET /prices/current -- latest quote for every metal."""
    quotes = await _latest_quotes(request)
    return web.json_response({m: q.model_dump(mode="json") for m, q in quotes.items()})


async def handle_history(request: web.Request) -> web.Response:
    """GET /prices/history/{metal}?range=1M -- daily series plus period summary."""
    provider: QuoteProvider = request.app["provider"]
    metal = request.match_info["metal"].lower()
    time_range = request.query.get("range", "1M")

    if metal not in METALS:
        return _error(f"metal must be one of {list(METALS)}", status=404)

    try:
        points = await provider.fetch_historical_prices(metal, time_range)
        summary = summarize_series(points)
    except MetalRatesError as exc:
        return _error(str(exc))

    return web.json_response({
        "metal": metal,
        "range": time_range.upper(),
        "points": [p.model_dump(mode="json") for p in points],
        "summary": summary.model_dump(mode="json"),
    })


async def handle_convert(request: web.Request) -> web.Response:
    """GET /convert?price=2650&from=USD&to=EUR&unit=g -- currency/unit conversion."""
    engine: ConversionEngine = request.app["engine"]
    query = request.query

    if "price" not in query:
        return _error("Missing required parameter: price")
    try:
        price = float(query["price"])
    except ValueError:
        return _error("price must be a number")

    from_currency = query.get("from", "USD")
    to_currency = query.get("to", "USD")
    unit = query.get("unit", "oz")

    try:
        result = engine.convert(price, from_currency, to_currency, unit)
    except MetalRatesError as exc:
        return _error(str(exc))

    return web.json_response({
        "price": price,
        "from": from_currency.upper(),
        "to": to_currency.upper(),
        "unit": unit,
        "result": result,
        "symbol": engine.symbol_for(to_currency),
    })


async def handle_calculate(request: web.Request) -> web.Response:
    """GET /calculate?metal=gold&amount=1&unit=oz&currency=USD -- value calculator."""
    engine: ConversionEngine = request.app["engine"]
    query = request.query
    quotes = await _latest_quotes(request)

    try:
        result = engine.calculate(
            metal=query.get("metal", "gold").lower(),
            amount=query.get("amount", "1"),
            unit=query.get("unit", "oz"),
            currency=query.get("currency", "USD"),
            gold_price=quotes["gold"].price,
            silver_price=quotes["silver"].price,
        )
    except MetalRatesError as exc:
        return _error(str(exc))

    data = result.model_dump(mode="json")
    data["symbol"] = engine.symbol_for(result.to_unit)
    return web.json_response(data)


async def handle_ratio(request: web.Request) -> web.Response:
    """GET /ratio -- gold/silver ratio from the latest quotes."""
    quotes = await _latest_quotes(request)
    analysis = analyze_ratio(quotes["gold"].price, quotes["silver"].price)
    return web.json_response(analysis.model_dump(mode="json"))


async def handle_currencies(request: web.Request) -> web.Response:
    """GET /reference/currencies -- supported currencies with their rates."""
    engine: ConversionEngine = request.app["engine"]
    return web.json_response([
        {**c.model_dump(), "rate": engine.tables.rate(c.code)}
        for c in engine.currencies()
    ])


async def handle_units(request: web.Request) -> web.Response:
    """GET /reference/units -- supported weight units with troy-ounce factors."""
    engine: ConversionEngine = request.app["engine"]
    return web.json_response([
        {**u.model_dump(), "troy_oz": engine.tables.weight_multiplier(u.code)}
        for u in engine.units()
    ])


async def handle_news(request: web.Request) -> web.Response:
    """GET /news -- market headlines."""
    provider: QuoteProvider = request.app["provider"]
    articles = await provider.fetch_market_news()
    return web.json_response([a.model_dump(mode="json") for a in articles])


async def handle_stream_events(request: web.Request) -> web.StreamResponse:
    """GET /events -- Server-Sent Events stream of refreshed quotes."""
    from core.models.events import EventTypes

    bus: AsyncIOBus = request.app["bus"]

    response = web.StreamResponse(
        status=200,
        reason="OK",
        headers={
            "Content-Type": "text/event-stream",
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
    await response.prepare(request)

    queue: asyncio.Queue[Event] = asyncio.Queue()

    async def forward_event(event: Event) -> None:
        await queue.put(event)

    bus.subscribe(EventTypes.PRICES_UPDATED, forward_event)

    try:
        while True:
            event = await queue.get()
            data = event.model_dump_json()
            await response.write(f"event: {event.type}\ndata: {data}\n\n".encode())
    except (asyncio.CancelledError, ConnectionResetError):
        pass
    finally:
        bus.unsubscribe(EventTypes.PRICES_UPDATED, forward_event)

    return response
