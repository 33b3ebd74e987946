"""metalrates entrypoint -- wires all components together and starts the server.

Usage:
    python main.py
    python main.py --config /path/to/config.yaml
    python main.py --no-refresh
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from aiohttp import web

from core.bus import AsyncIOBus
from core.config import AppConfig, load_config
from pricing.conversion import ConversionEngine
from pricing.generator import SyntheticSeriesGenerator
from pricing.provider import SyntheticQuoteProvider
from scheduler.refresher import QuoteRefresher
from server import create_app


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Quiet down noisy libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="metalrates gold and silver price service")
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config.yaml (default: ~/.metalrates/config.yaml)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help="Path to .env file (default: ~/.metalrates/.env)",
    )
    parser.add_argument(
        "--no-refresh",
        action="store_true",
        help="Disable the periodic quote refresh",
    )
    return parser.parse_args(argv)


def build_components(config: AppConfig) -> dict:
    """Construct the shared tables, pricing components and refresher from config."""
    tables = config.build_tables()
    generator = SyntheticSeriesGenerator(
        base_prices=config.pricing.base_prices,
        volatility=config.pricing.volatility,
    )
    provider = SyntheticQuoteProvider(
        generator=generator,
        latency=config.pricing.history_latency_delta.total_seconds(),
        trend=config.pricing.trend,
    )
    bus = AsyncIOBus()
    refresher = QuoteRefresher(
        provider=provider,
        bus=bus,
        interval=config.refresh.interval_seconds,
    )
    return {
        "tables": tables,
        "engine": ConversionEngine(tables),
        "generator": generator,
        "provider": provider,
        "bus": bus,
        "refresher": refresher,
    }


async def run(
    config_path: str | None = None,
    env_path: str | None = None,
    auto_refresh: bool = True,
) -> None:
    """Initialize all components and start the server."""
    config = load_config(config_path=config_path, env_path=env_path)
    logging.getLogger().setLevel(getattr(logging, config.logging.level.upper(), logging.INFO))
    logger = logging.getLogger("metalrates")

    components = build_components(config)
    refresher: QuoteRefresher = components["refresher"]

    app = create_app(
        config=config,
        bus=components["bus"],
        provider=components["provider"],
        engine=components["engine"],
        refresher=refresher,
    )

    # Prime the snapshot so the first request never waits on a refresh
    await refresher.refresh_now()
    if auto_refresh and config.refresh.enabled:
        await refresher.start()
    else:
        logger.info("Auto-refresh disabled")

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, config.server.host, config.server.port)
    await site.start()

    logger.info(
        "metalrates running at http://%s:%d",
        config.server.host,
        config.server.port,
    )

    # Run until interrupted
    try:
        await asyncio.Event().wait()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        logger.info("Shutting down...")
        await refresher.stop()
        await runner.cleanup()
        logger.info("Shutdown complete")


def main() -> None:
    args = parse_args()
    setup_logging("INFO")
    try:
        asyncio.run(run(config_path=args.config, env_path=args.env, auto_refresh=not args.no_refresh))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
