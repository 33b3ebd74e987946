"""Configuration loader -- reads config.yaml + .env, validates with Pydantic.

Resolves ${ENV_VAR} references in YAML values from environment variables.
Fails fast with clear errors if a value does not validate.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from core.duration import parse_duration
from core.tables import MarketTables

logger = logging.getLogger(__name__)

# Default home directory for config.yaml and .env
DEFAULT_HOME = Path.home() / ".metalrates"


def _resolve_env_vars(value: Any) -> Any:
    """Recursively resolve ${ENV_VAR} references in config values."""
    if isinstance(value, str):
        pattern = re.compile(r"\$\{(\w+)\}")
        def replacer(match: re.Match) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                logger.warning("Environment variable %s not set", var_name)
                return match.group(0)  # leave unresolved
            return env_value
        return pattern.sub(replacer, value)
    elif isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# Config models (Pydantic)
# ---------------------------------------------------------------------------

class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080


class PricingConfig(BaseModel):
    gold_base_price: float = Field(default=2650.0, gt=0)  # USD per oz
    silver_base_price: float = Field(default=31.50, gt=0)  # USD per oz
    volatility: float = Field(default=0.02, ge=0, lt=1)
    trend: float = 0.0001
    history_latency: str | int | float = "300ms"  # bare numbers are seconds

    @field_validator("history_latency")
    @classmethod
    def _check_latency(cls, value: str | int | float) -> str | int | float:
        parse_duration(value)
        return value

    @property
    def history_latency_delta(self) -> timedelta:
        return parse_duration(self.history_latency)

    @property
    def base_prices(self) -> dict[str, float]:
        return {"gold": self.gold_base_price, "silver": self.silver_base_price}


class RefreshConfig(BaseModel):
    enabled: bool = True
    interval: str | int | float = "30s"

    @field_validator("interval")
    @classmethod
    def _check_interval(cls, value: str | int | float) -> str | int | float:
        if parse_duration(value).total_seconds() <= 0:
            raise ValueError("refresh interval must be positive")
        return value

    @property
    def interval_seconds(self) -> float:
        return parse_duration(self.interval).total_seconds()


class TablesConfig(BaseModel):
    """Optional overrides merged onto the built-in rate and weight tables."""

    currency_rates: dict[str, float] = Field(default_factory=dict)
    weight_conversions: dict[str, float] = Field(default_factory=dict)

    @field_validator("currency_rates", "weight_conversions")
    @classmethod
    def _check_positive(cls, value: dict[str, float]) -> dict[str, float]:
        for code, factor in value.items():
            if factor <= 0:
                raise ValueError(f"factor for {code!r} must be positive, got {factor}")
        return value


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    """Top-level application configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)
    tables: TablesConfig = Field(default_factory=TablesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def build_tables(self) -> MarketTables:
        """Built-in tables with any configured overrides applied."""
        tables = MarketTables.default()
        if self.tables.currency_rates or self.tables.weight_conversions:
            tables = tables.with_overrides(
                currency_rates=self.tables.currency_rates,
                weight_conversions=self.tables.weight_conversions,
            )
            logger.info(
                "Applied table overrides: %d currencies, %d units",
                len(self.tables.currency_rates), len(self.tables.weight_conversions),
            )
        return tables


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_config(
    config_path: str | Path | None = None,
    env_path: str | Path | None = None,
) -> AppConfig:
    """Load configuration from YAML + .env files.

    1. Load .env into environment variables
    2. Load config.yaml and resolve ${ENV_VAR} references
    3. Validate against Pydantic models
    """
    home = Path(os.environ.get("METALRATES_HOME", str(DEFAULT_HOME))).expanduser()

    if env_path is None:
        env_path = home / ".env"
    if config_path is None:
        config_path = home / "config.yaml"

    env_path = Path(env_path)
    config_path = Path(config_path)

    if env_path.exists():
        load_dotenv(env_path)
        logger.info("Loaded environment from %s", env_path)
    else:
        logger.debug("No .env file at %s", env_path)

    raw_config: dict = {}
    if config_path.exists():
        with open(config_path) as f:
            raw_config = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    else:
        logger.warning("No config file at %s, using defaults", config_path)

    resolved = _resolve_env_vars(raw_config)

    return AppConfig(**resolved)
