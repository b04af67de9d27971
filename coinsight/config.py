"""Configuration loading for coinsight.

Settings come from ``~/.config/coinsight/config.toml`` (or the file named
by ``COINSIGHT_CONFIG``). Every value has a default, so a missing file is
fine. ``COINGECKO_API_KEY`` overrides the CoinGecko key from the file.
"""

import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from coinsight.analysis.synthesizer import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_TASK_TIMEOUT,
    MultiTimeframeSynthesizer,
)
from coinsight.sources import (
    BaseSource,
    CoinCapSource,
    CoinGeckoSource,
    SourceResolver,
    SyntheticGenerator,
)
from coinsight.sources.resolver import DEFAULT_TIMEOUT

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "coinsight" / "config.toml"

KNOWN_SOURCES = ("coingecko", "coincap")


class ConfigError(Exception):
    """Raised when the configuration file cannot be used."""


class Settings(BaseModel):
    """Resolved application settings."""

    source_order: tuple[str, ...] = Field(
        default=KNOWN_SOURCES, description="Sources to try, highest rank first"
    )
    source_timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Per-source timeout in seconds"
    )
    coingecko_api_key: Optional[str] = Field(default=None, description="CoinGecko demo API key")
    max_workers: int = Field(
        default=DEFAULT_MAX_WORKERS, ge=1, description="Timeframes analysed in parallel"
    )
    task_timeout: float = Field(
        default=DEFAULT_TASK_TIMEOUT, gt=0, description="Deadline for timeframe tasks in seconds"
    )

    model_config = {"frozen": True}


def get_config_path() -> Path:
    """Config file location, honouring ``COINSIGHT_CONFIG``."""
    override = os.environ.get("COINSIGHT_CONFIG")
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from the TOML config file and environment.

    Args:
        config_path: Explicit config file. Defaults to ``get_config_path()``.

    Returns:
        Settings with defaults for anything not configured.

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values.
    """
    path = config_path or get_config_path()

    raw: dict = {}
    if path.exists():
        try:
            raw = toml.load(path)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

    sources = raw.get("sources", {})
    coingecko = raw.get("coingecko", {})
    synthesizer = raw.get("synthesizer", {})

    values: dict = {}
    if "order" in sources:
        values["source_order"] = tuple(str(name).lower() for name in sources["order"])
    if "timeout" in sources:
        values["source_timeout"] = sources["timeout"]
    if coingecko.get("api_key"):
        values["coingecko_api_key"] = coingecko["api_key"]
    if "max_workers" in synthesizer:
        values["max_workers"] = synthesizer["max_workers"]
    if "task_timeout" in synthesizer:
        values["task_timeout"] = synthesizer["task_timeout"]

    env_key = os.environ.get("COINGECKO_API_KEY")
    if env_key:
        values["coingecko_api_key"] = env_key

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e


def build_sources(settings: Settings) -> list[BaseSource]:
    """Create the configured sources in rank order.

    Raises:
        ConfigError: If a source name is not recognised.
    """
    sources: list[BaseSource] = []
    for name in settings.source_order:
        if name == "coingecko":
            sources.append(CoinGeckoSource(
                api_key=settings.coingecko_api_key, timeout=settings.source_timeout
            ))
        elif name == "coincap":
            sources.append(CoinCapSource(timeout=settings.source_timeout))
        else:
            raise ConfigError(
                f"Unknown source {name!r}. Must be one of: {', '.join(KNOWN_SOURCES)}"
            )
    return sources


def build_resolver(settings: Settings) -> SourceResolver:
    """Create the source resolution policy from settings."""
    return SourceResolver(
        build_sources(settings),
        generator=SyntheticGenerator(),
        timeout=settings.source_timeout,
    )


def build_synthesizer(settings: Settings) -> MultiTimeframeSynthesizer:
    """Create a multi-timeframe synthesizer from settings."""
    return MultiTimeframeSynthesizer(
        build_resolver(settings),
        max_workers=settings.max_workers,
        task_timeout=settings.task_timeout,
    )
