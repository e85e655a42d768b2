"""Configuration loading for PulseWatch.

Settings live in a TOML file (``~/.config/pulsewatch/config.toml`` by
default). API keys may also come from environment variables, which
take precedence over the file.
"""

import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from pulsewatch.errors import ConfigError


DEFAULT_CONFIG_DIR = Path.home() / ".config" / "pulsewatch"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

DEFAULT_ASSETS = ["bitcoin", "ethereum", "solana"]
DEFAULT_LOCATIONS = ["London", "New York", "Tokyo", "Paris", "Sydney"]


class MonitorConfig(BaseModel):
    """Monitor engine settings. Intervals and cooldowns are in milliseconds."""

    update_interval: int = Field(default=10_000, gt=0, description="Tick period (ms)")
    weather_check_interval: int = Field(
        default=60_000, ge=0, description="Minimum time between weather checks (ms)"
    )
    alert_threshold: float = Field(
        default=2.0, ge=0, description="Absolute 24h change (%) that triggers a price alert"
    )
    alert_cooldown: int = Field(
        default=300_000, ge=0, description="Minimum time between alerts with the same key (ms)"
    )
    assets: list[str] = Field(default_factory=lambda: list(DEFAULT_ASSETS))
    locations: list[str] = Field(default_factory=lambda: list(DEFAULT_LOCATIONS))

    model_config = {"frozen": True}


class AppConfig(BaseModel):
    """Complete application configuration."""

    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    openweather_api_key: Optional[str] = Field(default=None)
    news_api_key: Optional[str] = Field(default=None)
    http_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout (seconds)")

    model_config = {"frozen": True}


def _section(raw: dict, name: str, path: Path) -> dict:
    """Return a top-level table, or an empty one if the file omits it."""
    section = raw.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Invalid configuration in {path}: [{name}] must be a table")
    return section


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration from file and environment.
    
    A missing file is not an error: defaults apply.
    
    Args:
        config_path: Path to the TOML file (default location if omitted).
        
    Returns:
        AppConfig with file values, environment overrides, and defaults.
        
    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    raw: dict = {}
    if path.exists():
        try:
            raw = toml.load(path)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

    monitor = _section(raw, "monitor", path)
    openweather = _section(raw, "openweather", path)
    newsapi = _section(raw, "newsapi", path)
    http = _section(raw, "http", path)

    openweather_key = os.environ.get("OPENWEATHER_API_KEY") or openweather.get("api_key") or None
    news_key = os.environ.get("NEWS_API_KEY") or newsapi.get("api_key") or None

    try:
        return AppConfig(
            monitor=MonitorConfig(**monitor),
            openweather_api_key=openweather_key,
            news_api_key=news_key,
            http_timeout=http.get("timeout", 10.0),
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file.
    
    Args:
        config_path: Where to write (default location if omitted).
        
    Returns:
        Path of the written file.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    defaults = MonitorConfig()
    template = {
        "monitor": defaults.model_dump(),
        "openweather": {"api_key": ""},
        "newsapi": {"api_key": ""},
        "http": {"timeout": 10.0},
    }

    with open(path, "w") as f:
        toml.dump(template, f)

    return path
