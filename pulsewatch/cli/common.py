"""Shared helpers for PulseWatch CLI commands."""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from pulsewatch.cli.main import console
from pulsewatch.config import AppConfig, load_config
from pulsewatch.errors import ConfigError


def error_panel(title: str, message: str) -> None:
    """Print an error panel in the standard style."""
    console.print(Panel(
        f"[red]{title}[/red]\n\n{message}",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def get_config(ctx: click.Context) -> AppConfig:
    """Load configuration for a command, exiting with status 1 on failure."""
    obj = ctx.find_object(dict) or {}
    config_path: Optional[Path] = obj.get("config_path")
    try:
        return load_config(config_path)
    except ConfigError as e:
        error_panel("Configuration error:", str(e))
        raise SystemExit(1)


def build_price_source(config: AppConfig, offline: bool):
    """Get the price source for the given mode."""
    if offline:
        from pulsewatch.sources.simulated import SimulatedPriceSource
        return SimulatedPriceSource()

    from pulsewatch.sources.coingecko import CoinGeckoPriceSource
    return CoinGeckoPriceSource(timeout=config.http_timeout)


def build_weather_source(config: AppConfig):
    """Get the weather source, or None if no API key is configured."""
    if not config.openweather_api_key:
        return None

    from pulsewatch.sources.openweather import OpenWeatherSource
    return OpenWeatherSource(config.openweather_api_key, timeout=config.http_timeout)
