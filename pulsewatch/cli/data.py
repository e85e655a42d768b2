"""Data commands for PulseWatch CLI.

One-shot views of current prices, weather conditions and headlines.
"""

import asyncio

import click
from rich.table import Table

from pulsewatch.cli.common import (
    build_price_source,
    build_weather_source,
    console,
    error_panel,
    get_config,
)
from pulsewatch.errors import SourceError
from pulsewatch.sources.simulated import SimulatedPriceSource


def _format_change(change: float) -> str:
    color = "green" if change >= 0 else "red"
    arrow = "▲" if change >= 0 else "▼"
    return f"[{color}]{arrow} {abs(change):.2f}%[/{color}]"


async def _fetch_prices(source, ids: list[str]) -> dict:
    try:
        try:
            return await source.fetch_markets(set(ids))
        except SourceError as e:
            console.print(f"[yellow]Price feed unavailable ({e}); showing simulated prices.[/yellow]")
            return await SimulatedPriceSource().fetch_markets(set(ids))
    finally:
        await source.aclose()


@click.command("prices")
@click.option("--offline", is_flag=True, help="Use simulated prices only.")
@click.pass_context
def prices(ctx: click.Context, offline: bool) -> None:
    """Show current prices for the tracked assets.
    
    \b
    Examples:
      pulsewatch prices
      pulsewatch prices --offline
    """
    config = get_config(ctx)
    ids = config.monitor.assets
    snapshots = asyncio.run(_fetch_prices(build_price_source(config, offline), ids))

    table = Table(title="Prices", show_header=True, header_style="bold cyan")
    table.add_column("Asset", style="bold")
    table.add_column("Symbol", style="dim")
    table.add_column("Price (USD)", justify="right")
    table.add_column("24h", justify="right")
    table.add_column("Source", style="dim")

    for asset_id in ids:
        snapshot = snapshots.get(asset_id)
        if snapshot is None:
            table.add_row(asset_id, "", "[dim]n/a[/dim]", "", "")
            continue
        table.add_row(
            snapshot.name,
            snapshot.symbol,
            f"{snapshot.price:,.2f}",
            _format_change(snapshot.change_24h),
            snapshot.source,
        )

    console.print(table)


async def _fetch_weather(source, locations: list[str]) -> dict:
    results = {}
    try:
        for location in locations:
            try:
                results[location] = await source.fetch_current(location)
            except SourceError as e:
                console.print(f"[yellow]{e}[/yellow]")
    finally:
        await source.aclose()
    return results


@click.command("weather")
@click.pass_context
def weather(ctx: click.Context) -> None:
    """Show current conditions for the tracked locations.
    
    Needs an OpenWeather API key in the config file or in
    OPENWEATHER_API_KEY.
    """
    config = get_config(ctx)
    source = build_weather_source(config)
    if source is None:
        error_panel(
            "No OpenWeather API key configured.",
            "Set [cyan]openweather.api_key[/cyan] in the config file "
            "or the OPENWEATHER_API_KEY environment variable.",
        )
        raise SystemExit(1)

    snapshots = asyncio.run(_fetch_weather(source, config.monitor.locations))

    table = Table(title="Weather", show_header=True, header_style="bold cyan")
    table.add_column("Location", style="bold")
    table.add_column("Temp (°C)", justify="right")
    table.add_column("Feels like", justify="right")
    table.add_column("Humidity", justify="right")
    table.add_column("Conditions")

    for location in config.monitor.locations:
        snapshot = snapshots.get(location)
        if snapshot is None or snapshot.temperature is None:
            table.add_row(location, "[dim]n/a[/dim]", "", "", "")
            continue
        table.add_row(
            location,
            f"{snapshot.temperature:.1f}",
            f"{snapshot.feels_like:.1f}" if snapshot.feels_like is not None else "",
            f"{snapshot.humidity:.0f}%" if snapshot.humidity is not None else "",
            snapshot.description or "",
        )

    console.print(table)


async def _fetch_headlines(api_key, timeout: float) -> list:
    from pulsewatch.sources.news import NewsSource

    source = NewsSource(api_key=api_key, timeout=timeout)
    try:
        return await source.fetch_headlines()
    finally:
        await source.aclose()


@click.command("headlines")
@click.pass_context
def headlines(ctx: click.Context) -> None:
    """Show top business headlines.
    
    Falls back to sample headlines when no NewsAPI key is configured.
    """
    config = get_config(ctx)
    items = asyncio.run(_fetch_headlines(config.news_api_key, config.http_timeout))

    table = Table(title="Headlines", show_header=True, header_style="bold cyan")
    table.add_column("Published", style="dim")
    table.add_column("Source")
    table.add_column("Title", style="bold")

    for item in items:
        table.add_row(item.published_at.strftime("%Y-%m-%d"), item.source, item.title)

    console.print(table)
