"""Monitor command for PulseWatch CLI.

Runs the monitor engine in the foreground and prints alerts as they fire.
"""

import asyncio
from typing import Optional

import click
from pydantic import ValidationError
from rich.table import Table

from pulsewatch.cli.common import (
    build_price_source,
    build_weather_source,
    console,
    error_panel,
    get_config,
)
from pulsewatch.config import MonitorConfig
from pulsewatch.engine import MonitorEngine
from pulsewatch.sinks import AlertStore, ConsoleSink


async def run_monitor(engine: MonitorEngine, sources: list, duration: Optional[float] = None) -> None:
    """Run the engine until cancelled or for ``duration`` seconds.
    
    Args:
        engine: Engine to run.
        sources: Sources to close once the engine stops.
        duration: Seconds to run for (forever if None).
    """
    await engine.start()
    try:
        if duration is None:
            await asyncio.Event().wait()
        else:
            await asyncio.sleep(duration)
    finally:
        engine.stop()
        for source in sources:
            if source is not None:
                await source.aclose()


def _print_summary(store: AlertStore) -> None:
    events = store.history()
    if not events:
        console.print("[dim]No alerts fired.[/dim]")
        return

    table = Table(title="Alerts Fired", show_header=True, header_style="bold cyan")
    table.add_column("Subject", style="bold")
    table.add_column("Category")
    table.add_column("Message")

    for event in events:
        table.add_row(event.subject, event.category.value, event.message)

    console.print(table)
    console.print(f"\n[dim]Total: {len(events)} alerts[/dim]")


@click.command("watch")
@click.option("--offline", is_flag=True, help="Use simulated prices only.")
@click.option(
    "-i", "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds between price refreshes (default from config: 10).",
)
@click.option(
    "-t", "--threshold",
    type=click.FloatRange(min=0),
    default=None,
    help="24h change (%) that triggers a price alert (default from config: 2.0).",
)
@click.option(
    "--cooldown",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds before the same alert may fire again (default from config: 300).",
)
@click.option(
    "--duration",
    type=click.FloatRange(min=0),
    default=None,
    help="Stop after this many seconds (default: run until Ctrl-C).",
)
@click.pass_context
def watch(
    ctx: click.Context,
    offline: bool,
    interval: Optional[float],
    threshold: Optional[float],
    cooldown: Optional[float],
    duration: Optional[float],
) -> None:
    """Monitor prices and weather and print alerts as they fire.
    
    Weather checks need an OpenWeather API key (config file or
    OPENWEATHER_API_KEY); without one only prices are monitored.
    
    \b
    Examples:
      pulsewatch watch                    # Live prices, defaults from config
      pulsewatch watch --offline -i 1     # Simulated prices every second
      pulsewatch watch -t 5 --cooldown 60
    """
    config = get_config(ctx)

    overrides = {}
    if interval is not None:
        overrides["update_interval"] = int(interval * 1000)
    if threshold is not None:
        overrides["alert_threshold"] = threshold
    if cooldown is not None:
        overrides["alert_cooldown"] = int(cooldown * 1000)
    try:
        monitor_config = MonitorConfig.model_validate({**config.monitor.model_dump(), **overrides})
    except ValidationError as e:
        error_panel("Invalid option:", str(e))
        raise SystemExit(1)

    price_source = build_price_source(config, offline)
    weather_source = build_weather_source(config)
    if weather_source is None:
        console.print("[yellow]No OpenWeather API key configured; weather alerts disabled.[/yellow]")

    store = AlertStore()
    engine = MonitorEngine(
        price_source=price_source,
        weather_source=weather_source,
        sink=ConsoleSink(console),
        recorder=store,
        config=monitor_config,
    )
    engine.request_notification_permission()

    console.print(
        f"[dim]Watching {', '.join(monitor_config.assets)} "
        f"every {monitor_config.update_interval / 1000:g}s. Press Ctrl-C to stop.[/dim]"
    )

    try:
        asyncio.run(run_monitor(engine, [price_source, weather_source], duration))
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")

    _print_summary(store)
