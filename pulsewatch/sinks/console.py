"""Console and log alert sinks."""

import logging
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from pulsewatch.models import AlertCategory, AlertEvent
from pulsewatch.sinks.base import AlertSink

logger = logging.getLogger(__name__)


CATEGORY_STYLES = {
    AlertCategory.PRICE: "cyan",
    AlertCategory.EXTREME_HEAT: "red",
    AlertCategory.FREEZING: "blue",
    AlertCategory.THUNDERSTORM: "magenta",
    AlertCategory.RAIN: "bright_blue",
    AlertCategory.SNOW: "white",
}


class ConsoleSink(AlertSink):
    """Prints each alert as a rich panel."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    def notify(self, event: AlertEvent) -> None:
        style = CATEGORY_STYLES.get(event.category, "yellow")
        fired = datetime.fromtimestamp(event.timestamp / 1000).strftime("%H:%M:%S")
        try:
            self._console.print(Panel(
                f"{event.message}\n\n[dim]{event.category.value} · {fired}[/dim]",
                title=f"[bold {style}]{event.title or event.subject}[/bold {style}]",
                border_style=style,
            ))
        except Exception:
            logger.exception("Failed to print alert for %s", event.subject)


class LoggingSink(AlertSink):
    """Writes each alert to the log."""

    def __init__(self, level: int = logging.WARNING):
        self._level = level

    def notify(self, event: AlertEvent) -> None:
        logger.log(self._level, "[%s] %s", event.category.value, event.message)
