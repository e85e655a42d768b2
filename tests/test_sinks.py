"""Tests for alert sinks and the in-memory alert store."""

import io
import logging

from rich.console import Console

from pulsewatch.models import AlertCategory, AlertEvent
from pulsewatch.sinks import AlertStore, ConsoleSink, LoggingSink


def _event(subject="bitcoin", category=AlertCategory.PRICE, timestamp=1_000.0) -> AlertEvent:
    return AlertEvent(
        subject=subject,
        category=category,
        title=f"{subject} alert",
        message=f"{subject} moved",
        magnitude=2.5,
        timestamp=timestamp,
    )


class TestAlertStore:
    """In-memory recorder."""

    def test_records_history_and_latest(self):
        store = AlertStore()
        first = _event(timestamp=1_000)
        second = _event(timestamp=2_000)
        storm = _event("London", AlertCategory.THUNDERSTORM, timestamp=3_000)

        for event in (first, second, storm):
            store.record(event)

        assert len(store) == 3
        assert store.latest("bitcoin") == second
        assert store.last_alert_time("bitcoin") == 2_000
        assert store.last_alert_time("Paris") is None
        assert store.history(AlertCategory.THUNDERSTORM) == [storm]

    def test_history_is_bounded(self):
        store = AlertStore(max_history=2)

        for i in range(5):
            store.record(_event(timestamp=float(i)))

        assert [e.timestamp for e in store.history()] == [3.0, 4.0]


class TestSinks:
    """Console and logging sinks."""

    def test_console_sink_prints_panel(self):
        buffer = io.StringIO()
        sink = ConsoleSink(Console(file=buffer, width=100, force_terminal=False))

        sink.notify(_event())

        output = buffer.getvalue()
        assert "bitcoin alert" in output
        assert "bitcoin moved" in output
        assert "price-alert" in output

    def test_logging_sink_logs(self, caplog):
        sink = LoggingSink()

        with caplog.at_level(logging.WARNING, logger="pulsewatch.sinks.console"):
            sink.notify(_event())

        assert "[price-alert] bitcoin moved" in caplog.text

    def test_event_key(self):
        event = _event("London", AlertCategory.RAIN)

        assert event.key == ("London", AlertCategory.RAIN)
