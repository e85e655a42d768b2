"""Monitoring engine for PulseWatch."""

from pulsewatch.engine.ledger import CooldownLedger
from pulsewatch.engine.monitor import MonitorEngine
from pulsewatch.engine.rules import evaluate_price_alerts, evaluate_weather_alerts

__all__ = [
    "CooldownLedger",
    "MonitorEngine",
    "evaluate_price_alerts",
    "evaluate_weather_alerts",
]
