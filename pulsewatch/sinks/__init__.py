"""Alert sinks and recorders for PulseWatch."""

from pulsewatch.sinks.base import AlertRecorder, AlertSink
from pulsewatch.sinks.console import ConsoleSink, LoggingSink
from pulsewatch.sinks.store import AlertStore

__all__ = [
    "AlertRecorder",
    "AlertSink",
    "AlertStore",
    "ConsoleSink",
    "LoggingSink",
]
