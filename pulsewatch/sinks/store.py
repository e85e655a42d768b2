"""In-memory alert state store."""

from collections import deque
from typing import Optional

from pulsewatch.models import AlertCategory, AlertEvent
from pulsewatch.sinks.base import AlertRecorder


class AlertStore(AlertRecorder):
    """Keeps recently fired alerts in memory.
    
    Holds a bounded history (oldest events drop off first) and the
    most recent event per subject, which is what a dashboard needs to
    mark an asset or location as recently alerted.
    """

    def __init__(self, max_history: int = 100):
        """Initialize the store.
        
        Args:
            max_history: Maximum number of events kept in history.
        """
        self._history: deque[AlertEvent] = deque(maxlen=max_history)
        self._latest: dict[str, AlertEvent] = {}

    def record(self, event: AlertEvent) -> None:
        self._history.append(event)
        self._latest[event.subject] = event

    def history(self, category: Optional[AlertCategory] = None) -> list[AlertEvent]:
        """Get recorded events, oldest first.
        
        Args:
            category: Only return events of this category.
            
        Returns:
            List of events.
        """
        if category is None:
            return list(self._history)
        return [e for e in self._history if e.category == category]

    def latest(self, subject: str) -> Optional[AlertEvent]:
        """Get the most recent event for a subject, if any."""
        return self._latest.get(subject)

    def last_alert_time(self, subject: str) -> Optional[float]:
        """Get when the subject last alerted (ms since epoch), if ever."""
        event = self._latest.get(subject)
        return event.timestamp if event else None

    def __len__(self) -> int:
        return len(self._history)
