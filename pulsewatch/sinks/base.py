"""Base alert destination interfaces for PulseWatch."""

from abc import ABC, abstractmethod

from pulsewatch.models import AlertEvent


class AlertSink(ABC):
    """User-visible alert destination (desktop notification, chat, console).
    
    Implementations own their failure isolation: ``notify`` is expected
    not to raise.
    """

    @abstractmethod
    def notify(self, event: AlertEvent) -> None:
        """Deliver an alert to the user.
        
        Args:
            event: Alert to deliver.
        """
        pass

    def request_permission(self) -> bool:
        """Ask the platform for permission to show notifications.
        
        Returns:
            True if notifications may be shown.
        """
        return True


class AlertRecorder(ABC):
    """State-store destination that keeps a record of fired alerts."""

    @abstractmethod
    def record(self, event: AlertEvent) -> None:
        """Record a fired alert.
        
        Args:
            event: Alert that fired.
        """
        pass
