"""Cooldown ledger for alert deduplication."""

from typing import Iterator, Optional

from pulsewatch.models import AlertKey


class CooldownLedger:
    """Remembers when each alert key last fired.
    
    Entries are overwritten on every fire and never removed, so the
    ledger only grows over the life of the process.
    """

    def __init__(self, cooldown: float):
        """Initialize the ledger.
        
        Args:
            cooldown: Minimum time between fires of one key (ms).
        """
        self.cooldown = cooldown
        self._last_fired: dict[AlertKey, float] = {}

    def ready(self, key: AlertKey, now: float) -> bool:
        """Check whether a key may fire at ``now``.
        
        A key may fire if it never fired or strictly more than
        ``cooldown`` ms have passed since it last did.
        """
        last = self._last_fired.get(key)
        return last is None or now - last > self.cooldown

    def mark(self, key: AlertKey, now: float) -> None:
        """Record that a key fired at ``now``."""
        self._last_fired[key] = now

    def try_fire(self, key: AlertKey, now: float) -> bool:
        """Mark the key as fired if it is out of cooldown.
        
        Returns:
            True if the key fired, False if it is still cooling down.
        """
        if not self.ready(key, now):
            return False
        self.mark(key, now)
        return True

    def last_fired(self, key: AlertKey) -> Optional[float]:
        return self._last_fired.get(key)

    def __contains__(self, key: AlertKey) -> bool:
        return key in self._last_fired

    def __iter__(self) -> Iterator[AlertKey]:
        return iter(self._last_fired)

    def __len__(self) -> int:
        return len(self._last_fired)
