"""Alert rules for price and weather snapshots.

Each rule marks the cooldown ledger when it fires and returns the
events to emit; emitting them is left to the caller.
"""

import logging
import math
from typing import Iterable, Optional

from pulsewatch.engine.ledger import CooldownLedger
from pulsewatch.models import (
    AlertCategory,
    AlertEvent,
    AlertKey,
    AssetSnapshot,
    LocationSnapshot,
)

logger = logging.getLogger(__name__)


# Temperature limits in Celsius
HEAT_LIMIT = 35.0
FREEZE_LIMIT = 0.0

# Condition-code families: [low, high) -> (category, display name)
CONDITION_FAMILIES = [
    (200, 300, AlertCategory.THUNDERSTORM, "Thunderstorm"),
    (500, 600, AlertCategory.RAIN, "Rain"),
    (600, 700, AlertCategory.SNOW, "Snow"),
]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def evaluate_price_alerts(
    assets: Iterable[AssetSnapshot],
    ledger: CooldownLedger,
    now: float,
    threshold: float,
) -> list[AlertEvent]:
    """Find assets whose 24h change crossed the alert threshold.
    
    Args:
        assets: Current asset snapshots.
        ledger: Cooldown ledger, marked for every alert returned.
        now: Current time (ms since epoch).
        threshold: Absolute 24h change (%) that triggers an alert.
        
    Returns:
        One event per asset that fired, in input order.
    """
    events = []
    for asset in assets:
        change = asset.change_24h
        if abs(change) < threshold:
            continue

        key = AlertKey(asset.id, AlertCategory.PRICE)
        if not ledger.try_fire(key, now):
            logger.debug("Price alert for %s skipped (cooldown)", asset.id)
            continue

        direction = "up" if change > 0 else "down"
        events.append(AlertEvent(
            subject=asset.id,
            category=AlertCategory.PRICE,
            title=f"{asset.name} Price Alert",
            message=f"{asset.name} price is {direction} by {abs(change):.2f}%",
            magnitude=abs(change),
            timestamp=now,
        ))
    return events


def _temperature_rule(location: LocationSnapshot) -> Optional[tuple[AlertCategory, str]]:
    temp = location.temperature
    if temp is None:
        return None
    if temp > HEAT_LIMIT:
        return AlertCategory.EXTREME_HEAT, (
            f"Extreme heat in {location.name}: {_round_half_up(temp)}°C"
        )
    if temp < FREEZE_LIMIT:
        return AlertCategory.FREEZING, (
            f"Freezing temperature in {location.name}: {_round_half_up(temp)}°C"
        )
    return None


def _condition_rule(location: LocationSnapshot) -> Optional[tuple[AlertCategory, str]]:
    code = location.condition_code
    if code is None:
        return None
    for low, high, category, label in CONDITION_FAMILIES:
        if low <= code < high:
            return category, f"{label} in {location.name}: {location.description or label.lower()}"
    return None


def evaluate_weather_alerts(
    locations: Iterable[LocationSnapshot],
    ledger: CooldownLedger,
    now: float,
) -> list[AlertEvent]:
    """Find locations with extreme temperatures or severe conditions.
    
    Temperature and condition rules are independent families with their
    own ledger keys, so one location can fire one of each per check.
    
    Args:
        locations: Current location snapshots.
        ledger: Cooldown ledger, marked for every alert returned.
        now: Current time (ms since epoch).
        
    Returns:
        Events that fired, grouped by location in input order.
    """
    events = []
    for location in locations:
        for rule in (_temperature_rule, _condition_rule):
            match = rule(location)
            if match is None:
                continue

            category, message = match
            if not ledger.try_fire(AlertKey(location.name, category), now):
                logger.debug("%s alert for %s skipped (cooldown)", category.value, location.name)
                continue

            events.append(AlertEvent(
                subject=location.name,
                category=category,
                title=f"Weather Alert for {location.name}",
                message=message,
                magnitude=location.temperature if location.temperature is not None else 0.0,
                timestamp=now,
            ))
    return events
