"""Alert data models."""

from enum import Enum
from typing import NamedTuple
from pydantic import BaseModel, Field


class AlertCategory(str, Enum):
    """Fixed taxonomy of alert categories."""

    PRICE = "price-alert"
    EXTREME_HEAT = "extreme-heat"
    FREEZING = "freezing"
    THUNDERSTORM = "thunderstorm"
    RAIN = "rain"
    SNOW = "snow"


class AlertKey(NamedTuple):
    """Cooldown ledger key: one subject and one alert category."""

    subject: str
    category: AlertCategory


class AlertEvent(BaseModel):
    """Represents an alert emitted by the monitor engine."""

    subject: str = Field(..., min_length=1, description="Asset id or location name")
    category: AlertCategory = Field(..., description="Alert category")
    title: str = Field(default="", description="Notification title")
    message: str = Field(..., description="Human-readable message")
    magnitude: float = Field(..., description="Percentage change or temperature")
    timestamp: float = Field(..., ge=0, description="Emission time (ms since epoch)")

    model_config = {"frozen": True}

    @property
    def key(self) -> AlertKey:
        """Ledger key this event was deduplicated under."""
        return AlertKey(self.subject, self.category)
