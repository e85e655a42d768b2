"""Location (weather) snapshot data model."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class LocationSnapshot(BaseModel):
    """Represents current weather conditions for one location.

    A reading with no temperature or no condition code is treated as
    not yet available by the alert rules.
    """

    name: str = Field(..., min_length=1, description="Canonical location name")
    temperature: Optional[float] = Field(default=None, description="Temperature in Celsius")
    condition_code: Optional[int] = Field(default=None, description="Weather condition code")
    description: Optional[str] = Field(default=None, description="Condition description")
    feels_like: Optional[float] = Field(default=None, description="Feels-like temperature")
    humidity: Optional[float] = Field(default=None, ge=0, description="Relative humidity (%)")
    observed_at: Optional[datetime] = Field(default=None, description="Observation time")

    model_config = {"frozen": True}
