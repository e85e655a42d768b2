"""Asset snapshot data model."""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class AssetSnapshot(BaseModel):
    """Represents one tracked asset at a point in time."""

    id: str = Field(..., min_length=1, description="Asset identifier (e.g., 'bitcoin')")
    name: str = Field(..., min_length=1, description="Display name")
    symbol: str = Field(default="", description="Ticker symbol")
    price: float = Field(..., gt=0, description="Current price in USD")
    change_24h: float = Field(default=0.0, description="24h percentage change")
    market_cap: Optional[float] = Field(default=None, ge=0, description="Market cap in USD")
    volume: Optional[float] = Field(default=None, ge=0, description="24h volume in USD")
    image: Optional[str] = Field(default=None, description="Logo URL")
    source: Literal["live", "simulated"] = Field(
        default="live", description="Where the snapshot came from"
    )

    model_config = {"frozen": True}
