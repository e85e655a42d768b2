"""News headline data model."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class NewsItem(BaseModel):
    """Represents a single news headline."""

    id: str = Field(..., description="Headline identifier")
    title: str = Field(..., description="Headline text")
    description: Optional[str] = Field(default=None, description="Short summary")
    url: str = Field(..., description="Article URL")
    image: Optional[str] = Field(default=None, description="Image URL")
    published_at: datetime = Field(..., description="Publication time")
    source: str = Field(default="", description="Publisher name")

    model_config = {"frozen": True}
