"""Data models for PulseWatch."""

from pulsewatch.models.asset import AssetSnapshot
from pulsewatch.models.location import LocationSnapshot
from pulsewatch.models.alert import AlertCategory, AlertEvent, AlertKey
from pulsewatch.models.news import NewsItem

__all__ = [
    "AssetSnapshot",
    "LocationSnapshot",
    "AlertCategory",
    "AlertEvent",
    "AlertKey",
    "NewsItem",
]
