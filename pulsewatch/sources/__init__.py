"""Data source implementations for PulseWatch."""

from pulsewatch.sources.base import PriceSource, WeatherSource
from pulsewatch.sources.coingecko import CoinGeckoPriceSource
from pulsewatch.sources.news import NewsSource
from pulsewatch.sources.openweather import OpenWeatherSource
from pulsewatch.sources.simulated import SimulatedPriceSource

__all__ = [
    "CoinGeckoPriceSource",
    "NewsSource",
    "OpenWeatherSource",
    "PriceSource",
    "SimulatedPriceSource",
    "WeatherSource",
]
