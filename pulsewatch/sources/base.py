"""Base source interfaces for PulseWatch."""

from abc import ABC, abstractmethod

from pulsewatch.models import AssetSnapshot, LocationSnapshot


class PriceSource(ABC):
    """Abstract base class for market data providers.
    
    Every call returns a fresh snapshot; the engine keeps no state
    inside the source.
    """

    @abstractmethod
    async def fetch_markets(self, ids: set[str]) -> dict[str, AssetSnapshot]:
        """Fetch current market data.
        
        Args:
            ids: Asset identifiers to fetch.
            
        Returns:
            Mapping of asset id to snapshot. Ids the provider does not
            know are left out.
            
        Raises:
            SourceError: If the provider cannot be reached or answers badly.
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the source."""


class WeatherSource(ABC):
    """Abstract base class for weather providers."""

    @abstractmethod
    async def fetch_current(self, location: str) -> LocationSnapshot:
        """Fetch current conditions for a location.
        
        Args:
            location: Location name (e.g., 'London').
            
        Returns:
            LocationSnapshot for the location.
            
        Raises:
            SourceError: If the provider cannot be reached or answers badly.
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the source."""
