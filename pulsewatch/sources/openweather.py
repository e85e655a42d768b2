"""OpenWeatherMap current-conditions source."""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from pydantic import ValidationError

from pulsewatch.errors import SourceError
from pulsewatch.models import LocationSnapshot
from pulsewatch.sources.base import WeatherSource

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"


class OpenWeatherSource(WeatherSource):
    """Live weather source backed by the OpenWeatherMap ``/weather`` endpoint."""

    def __init__(
        self,
        api_key: str,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
    ):
        """Initialize the OpenWeather source.
        
        Args:
            api_key: OpenWeatherMap API key.
            client: Shared AsyncClient (one is created and owned if omitted).
            base_url: API base URL.
            timeout: Request timeout in seconds for an owned client.
            
        Raises:
            ValueError: If api_key is empty.
        """
        if not api_key:
            raise ValueError("OpenWeather API key is required")
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._base_url = base_url.rstrip("/")

    async def fetch_current(self, location: str) -> LocationSnapshot:
        """Fetch current conditions in metric units."""
        params = {"q": location, "appid": self._api_key, "units": "metric"}
        try:
            response = await self._client.get(f"{self._base_url}/weather", params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SourceError("openweather", f"{location}: {e}") from e

        try:
            return parse_current_weather(location, data)
        except (AttributeError, TypeError, ValidationError) as e:
            raise SourceError("openweather", f"{location}: malformed body: {e}") from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def parse_current_weather(location: str, data: dict) -> LocationSnapshot:
    """Convert an OpenWeather ``/weather`` body into a LocationSnapshot.
    
    Missing ``main`` or ``weather`` blocks leave the matching fields
    empty instead of failing, so the rules can skip the location.
    
    Args:
        location: Name the location was requested under.
        data: Decoded JSON body.
        
    Returns:
        LocationSnapshot keyed by the requested location name.
    """
    main = data.get("main") or {}
    conditions = data.get("weather") or [{}]
    first = conditions[0] or {}

    observed_at = None
    if data.get("dt") is not None:
        observed_at = datetime.fromtimestamp(data["dt"], tz=timezone.utc)

    return LocationSnapshot(
        name=location,
        temperature=main.get("temp"),
        condition_code=first.get("id"),
        description=first.get("description"),
        feels_like=main.get("feels_like"),
        humidity=main.get("humidity"),
        observed_at=observed_at,
    )
