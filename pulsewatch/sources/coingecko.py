"""CoinGecko market data source."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from pulsewatch.errors import SourceError
from pulsewatch.models import AssetSnapshot
from pulsewatch.sources.base import PriceSource

logger = logging.getLogger(__name__)

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"


class CoinGeckoPriceSource(PriceSource):
    """Live price source backed by the CoinGecko ``/coins/markets`` endpoint."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = COINGECKO_BASE_URL,
        timeout: float = 10.0,
    ):
        """Initialize the CoinGecko source.
        
        Args:
            client: Shared AsyncClient (one is created and owned if omitted).
            base_url: API base URL.
            timeout: Request timeout in seconds for an owned client.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout, headers={"Accept": "application/json"}
        )
        self._base_url = base_url.rstrip("/")

    async def fetch_markets(self, ids: set[str]) -> dict[str, AssetSnapshot]:
        """Fetch current prices and 24h change for the given coins."""
        if not ids:
            return {}

        params = {
            "vs_currency": "usd",
            "ids": ",".join(sorted(ids)),
            "order": "market_cap_desc",
            "per_page": len(ids),
            "page": 1,
            "sparkline": "false",
            "price_change_percentage": "24h",
        }
        try:
            response = await self._client.get(f"{self._base_url}/coins/markets", params=params)
            response.raise_for_status()
            rows = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SourceError("coingecko", str(e)) from e

        if not isinstance(rows, list):
            raise SourceError("coingecko", f"unexpected response body: {type(rows).__name__}")

        snapshots = {}
        for row in rows:
            try:
                snapshot = _parse_market_row(row)
            except (AttributeError, KeyError, TypeError, ValidationError) as e:
                raise SourceError("coingecko", f"malformed market row: {e}") from e
            if snapshot.id in ids:
                snapshots[snapshot.id] = snapshot

        logger.debug("Fetched %d/%d markets from CoinGecko", len(snapshots), len(ids))
        return snapshots

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _parse_market_row(row: dict) -> AssetSnapshot:
    """Convert one ``/coins/markets`` row into an AssetSnapshot."""
    return AssetSnapshot(
        id=row["id"],
        name=row["name"],
        symbol=(row.get("symbol") or "").upper(),
        price=row["current_price"],
        # CoinGecko returns null for coins without a 24h figure
        change_24h=row.get("price_change_percentage_24h") or 0.0,
        market_cap=row.get("market_cap"),
        volume=row.get("total_volume"),
        image=row.get("image"),
        source="live",
    )
