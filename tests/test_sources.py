"""Tests for the live HTTP sources.

Upstream APIs are replaced with ``httpx.MockTransport`` handlers.
"""

import asyncio

import httpx
import pytest

from pulsewatch.errors import SourceError
from pulsewatch.sources.coingecko import CoinGeckoPriceSource
from pulsewatch.sources.news import NewsSource, sample_headlines
from pulsewatch.sources.openweather import OpenWeatherSource, parse_current_weather


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


MARKET_ROWS = [
    {
        "id": "bitcoin",
        "name": "Bitcoin",
        "symbol": "btc",
        "image": "https://example.com/btc.png",
        "current_price": 64000.5,
        "market_cap": 1.2e12,
        "total_volume": 3.4e10,
        "price_change_percentage_24h": -2.75,
    },
    {
        "id": "solana",
        "name": "Solana",
        "symbol": "sol",
        "current_price": 150.0,
        "market_cap": None,
        "total_volume": None,
        "price_change_percentage_24h": None,
    },
]


class TestCoinGecko:
    """CoinGecko ``/coins/markets`` adapter."""

    def test_parses_markets(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=MARKET_ROWS)

        source = CoinGeckoPriceSource(client=_client(handler))
        result = asyncio.run(source.fetch_markets({"bitcoin", "solana"}))

        assert seen["path"] == "/api/v3/coins/markets"
        assert seen["params"]["ids"] == "bitcoin,solana"
        assert seen["params"]["vs_currency"] == "usd"
        assert seen["params"]["price_change_percentage"] == "24h"

        assert result["bitcoin"].price == 64000.5
        assert result["bitcoin"].symbol == "BTC"
        assert result["bitcoin"].change_24h == -2.75
        assert result["bitcoin"].source == "live"
        assert result["solana"].change_24h == 0.0

    def test_drops_unrequested_rows(self):
        source = CoinGeckoPriceSource(client=_client(lambda r: httpx.Response(200, json=MARKET_ROWS)))

        result = asyncio.run(source.fetch_markets({"bitcoin"}))

        assert list(result) == ["bitcoin"]

    def test_empty_request_skips_network(self):
        def handler(request):
            raise AssertionError("no request expected")

        source = CoinGeckoPriceSource(client=_client(handler))

        assert asyncio.run(source.fetch_markets(set())) == {}

    @pytest.mark.parametrize("status", [404, 429, 500, 503])
    def test_http_errors_raise_source_error(self, status: int):
        source = CoinGeckoPriceSource(client=_client(lambda r: httpx.Response(status)))

        with pytest.raises(SourceError):
            asyncio.run(source.fetch_markets({"bitcoin"}))

    def test_network_error_raises_source_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        source = CoinGeckoPriceSource(client=_client(handler))

        with pytest.raises(SourceError):
            asyncio.run(source.fetch_markets({"bitcoin"}))

    def test_malformed_body_raises_source_error(self):
        source = CoinGeckoPriceSource(
            client=_client(lambda r: httpx.Response(200, json={"status": "error"}))
        )

        with pytest.raises(SourceError):
            asyncio.run(source.fetch_markets({"bitcoin"}))

    def test_invalid_price_raises_source_error(self):
        rows = [dict(MARKET_ROWS[0], current_price=0)]
        source = CoinGeckoPriceSource(client=_client(lambda r: httpx.Response(200, json=rows)))

        with pytest.raises(SourceError):
            asyncio.run(source.fetch_markets({"bitcoin"}))


WEATHER_BODY = {
    "name": "London",
    "dt": 1700000000,
    "main": {"temp": 36.4, "feels_like": 38.0, "humidity": 40},
    "weather": [{"id": 211, "main": "Thunderstorm", "description": "thunderstorm"}],
}


class TestOpenWeather:
    """OpenWeather ``/weather`` adapter."""

    def test_parses_current_weather(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=WEATHER_BODY)

        source = OpenWeatherSource("key123", client=_client(handler))
        snapshot = asyncio.run(source.fetch_current("London"))

        assert seen["params"] == {"q": "London", "appid": "key123", "units": "metric"}
        assert snapshot.name == "London"
        assert snapshot.temperature == 36.4
        assert snapshot.condition_code == 211
        assert snapshot.description == "thunderstorm"
        assert snapshot.humidity == 40
        assert snapshot.observed_at is not None

    def test_missing_blocks_leave_fields_empty(self):
        snapshot = parse_current_weather("Tokyo", {"name": "Tokyo"})

        assert snapshot.name == "Tokyo"
        assert snapshot.temperature is None
        assert snapshot.condition_code is None

    def test_keeps_requested_name(self):
        snapshot = parse_current_weather("New York", dict(WEATHER_BODY, name="New York City"))

        assert snapshot.name == "New York"

    def test_http_error_raises_source_error(self):
        source = OpenWeatherSource("key123", client=_client(lambda r: httpx.Response(401)))

        with pytest.raises(SourceError):
            asyncio.run(source.fetch_current("London"))

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            OpenWeatherSource("")


class TestNews:
    """NewsAPI adapter with sample-headline fallback."""

    def test_without_key_returns_samples(self):
        def handler(request):
            raise AssertionError("no request expected")

        source = NewsSource(api_key=None, client=_client(handler))
        items = asyncio.run(source.fetch_headlines())

        assert [i.title for i in items] == [i.title for i in sample_headlines()]
        assert len(items) == 5

    def test_parses_articles(self):
        body = {
            "articles": [
                {
                    "title": "Markets rally",
                    "description": "Stocks up",
                    "url": "https://example.com/a",
                    "urlToImage": None,
                    "publishedAt": "2024-05-01T12:00:00Z",
                    "source": {"name": "Wire"},
                }
            ]
        }
        source = NewsSource(api_key="k", client=_client(lambda r: httpx.Response(200, json=body)))

        items = asyncio.run(source.fetch_headlines())

        assert len(items) == 1
        assert items[0].title == "Markets rally"
        assert items[0].source == "Wire"
        assert items[0].published_at.year == 2024

    def test_failure_returns_samples(self):
        source = NewsSource(api_key="k", client=_client(lambda r: httpx.Response(500)))

        items = asyncio.run(source.fetch_headlines())

        assert len(items) == 5
        assert items[0].id == "news-1"
