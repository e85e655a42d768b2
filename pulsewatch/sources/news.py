"""Headline source backed by NewsAPI, with built-in sample headlines."""

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from pulsewatch.models import NewsItem

logger = logging.getLogger(__name__)

NEWSAPI_BASE_URL = "https://newsapi.org/v2"


def sample_headlines(now: Optional[datetime] = None) -> list[NewsItem]:
    """Return the built-in headlines used when NewsAPI is unavailable."""
    now = now or datetime.now(timezone.utc)
    samples = [
        (
            "Bitcoin surges past $40,000 as institutional adoption grows",
            "The world's largest cryptocurrency has seen a significant price increase "
            "as more financial institutions add it to their portfolios.",
            "https://example.com/bitcoin-surge",
            "Crypto News",
        ),
        (
            "Ethereum 2.0 upgrade progresses with successful testnet implementation",
            "The long-awaited upgrade to the Ethereum network is moving forward, "
            "promising improved scalability and reduced energy consumption.",
            "https://example.com/ethereum-upgrade",
            "Blockchain Times",
        ),
        (
            "Central banks worldwide explore digital currency options",
            "Several major central banks have announced pilot programs for digital "
            "currencies as the financial landscape continues to evolve.",
            "https://example.com/cbdc-exploration",
            "Financial Review",
        ),
        (
            "New regulations proposed for cryptocurrency exchanges",
            "Regulatory bodies are working on frameworks to provide better oversight "
            "and consumer protection in crypto markets.",
            "https://example.com/crypto-regulations",
            "Policy Insider",
        ),
        (
            "Solana ecosystem expands with new DeFi applications",
            "The high-performance blockchain is seeing rapid growth in decentralized "
            "finance applications and developer activity.",
            "https://example.com/solana-defi",
            "DeFi Daily",
        ),
    ]
    return [
        NewsItem(
            id=f"news-{i + 1}",
            title=title,
            description=description,
            url=url,
            published_at=now - timedelta(days=i),
            source=source,
        )
        for i, (title, description, url, source) in enumerate(samples)
    ]


class NewsSource:
    """Business headlines from NewsAPI.
    
    Never raises for upstream problems: a missing key or a failed
    request yields the sample headlines instead.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = NEWSAPI_BASE_URL,
        page_size: int = 5,
        timeout: float = 10.0,
    ):
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size

    async def fetch_headlines(self) -> list[NewsItem]:
        """Fetch top business headlines.
        
        Returns:
            List of headlines, or the sample headlines on any failure.
        """
        if not self._api_key:
            logger.info("News API key is not configured, using sample headlines")
            return sample_headlines()

        params = {
            "country": "us",
            "category": "business",
            "pageSize": self._page_size,
            "apiKey": self._api_key,
        }
        try:
            response = await self._client.get(f"{self._base_url}/top-headlines", params=params)
            response.raise_for_status()
            articles = response.json()["articles"]
            stamp = int(time.time() * 1000)
            return [
                NewsItem(
                    id=f"news-{i}-{stamp}",
                    title=article["title"],
                    description=article.get("description"),
                    url=article["url"],
                    image=article.get("urlToImage"),
                    published_at=article["publishedAt"],
                    source=(article.get("source") or {}).get("name", ""),
                )
                for i, article in enumerate(articles)
            ]
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Error fetching news, using sample headlines: %s", e)
            return sample_headlines()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
