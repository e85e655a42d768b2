"""Simulated price source used when the live feed is unavailable."""

import random
from typing import Optional

from pulsewatch.models import AssetSnapshot
from pulsewatch.sources.base import PriceSource


# Fallback base prices (USD) for seeding assets with no live data
BASE_PRICES = {
    "bitcoin": 36000.0,
    "ethereum": 2400.0,
    "solana": 145.0,
}
DEFAULT_BASE_PRICE = 100.0

# Random-walk bounds per tick, in percent of current price
MAX_STEP_PERCENT = 2.0

# Weights of the previous 24h change and the instantaneous move when smoothing
SMOOTHING_WEIGHT = 0.95
INSTANT_WEIGHT = 0.05

# Range of the random 24h change assigned to freshly seeded assets
SEED_CHANGE_PERCENT = 5.0


def simulate_price_update(price: float, rng: Optional[random.Random] = None) -> float:
    """Advance a price by one random-walk step.
    
    Args:
        price: Current price.
        rng: Random generator (module-level generator if omitted).
        
    Returns:
        New price, within +/-2% of the current price.
    """
    rng = rng or random
    percent_change = rng.uniform(-MAX_STEP_PERCENT, MAX_STEP_PERCENT)
    return price * (1 + percent_change / 100)


def smooth_change(old_change: float, old_price: float, new_price: float) -> float:
    """Blend an instantaneous price move into the 24h change figure.
    
    Args:
        old_change: Previous 24h percentage change.
        old_price: Price before the move.
        new_price: Price after the move.
        
    Returns:
        Smoothed 24h percentage change.
    """
    instant = (new_price - old_price) / old_price * 100
    return old_change * SMOOTHING_WEIGHT + instant * INSTANT_WEIGHT


def advance_snapshot(
    snapshot: AssetSnapshot, rng: Optional[random.Random] = None
) -> AssetSnapshot:
    """Return a copy of the snapshot moved one simulated tick forward."""
    new_price = simulate_price_update(snapshot.price, rng)
    return snapshot.model_copy(
        update={
            "price": new_price,
            "change_24h": smooth_change(snapshot.change_24h, snapshot.price, new_price),
            "source": "simulated",
        }
    )


def seed_snapshot(asset_id: str, rng: Optional[random.Random] = None) -> AssetSnapshot:
    """Create a fallback snapshot for an asset that has no data yet."""
    rng = rng or random
    price = BASE_PRICES.get(asset_id, DEFAULT_BASE_PRICE)
    return AssetSnapshot(
        id=asset_id,
        name=asset_id[:1].upper() + asset_id[1:],
        symbol=asset_id[:3].upper(),
        price=price,
        change_24h=rng.uniform(-SEED_CHANGE_PERCENT, SEED_CHANGE_PERCENT),
        market_cap=price * 1_000_000_000,
        volume=price * 10_000_000,
        image=f"https://cryptologos.cc/logos/{asset_id}-{asset_id}-logo.png",
        source="simulated",
    )


class SimulatedPriceSource(PriceSource):
    """Offline price source driven by a random walk.
    
    The first request for an asset seeds it from the fallback base
    prices; each later request advances it one step and smooths the
    24h change.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize the simulated source.
        
        Args:
            rng: Random generator, injectable for reproducible runs.
        """
        self._rng = rng or random.Random()
        self._snapshots: dict[str, AssetSnapshot] = {}

    def seed(self, asset_id: str) -> AssetSnapshot:
        return seed_snapshot(asset_id, self._rng)

    def advance(self, snapshot: AssetSnapshot) -> AssetSnapshot:
        return advance_snapshot(snapshot, self._rng)

    async def fetch_markets(self, ids: set[str]) -> dict[str, AssetSnapshot]:
        """Return simulated snapshots for the requested assets."""
        result = {}
        for asset_id in sorted(ids):
            current = self._snapshots.get(asset_id)
            if current is None:
                current = self.seed(asset_id)
            else:
                current = self.advance(current)
            self._snapshots[asset_id] = current
            result[asset_id] = current
        return result
