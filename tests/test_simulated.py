"""Property-based tests for the simulated price source.

**Feature: pulsewatch-monitor**
"""

import asyncio
import random

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pulsewatch.sources.simulated import (
    BASE_PRICES,
    DEFAULT_BASE_PRICE,
    SimulatedPriceSource,
    advance_snapshot,
    seed_snapshot,
    simulate_price_update,
    smooth_change,
)
from tests.doubles import StubRandom, make_asset


# ============================================================================
# Property 4: Exponential Smoothing
# ============================================================================

class TestSmoothing:
    """
    **Feature: pulsewatch-monitor, Property 4: Exponential Smoothing**

    *For any* simulated move, the new 24h change is 0.95 of the old
    change plus 0.05 of the instantaneous percentage move.
    """

    def test_reference_value(self):
        assert smooth_change(5.0, 100.0, 102.0) == pytest.approx(4.85)

    @given(
        old_change=st.floats(min_value=-50.0, max_value=50.0, allow_nan=False),
        old_price=st.floats(min_value=0.01, max_value=1e6, allow_nan=False),
        step=st.floats(min_value=-2.0, max_value=2.0, allow_nan=False),
    )
    @settings(max_examples=100)
    def test_weighting(self, old_change: float, old_price: float, step: float):
        new_price = old_price * (1 + step / 100)
        instant = (new_price - old_price) / old_price * 100

        assert smooth_change(old_change, old_price, new_price) == pytest.approx(
            old_change * 0.95 + instant * 0.05
        )

    def test_advance_applies_smoothing(self):
        snapshot = make_asset(price=100.0, change=5.0)

        advanced = advance_snapshot(snapshot, StubRandom(2.0))

        assert advanced.price == pytest.approx(102.0)
        assert advanced.change_24h == pytest.approx(4.85)
        assert advanced.source == "simulated"
        assert advanced.id == snapshot.id
        assert snapshot.price == 100.0


# ============================================================================
# Property 5: Random-Walk Bounds
# ============================================================================

class TestRandomWalk:
    """
    **Feature: pulsewatch-monitor, Property 5: Random-Walk Bounds**

    *For any* price, one simulated step moves it by at most 2%.
    """

    @given(
        price=st.floats(min_value=0.01, max_value=1e7, allow_nan=False),
        seed=st.integers(min_value=0, max_value=2**32 - 1),
    )
    @settings(max_examples=100)
    def test_step_within_two_percent(self, price: float, seed: int):
        new_price = simulate_price_update(price, random.Random(seed))

        assert price * 0.98 <= new_price * (1 + 1e-12)
        assert new_price <= price * 1.02 * (1 + 1e-12)
        assert new_price > 0


class TestSeeding:
    """Fallback seeding for assets with no data."""

    @pytest.mark.parametrize("asset_id", sorted(BASE_PRICES))
    def test_known_base_prices(self, asset_id: str):
        snapshot = seed_snapshot(asset_id, random.Random(1))

        assert snapshot.price == BASE_PRICES[asset_id]
        assert -5.0 <= snapshot.change_24h <= 5.0
        assert snapshot.source == "simulated"

    def test_unknown_asset_uses_default(self):
        snapshot = seed_snapshot("dogecoin", StubRandom(3.0))

        assert snapshot.price == DEFAULT_BASE_PRICE
        assert snapshot.name == "Dogecoin"
        assert snapshot.symbol == "DOG"
        assert snapshot.change_24h == 3.0

    def test_source_seeds_then_walks(self):
        source = SimulatedPriceSource(rng=StubRandom(1.0))

        first = asyncio.run(source.fetch_markets({"bitcoin"}))
        second = asyncio.run(source.fetch_markets({"bitcoin"}))

        assert first["bitcoin"].price == 36000.0
        assert first["bitcoin"].change_24h == 1.0
        assert second["bitcoin"].price == pytest.approx(36360.0)
        assert second["bitcoin"].change_24h == pytest.approx(1.0 * 0.95 + 1.0 * 0.05)
