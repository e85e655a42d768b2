"""Monitor engine: periodic refresh, rule evaluation, and alert emission.

The engine owns one repeating timer. Every tick refreshes prices and
evaluates the price rule; weather is fetched and evaluated on a slower
cadence. The two paths fail independently: an error in one is logged
and never stops the other or the timer.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from pulsewatch.config import MonitorConfig
from pulsewatch.engine.ledger import CooldownLedger
from pulsewatch.engine.rules import evaluate_price_alerts, evaluate_weather_alerts
from pulsewatch.models import AlertEvent, AssetSnapshot, LocationSnapshot
from pulsewatch.sinks.base import AlertRecorder, AlertSink
from pulsewatch.sources.base import PriceSource, WeatherSource
from pulsewatch.sources.simulated import SimulatedPriceSource

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.time() * 1000


class MonitorEngine:
    """Watches prices and weather and emits deduplicated alerts.

    Sources, sink, recorder and clock are injected so that several
    independent engines can run side by side (and in tests).
    """

    def __init__(
        self,
        price_source: Optional[PriceSource] = None,
        weather_source: Optional[WeatherSource] = None,
        sink: Optional[AlertSink] = None,
        recorder: Optional[AlertRecorder] = None,
        config: Optional[MonitorConfig] = None,
        fallback: Optional[SimulatedPriceSource] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the engine.

        Args:
            price_source: Live price feed (simulated prices only if omitted).
            weather_source: Weather feed (weather checks skipped if omitted).
            sink: User-visible alert destination.
            recorder: State store that records fired alerts.
            config: Engine settings (defaults if omitted).
            fallback: Simulated source used when the live feed fails.
            clock: Returns the current time in ms since epoch.
        """
        self.config = config or MonitorConfig()
        self._price_source = price_source
        self._weather_source = weather_source
        self._sink = sink
        self._recorder = recorder
        self._fallback = fallback or SimulatedPriceSource()
        self._clock = clock or _now_ms

        self.ledger = CooldownLedger(self.config.alert_cooldown)
        self.assets: dict[str, AssetSnapshot] = {}
        self.locations: dict[str, LocationSnapshot] = {}
        self.last_weather_check = 0.0
        self._task: Optional[asyncio.Task] = None
        # Held for the whole of a tick so that ticks never overlap
        self._tick_lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._task is not None

    async def start(self) -> None:
        """Start the refresh timer and run one refresh immediately.

        Does nothing if the engine is already running.
        """
        if self._task is not None:
            return

        logger.info(
            "Monitor started (every %dms, weather every %dms)",
            self.config.update_interval,
            self.config.weather_check_interval,
        )
        self._task = asyncio.create_task(self._run())
        self._task.add_done_callback(self._timer_done)
        await self.tick()

    def stop(self) -> None:
        """Cancel the refresh timer.

        A tick already in progress runs to completion; no new tick
        starts until ``start()`` is called again.
        """
        if self._task is None:
            return

        self._task.cancel()
        self._task = None
        logger.info("Monitor stopped")

    def request_notification_permission(self) -> bool:
        """Ask the sink for notification permission (once per call).

        Returns:
            Whatever the sink reports, or False without a sink.
        """
        if self._sink is None:
            return False
        return self._sink.request_permission()

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        period = self.config.update_interval / 1000
        next_tick = loop.time() + period

        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            next_tick += period
            await self._tick_lock.acquire()
            # Cancelling the timer must not cut a running tick short; the
            # shielded tick releases the lock itself when it finishes
            await asyncio.shield(self._tick_and_release())

            # Drop periods missed by an overrunning tick instead of bunching up
            current = loop.time()
            if next_tick < current:
                missed = int((current - next_tick) // period) + 1
                logger.debug("Tick overran by %d period(s)", missed)
                next_tick += missed * period

    def _timer_done(self, task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Monitor timer died", exc_info=task.exception())
            if self._task is task:
                self._task = None

    async def _tick_and_release(self) -> None:
        try:
            await self._tick()
        finally:
            self._tick_lock.release()

    async def tick(self) -> None:
        """Run one refresh-and-evaluate cycle.

        Waits for a tick already in progress to finish first. Never
        raises: failures are logged and the cycle moves on.
        """
        async with self._tick_lock:
            await self._tick()

    async def _tick(self) -> None:
        try:
            await self.refresh_prices()
            self._emit_all(evaluate_price_alerts(
                self.assets.values(),
                self.ledger,
                self._clock(),
                self.config.alert_threshold,
            ))
        except Exception:
            logger.exception("Error updating prices")

        now = self._clock()
        if now - self.last_weather_check >= self.config.weather_check_interval:
            self.last_weather_check = now
            try:
                await self.check_weather()
            except Exception:
                logger.exception("Error checking weather")

    async def refresh_prices(self) -> dict[str, AssetSnapshot]:
        """Refresh asset snapshots from the live feed or the simulation.

        Assets the live feed answers for take its snapshot as-is. The
        rest are advanced by one simulated step, or seeded from the
        fallback base prices if they have no snapshot yet.

        Returns:
            The refreshed snapshots, keyed by asset id.
        """
        ids = list(dict.fromkeys(self.config.assets))
        live: dict[str, AssetSnapshot] = {}

        if self._price_source is not None:
            try:
                live = await self._price_source.fetch_markets(set(ids))
            except Exception as e:
                logger.warning("Price feed unavailable, using simulated prices: %s", e)

        updated = {}
        for asset_id in ids:
            if asset_id in live:
                updated[asset_id] = live[asset_id]
            elif asset_id in self.assets:
                updated[asset_id] = self._fallback.advance(self.assets[asset_id])
            else:
                updated[asset_id] = self._fallback.seed(asset_id)

        self.assets = updated
        return updated

    async def check_weather(self) -> list[AlertEvent]:
        """Fetch conditions for every location and evaluate weather rules.

        A location whose fetch fails is skipped for this check.

        Returns:
            Events emitted by this check.
        """
        if self._weather_source is None:
            return []

        fresh = []
        for location in dict.fromkeys(self.config.locations):
            try:
                snapshot = await self._weather_source.fetch_current(location)
            except Exception as e:
                logger.warning("Skipping weather check for %s: %s", location, e)
                continue
            self.locations[location] = snapshot
            fresh.append(snapshot)

        events = evaluate_weather_alerts(fresh, self.ledger, self._clock())
        self._emit_all(events)
        return events

    def _emit_all(self, events: list[AlertEvent]) -> None:
        for event in events:
            self._emit(event)

    def _emit(self, event: AlertEvent) -> None:
        logger.info("Alert: %s", event.message)

        if self._sink is not None:
            try:
                self._sink.notify(event)
            except Exception:
                logger.exception("Alert sink failed for %s/%s", event.subject, event.category.value)

        if self._recorder is not None:
            try:
                self._recorder.record(event)
            except Exception:
                logger.exception("Alert recorder failed for %s/%s", event.subject, event.category.value)
