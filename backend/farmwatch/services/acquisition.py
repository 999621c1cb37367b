"""Periodic sensor acquisition with mock-data fallback.

One cycle is ``acquire_once``: try the device unless mock mode is on, fall
back to generated data when the device gives nothing. ``DataAcquisitionLoop``
runs cycles on a fixed cadence while the host is online, coalesces concurrent
refresh requests into the cycle already in flight, and publishes every result
to its subscribers.
"""
import asyncio
import contextlib
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from farmwatch.schemas.sensor import SensorReading
from farmwatch.schemas.settings import SensorConfig
from farmwatch.services.mock_data import MockDataGenerator
from farmwatch.services.sensor_connector import ConnectionState, SensorConnector

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0


def initial_reading() -> SensorReading:
    return SensorReading(
        temperature=28.5,
        humidity=65,
        soil_moisture=42,
        timestamp=datetime.now(timezone.utc),
    )


@dataclass(frozen=True)
class AcquisitionResult:
    reading: SensorReading
    source: Literal["device", "mock"]


Listener = Callable[[AcquisitionResult], None]


def acquire_once(config: SensorConfig, connector: SensorConnector, generator: MockDataGenerator) -> AcquisitionResult:
    if config.use_mock_data:
        return AcquisitionResult(generator.current_reading(), "mock")

    reading = connector.fetch_reading(config.sensor_ip, config.sensor_port, config.api_timeout_ms)
    if reading is None:
        logger.info("Using mock reading, sensor unavailable: %s", connector.last_error)
        return AcquisitionResult(generator.current_reading(), "mock")

    return AcquisitionResult(reading, "device")


class DataAcquisitionLoop:
    def __init__(
        self,
        config: SensorConfig,
        connector: SensorConnector | None = None,
        generator: MockDataGenerator | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        online: bool = True,
        buffer_size: int = 288,
    ) -> None:
        self.connector = connector or SensorConnector()
        self.generator = generator or MockDataGenerator()
        self.poll_interval = poll_interval
        self._config = config
        self._online = online
        self._current = initial_reading()
        self._last_result: AcquisitionResult | None = None
        self._recent: deque[SensorReading] = deque(maxlen=buffer_size)
        self._listeners: list[Listener] = []
        self._inflight: asyncio.Task | None = None
        self._task: asyncio.Task | None = None
        self._wake: asyncio.Event | None = None

    @property
    def config(self) -> SensorConfig:
        return self._config

    @property
    def current_reading(self) -> SensorReading:
        return self._current

    @property
    def last_result(self) -> AcquisitionResult | None:
        return self._last_result

    @property
    def recent_readings(self) -> list[SensorReading]:
        return list(self._recent)

    @property
    def connection_state(self) -> ConnectionState:
        return self.connector.state

    @property
    def online(self) -> bool:
        return self._online

    @property
    def is_refreshing(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def update_config(self, config: SensorConfig) -> None:
        self._config = config
        logger.info("Acquisition config updated: mock=%s endpoint=%s:%s",
                    config.use_mock_data, config.sensor_ip, config.sensor_port)

    def set_online(self, online: bool) -> None:
        was_online = self._online
        self._online = online

        if online and not was_online:
            logger.info("Network online, resuming sensor polling")
            if self._wake is not None:
                self._wake.set()
        elif was_online and not online:
            logger.info("Network offline, sensor polling paused")

    async def refresh(self) -> AcquisitionResult:
        """Run one cycle, or join the one already in flight."""
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.create_task(self._cycle())
        return await asyncio.shield(self._inflight)

    async def _cycle(self) -> AcquisitionResult:
        config = self._config
        result = await asyncio.to_thread(acquire_once, config, self.connector, self.generator)
        self._publish(result)
        return result

    def _publish(self, result: AcquisitionResult) -> None:
        self._current = result.reading
        self._last_result = result
        self._recent.append(result.reading)

        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception:
                logger.exception("Acquisition listener %r failed", listener)

    async def _run(self) -> None:
        while True:
            self._wake.clear()
            timeout = None
            if self._online:
                try:
                    await self.refresh()
                except Exception:
                    logger.exception("Acquisition cycle failed")
                timeout = self.poll_interval

            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._wake.wait(), timeout)

    def start(self) -> None:
        if self.running:
            return
        self._wake = asyncio.Event()
        self._task = asyncio.create_task(self._run())
        logger.info("Sensor acquisition started (interval %.1fs)", self.poll_interval)

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

        if self._inflight is not None and not self._inflight.done():
            await asyncio.gather(self._inflight, return_exceptions=True)
        logger.info("Sensor acquisition stopped")
