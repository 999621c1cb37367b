import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any

import requests

from farmwatch.core.exceptions import (
    DeviceError,
    DeviceErrorStatusError,
    DeviceTimeoutError,
    DeviceUnreachableError,
    MalformedPayloadError,
)
from farmwatch.schemas.sensor import SensorReading

logger = logging.getLogger(__name__)

SENSOR_PATH = "/api/sensors/current"
PAYLOAD_FIELDS = ("temperature", "humidity", "soilMoisture")


@dataclass(frozen=True)
class ConnectionState:
    connected: bool = False
    last_error: str = ""


def build_sensor_url(ip: str, port: int | str) -> str:
    return f"http://{ip}:{port}{SENSOR_PATH}"


def _round_half_up(value: float, places: str) -> float:
    return float(Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP))


def normalize_reading(
    temperature: float,
    humidity: float,
    soil_moisture: float,
    timestamp: datetime | None = None,
) -> SensorReading:
    """Temperature to one decimal, humidity and soil moisture to whole percent."""
    return SensorReading(
        temperature=_round_half_up(temperature, "0.1"),
        humidity=_round_half_up(humidity, "1"),
        soil_moisture=_round_half_up(soil_moisture, "1"),
        timestamp=timestamp or datetime.now(timezone.utc),
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def parse_payload(payload: Any) -> SensorReading:
    if not isinstance(payload, dict):
        raise MalformedPayloadError("payload is not a JSON object")

    for field in PAYLOAD_FIELDS:
        if not _is_number(payload.get(field)):
            raise MalformedPayloadError(f"{field} missing or not numeric")

    return normalize_reading(
        float(payload["temperature"]),
        float(payload["humidity"]),
        float(payload["soilMoisture"]),
    )


class SensorConnector:
    """Fetches one reading from the field device and tracks connectivity.

    ``fetch_reading`` never raises: failures become ``None`` plus a
    ``ConnectionState`` carrying the reason.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()
        self._state = ConnectionState()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state.connected

    @property
    def last_error(self) -> str:
        return self._state.last_error

    def _request(self, url: str, timeout_ms: int) -> SensorReading:
        try:
            response = self.session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=timeout_ms / 1000,
            )
        except requests.Timeout as exc:
            raise DeviceTimeoutError(str(exc)) from exc
        except requests.RequestException as exc:
            raise DeviceUnreachableError(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise DeviceErrorStatusError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedPayloadError("body is not valid JSON") from exc

        return parse_payload(payload)

    def fetch_reading(self, ip: str, port: int | str, timeout_ms: int) -> SensorReading | None:
        url = build_sensor_url(ip, port)
        try:
            reading = self._request(url, timeout_ms)
        except DeviceError as exc:
            logger.warning("Sensor fetch from %s failed: %s (%s)", url, exc.reason, exc)
            self._state = ConnectionState(connected=False, last_error=exc.reason)
            return None

        logger.debug("Sensor reading from %s: %s", url, reading)
        self._state = ConnectionState(connected=True, last_error="")
        return reading
