import random
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from farmwatch.schemas.sensor import ChartPoint, SensorReading
from farmwatch.services.sensor_connector import normalize_reading

BASE_TEMPERATURE = 28.0
BASE_HUMIDITY = 65.0
BASE_SOIL_MOISTURE = 40.0

# (points before now, spacing)
SERIES_LAYOUT = {
    "24h": (24, timedelta(hours=1)),
    "7d": (7, timedelta(days=1)),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_series_label(moment: datetime, time_range: str) -> str:
    if time_range == "24h":
        return moment.strftime("%H:%M")
    return f"{moment.month}/{moment.day}"


class MockDataGenerator:
    def __init__(self, rng: random.Random | None = None, clock: Callable[[], datetime] = _utcnow) -> None:
        self.rng = rng or random.Random()
        self.clock = clock

    def _jitter(self, base: float, amplitude: float) -> float:
        return base + self.rng.uniform(-amplitude, amplitude)

    def current_reading(self) -> SensorReading:
        return normalize_reading(
            self._jitter(BASE_TEMPERATURE, 3.0),
            self._jitter(BASE_HUMIDITY, 7.5),
            self._jitter(BASE_SOIL_MOISTURE, 12.5),
            timestamp=self.clock(),
        )

    def historical_series(self, time_range: str) -> list[ChartPoint]:
        """Independent, uncorrelated points ending at now, oldest first."""
        if time_range not in SERIES_LAYOUT:
            raise ValueError(f"unsupported time range: {time_range}")

        points, spacing = SERIES_LAYOUT[time_range]
        now = self.clock()
        series: list[ChartPoint] = []
        for offset in range(points, -1, -1):
            moment = now - offset * spacing
            series.append(
                ChartPoint(
                    time=format_series_label(moment, time_range),
                    temperature=round(self._jitter(BASE_TEMPERATURE, 5.0), 1),
                    humidity=round(self._jitter(BASE_HUMIDITY, 10.0), 1),
                    soil_moisture=round(self._jitter(BASE_SOIL_MOISTURE, 15.0), 1),
                )
            )
        return series
