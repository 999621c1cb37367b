from typing import Literal

from farmwatch.schemas.sensor import ReadingStatus, SensorReading
from farmwatch.schemas.settings import ThresholdSettings

Metric = Literal["temperature", "humidity", "soil_moisture"]

METRICS: tuple[Metric, ...] = ("temperature", "humidity", "soil_moisture")

_METRIC_ALIASES = {"soilMoisture": "soil_moisture"}

# metric -> (critical_low, critical_high, warning_low, warning_high); None means unbounded
FIXED_BANDS: dict[str, tuple[float | None, float | None, float | None, float | None]] = {
    "temperature": (15.0, 35.0, 18.0, 32.0),
    "humidity": (40.0, 80.0, 45.0, 75.0),
    "soil_moisture": (20.0, None, 30.0, None),
}


def normalize_metric(metric: str) -> str:
    name = _METRIC_ALIASES.get(metric, metric)
    if name not in FIXED_BANDS:
        raise ValueError(f"unknown metric: {metric}")
    return name


def threshold_bounds(metric: str, thresholds: ThresholdSettings) -> tuple[float, float]:
    name = normalize_metric(metric)
    prefix = "temp" if name == "temperature" else name
    return getattr(thresholds, f"{prefix}_min"), getattr(thresholds, f"{prefix}_max")


def _outside(value: float, low: float | None, high: float | None) -> bool:
    if low is not None and value < low:
        return True
    return high is not None and value > high


def classify(metric: str, value: float, thresholds: ThresholdSettings | None = None) -> str:
    """Map a metric value to ``normal``, ``warning`` or ``critical``.

    Without ``thresholds`` the fixed bands apply. With user thresholds a value
    outside ``[min, max]`` is critical and everything else is normal; that
    policy has no warning tier.
    """
    name = normalize_metric(metric)

    if thresholds is not None:
        min_value, max_value = threshold_bounds(name, thresholds)
        return "critical" if _outside(value, min_value, max_value) else "normal"

    critical_low, critical_high, warning_low, warning_high = FIXED_BANDS[name]
    if _outside(value, critical_low, critical_high):
        return "critical"
    if _outside(value, warning_low, warning_high):
        return "warning"
    return "normal"


def classify_reading(reading: SensorReading, thresholds: ThresholdSettings | None = None) -> ReadingStatus:
    return ReadingStatus(
        temperature=classify("temperature", reading.temperature, thresholds),
        humidity=classify("humidity", reading.humidity, thresholds),
        soil_moisture=classify("soil_moisture", reading.soil_moisture, thresholds),
    )
