"""Sensor endpoint and threshold settings persisted in the key-value table.

Values are stored as strings under the keys the dashboard has always used
(``sensorIP``, ``tempMin`` ...). Reads fall back to defaults for missing or
unparseable entries; writes validate the whole merged result first and raise
``ConfigInvalidError`` without touching storage when anything is off.
"""
import logging
import math
from typing import Any

from sqlalchemy.orm import Session

from farmwatch.core.config import settings as app_settings
from farmwatch.core.exceptions import ConfigInvalidError
from farmwatch.crud import setting_crud
from farmwatch.schemas.settings import SensorConfig, ThresholdSettings

logger = logging.getLogger(__name__)

SENSOR_CONFIG_KEYS = {
    "sensor_ip": "sensorIP",
    "sensor_port": "sensorPort",
    "use_mock_data": "useMockData",
    "api_timeout_ms": "apiTimeout",
}

THRESHOLD_KEYS = {
    "temp_min": "tempMin",
    "temp_max": "tempMax",
    "humidity_min": "humidityMin",
    "humidity_max": "humidityMax",
    "soil_moisture_min": "soilMoistureMin",
    "soil_moisture_max": "soilMoistureMax",
}

THRESHOLD_PAIRS = (
    ("temp_min", "temp_max"),
    ("humidity_min", "humidity_max"),
    ("soil_moisture_min", "soil_moisture_max"),
)


def default_sensor_config() -> SensorConfig:
    return SensorConfig(
        sensor_ip=app_settings.sensor_ip,
        sensor_port=app_settings.sensor_port,
        use_mock_data=app_settings.use_mock_data,
        api_timeout_ms=app_settings.sensor_timeout_ms,
    )


def _parse_float(field: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigInvalidError(field, "must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigInvalidError(field, "must be a number") from exc
    if not math.isfinite(number):
        raise ConfigInvalidError(field, "must be a finite number")
    return number


def _parse_int(field: str, value: Any) -> int:
    number = _parse_float(field, value)
    if not number.is_integer():
        raise ConfigInvalidError(field, "must be a whole number")
    return int(number)


def _parse_bool(field: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ConfigInvalidError(field, "must be true or false")


def _parse_sensor_field(field: str, value: Any) -> Any:
    if field == "sensor_ip":
        text = str(value).strip() if value is not None else ""
        if not text:
            raise ConfigInvalidError(field, "must not be empty")
        return text
    if field == "sensor_port":
        port = _parse_int(field, value)
        if not 1 <= port <= 65535:
            raise ConfigInvalidError(field, "must be between 1 and 65535")
        return port
    if field == "use_mock_data":
        return _parse_bool(field, value)
    timeout = _parse_int(field, value)
    if timeout <= 0:
        raise ConfigInvalidError(field, "must be positive")
    return timeout


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_sensor_config(db: Session, defaults: SensorConfig | None = None) -> SensorConfig:
    defaults = defaults or default_sensor_config()
    stored = setting_crud.get_many(db, SENSOR_CONFIG_KEYS.values())
    values = defaults.model_dump()

    for field, key in SENSOR_CONFIG_KEYS.items():
        if key not in stored:
            continue
        try:
            values[field] = _parse_sensor_field(field, stored[key])
        except ConfigInvalidError as exc:
            logger.warning("Ignoring stored %s=%r: %s", key, stored[key], exc.message)

    return SensorConfig(**values)


def save_sensor_config(db: Session, updates: dict[str, Any], current: SensorConfig | None = None) -> SensorConfig:
    """Validate a partial update, persist it, and return the merged config."""
    current = current or load_sensor_config(db)
    unknown = set(updates) - set(SENSOR_CONFIG_KEYS)
    if unknown:
        raise ConfigInvalidError(sorted(unknown)[0], "unknown field")

    parsed = {field: _parse_sensor_field(field, value) for field, value in updates.items()}
    merged = current.model_copy(update=parsed)

    setting_crud.set_many(db, {SENSOR_CONFIG_KEYS[field]: _encode(value) for field, value in parsed.items()})
    logger.info("Sensor config saved: %s", merged)
    return merged


def load_thresholds(db: Session) -> ThresholdSettings:
    stored = setting_crud.get_many(db, THRESHOLD_KEYS.values())
    values = ThresholdSettings().model_dump()

    for field, key in THRESHOLD_KEYS.items():
        if key not in stored:
            continue
        try:
            values[field] = _parse_float(field, stored[key])
        except ConfigInvalidError as exc:
            logger.warning("Ignoring stored %s=%r: %s", key, stored[key], exc.message)

    return ThresholdSettings(**values)


def save_thresholds(db: Session, updates: dict[str, Any]) -> ThresholdSettings:
    current = load_thresholds(db)
    unknown = set(updates) - set(THRESHOLD_KEYS)
    if unknown:
        raise ConfigInvalidError(sorted(unknown)[0], "unknown field")

    parsed = {field: _parse_float(field, value) for field, value in updates.items()}
    merged = current.model_copy(update=parsed)

    for min_field, max_field in THRESHOLD_PAIRS:
        if getattr(merged, min_field) > getattr(merged, max_field):
            raise ConfigInvalidError(min_field, f"must not exceed {max_field}")

    setting_crud.set_many(db, {THRESHOLD_KEYS[field]: _encode(value) for field, value in parsed.items()})
    logger.info("Thresholds saved: %s", merged)
    return merged
