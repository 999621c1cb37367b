import logging
from typing import Any

from sqlalchemy.orm import Session

from farmwatch.crud import alert_crud
from farmwatch.models.alert import Alert
from farmwatch.schemas.sensor import SensorReading
from farmwatch.services.status import FIXED_BANDS, METRICS, classify

logger = logging.getLogger(__name__)


def _threshold_message(parameter: str, value: float, min_value: float | None, max_value: float | None) -> tuple[str, float]:
    if min_value is not None and value < min_value:
        return f"{parameter} below threshold ({value:.1f} < {min_value:.1f})", min_value
    return f"{parameter} above threshold ({value:.1f} > {max_value:.1f})", max_value


def build_critical_alerts(reading: SensorReading) -> list[dict[str, Any]]:
    alerts: list[dict[str, Any]] = []

    for parameter in METRICS:
        value = float(getattr(reading, parameter))
        if classify(parameter, value) != "critical":
            continue

        critical_low, critical_high, _, _ = FIXED_BANDS[parameter]
        message, threshold_value = _threshold_message(parameter, value, critical_low, critical_high)
        alerts.append(
            {
                "severity": "critical",
                "parameter": parameter,
                "message": message,
                "threshold_value": threshold_value,
                "current_value": value,
                "acknowledged": False,
            }
        )

    return alerts


def record_critical_alerts(db: Session, reading: SensorReading) -> list[Alert]:
    """Persist critical alerts, one open alert per parameter at a time."""
    created: list[Alert] = []
    for payload in build_critical_alerts(reading):
        if alert_crud.get_unacknowledged_alerts(db, parameter=payload["parameter"]):
            continue
        created.append(alert_crud.create(db, payload))
        logger.warning("Critical alert: %s", payload["message"])
    return created
