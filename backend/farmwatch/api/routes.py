from typing import Any, Literal

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from farmwatch.core.database import get_db
from farmwatch.core.exceptions import ConfigInvalidError
from farmwatch.crud import alert_crud
from farmwatch.schemas import (
    AlertListResponse,
    AlertOut,
    ConnectionStateOut,
    HistoricalSeriesResponse,
    NetworkStatus,
    ReadingStatus,
    RecentReadingsResponse,
    SensorConfig,
    SensorSnapshot,
    ThresholdSettings,
)
from farmwatch.services import DataAcquisitionLoop, classify_reading
from farmwatch.services.config_store import (
    load_sensor_config,
    load_thresholds,
    save_sensor_config,
    save_thresholds,
)

router = APIRouter()


def get_acquisition(request: Request) -> DataAcquisitionLoop:
    return request.app.state.acquisition


def _serialize_connection(loop: DataAcquisitionLoop) -> ConnectionStateOut:
    state = loop.connection_state
    return ConnectionStateOut(connected=state.connected, last_error=state.last_error)


def _build_snapshot(loop: DataAcquisitionLoop) -> SensorSnapshot:
    reading = loop.current_reading
    return SensorSnapshot(
        reading=reading,
        source=loop.last_result.source if loop.last_result else None,
        status=classify_reading(reading),
        connection=_serialize_connection(loop),
        online=loop.online,
        refreshing=loop.is_refreshing,
    )


def _config_error(exc: ConfigInvalidError) -> HTTPException:
    return HTTPException(status_code=400, detail=str(exc))


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/sensor/current", response_model=SensorSnapshot)
async def get_current_reading(loop: DataAcquisitionLoop = Depends(get_acquisition)) -> SensorSnapshot:
    return _build_snapshot(loop)


@router.post("/sensor/refresh", response_model=SensorSnapshot)
async def refresh_reading(loop: DataAcquisitionLoop = Depends(get_acquisition)) -> SensorSnapshot:
    await loop.refresh()
    return _build_snapshot(loop)


@router.get("/sensor/recent", response_model=RecentReadingsResponse)
async def get_recent_readings(
    limit: int = Query(default=100, ge=1, le=2000),
    loop: DataAcquisitionLoop = Depends(get_acquisition),
) -> RecentReadingsResponse:
    items = loop.recent_readings[-limit:]
    return RecentReadingsResponse(items=items, count=len(items))


@router.get("/sensor/history", response_model=HistoricalSeriesResponse)
async def get_sensor_history(
    time_range: Literal["24h", "7d"] = Query(default="24h", alias="range"),
    loop: DataAcquisitionLoop = Depends(get_acquisition),
) -> HistoricalSeriesResponse:
    items = loop.generator.historical_series(time_range)
    return HistoricalSeriesResponse(range=time_range, items=items, count=len(items))


@router.get("/sensor/status", response_model=ReadingStatus)
async def get_sensor_status(
    policy: Literal["bands", "thresholds"] = Query(default="bands"),
    loop: DataAcquisitionLoop = Depends(get_acquisition),
    db: Session = Depends(get_db),
) -> ReadingStatus:
    thresholds = load_thresholds(db) if policy == "thresholds" else None
    return classify_reading(loop.current_reading, thresholds)


@router.get("/sensor/connection", response_model=ConnectionStateOut)
async def get_connection_state(loop: DataAcquisitionLoop = Depends(get_acquisition)) -> ConnectionStateOut:
    return _serialize_connection(loop)


@router.get("/settings/sensor", response_model=SensorConfig)
async def get_sensor_config(loop: DataAcquisitionLoop = Depends(get_acquisition)) -> SensorConfig:
    return loop.config


@router.put("/settings/sensor", response_model=SensorConfig)
async def update_sensor_config(
    payload: dict[str, Any] = Body(...),
    loop: DataAcquisitionLoop = Depends(get_acquisition),
    db: Session = Depends(get_db),
) -> SensorConfig:
    try:
        config = save_sensor_config(db, payload, current=loop.config)
    except ConfigInvalidError as exc:
        raise _config_error(exc) from exc

    loop.update_config(config)
    return config


@router.get("/settings/thresholds", response_model=ThresholdSettings)
def get_thresholds(db: Session = Depends(get_db)) -> ThresholdSettings:
    return load_thresholds(db)


@router.put("/settings/thresholds", response_model=ThresholdSettings)
def update_thresholds(payload: dict[str, Any] = Body(...), db: Session = Depends(get_db)) -> ThresholdSettings:
    try:
        return save_thresholds(db, payload)
    except ConfigInvalidError as exc:
        raise _config_error(exc) from exc


@router.get("/network", response_model=NetworkStatus)
async def get_network_status(loop: DataAcquisitionLoop = Depends(get_acquisition)) -> NetworkStatus:
    return NetworkStatus(online=loop.online)


@router.put("/network", response_model=NetworkStatus)
async def update_network_status(
    status: NetworkStatus,
    loop: DataAcquisitionLoop = Depends(get_acquisition),
) -> NetworkStatus:
    loop.set_online(status.online)
    return NetworkStatus(online=loop.online)


@router.get("/alerts", response_model=AlertListResponse)
def get_alerts(
    unacknowledged_only: bool = Query(default=True),
    severity: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> AlertListResponse:
    if unacknowledged_only:
        alerts = alert_crud.get_unacknowledged_alerts(db, severity=severity)
    else:
        alerts = alert_crud.get_recent_alerts(db, hours=168, limit=500)
        if severity:
            alerts = [alert for alert in alerts if alert.severity == severity]

    serialized = [AlertOut.model_validate(alert) for alert in alerts]
    return AlertListResponse(items=serialized, count=len(serialized))


@router.post("/alerts/{alert_id}/acknowledge", response_model=AlertOut)
def acknowledge_alert(alert_id: int, db: Session = Depends(get_db)) -> AlertOut:
    alert = alert_crud.acknowledge_alert(db, alert_id)
    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")
    return AlertOut.model_validate(alert)


@router.delete("/alerts/{alert_id}")
def dismiss_alert(alert_id: int, db: Session = Depends(get_db)) -> dict[str, int]:
    if not alert_crud.dismiss_alert(db, alert_id):
        raise HTTPException(status_code=404, detail="Alert not found")
    return {"deleted": 1}


@router.delete("/alerts")
def clear_alerts(db: Session = Depends(get_db)) -> dict[str, int]:
    return {"deleted": alert_crud.clear_alerts(db)}
