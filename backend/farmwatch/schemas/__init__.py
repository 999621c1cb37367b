from farmwatch.schemas.alert import AlertListResponse, AlertOut
from farmwatch.schemas.sensor import (
    ChartPoint,
    ConnectionStateOut,
    HistoricalSeriesResponse,
    ReadingStatus,
    RecentReadingsResponse,
    SensorReading,
    SensorSnapshot,
)
from farmwatch.schemas.settings import NetworkStatus, SensorConfig, ThresholdSettings

__all__ = [
    "AlertListResponse",
    "AlertOut",
    "ChartPoint",
    "ConnectionStateOut",
    "HistoricalSeriesResponse",
    "NetworkStatus",
    "ReadingStatus",
    "RecentReadingsResponse",
    "SensorConfig",
    "SensorReading",
    "SensorSnapshot",
    "ThresholdSettings",
]
