from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["normal", "warning", "critical"]
ReadingSource = Literal["device", "mock"]
TimeRange = Literal["24h", "7d"]


class SensorReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., description="Temperature in Celsius")
    humidity: float = Field(..., description="Relative humidity percentage")
    soil_moisture: float = Field(..., description="Soil moisture percentage")
    timestamp: datetime


class ChartPoint(BaseModel):
    time: str
    temperature: float
    humidity: float
    soil_moisture: float


class HistoricalSeriesResponse(BaseModel):
    range: TimeRange
    items: list[ChartPoint]
    count: int


class RecentReadingsResponse(BaseModel):
    items: list[SensorReading]
    count: int


class ReadingStatus(BaseModel):
    temperature: Severity
    humidity: Severity
    soil_moisture: Severity


class ConnectionStateOut(BaseModel):
    connected: bool
    last_error: str


class SensorSnapshot(BaseModel):
    reading: SensorReading
    source: ReadingSource | None
    status: ReadingStatus
    connection: ConnectionStateOut
    online: bool
    refreshing: bool
