from farmwatch.services.acquisition import AcquisitionResult, DataAcquisitionLoop, acquire_once
from farmwatch.services.alert_engine import build_critical_alerts, record_critical_alerts
from farmwatch.services.mock_data import MockDataGenerator
from farmwatch.services.sensor_connector import ConnectionState, SensorConnector, build_sensor_url
from farmwatch.services.status import classify, classify_reading

__all__ = [
    "AcquisitionResult",
    "ConnectionState",
    "DataAcquisitionLoop",
    "MockDataGenerator",
    "SensorConnector",
    "acquire_once",
    "build_critical_alerts",
    "build_sensor_url",
    "classify",
    "classify_reading",
    "record_critical_alerts",
]
