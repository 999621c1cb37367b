from pydantic import BaseModel, ConfigDict


class SensorConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    sensor_ip: str
    sensor_port: int
    use_mock_data: bool
    api_timeout_ms: int


class ThresholdSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp_min: float = 15.0
    temp_max: float = 35.0
    humidity_min: float = 40.0
    humidity_max: float = 80.0
    soil_moisture_min: float = 20.0
    soil_moisture_max: float = 80.0


class NetworkStatus(BaseModel):
    online: bool
