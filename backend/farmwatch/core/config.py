import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "true").lower() == "true"
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    cors_origins_raw: str = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./farmwatch.db")
    sensor_ip: str = os.getenv("SENSOR_IP", "192.168.1.100")
    sensor_port: int = int(os.getenv("SENSOR_PORT", "80"))
    use_mock_data: bool = os.getenv("USE_MOCK_DATA", "true").lower() == "true"
    sensor_timeout_ms: int = int(os.getenv("SENSOR_TIMEOUT_MS", "5000"))
    poll_interval_seconds: float = float(os.getenv("POLL_INTERVAL_SECONDS", "5"))
    reading_buffer_size: int = int(os.getenv("READING_BUFFER_SIZE", "288"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_dir: str = os.getenv("LOG_DIR", "logs")

    @property
    def cors_origins(self) -> list[str]:
        return [item.strip() for item in self.cors_origins_raw.split(",") if item.strip()]


settings = Settings()
