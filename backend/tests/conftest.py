import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="farmwatch-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'farmwatch.db')}"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ["USE_MOCK_DATA"] = "true"
os.environ["POLL_INTERVAL_SECONDS"] = "60"

import pytest  # noqa: E402
import requests  # noqa: E402

from farmwatch.core import Base, SessionLocal, engine  # noqa: E402
from farmwatch.models import Alert, SettingEntry  # noqa: E402,F401
from farmwatch.schemas import SensorConfig  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mock_config() -> SensorConfig:
    return SensorConfig(sensor_ip="192.168.1.100", sensor_port=80, use_mock_data=True, api_timeout_ms=5000)


@pytest.fixture
def device_config() -> SensorConfig:
    return SensorConfig(sensor_ip="192.168.1.100", sensor_port=80, use_mock_data=False, api_timeout_ms=5000)


@pytest.fixture
def direct_session() -> requests.Session:
    """A real session that ignores proxy settings from the environment."""
    session = requests.Session()
    session.trust_env = False
    return session
