import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farmwatch.api import router
from farmwatch.core import Base, SessionLocal, engine, settings
from farmwatch.models import Alert, SettingEntry  # noqa: F401
from farmwatch.services import AcquisitionResult, DataAcquisitionLoop, record_critical_alerts
from farmwatch.services.config_store import load_sensor_config
from farmwatch.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def record_alerts_listener(result: AcquisitionResult) -> None:
    db = SessionLocal()
    try:
        record_critical_alerts(db, result.reading)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        config = load_sensor_config(db)
    finally:
        db.close()

    acquisition = DataAcquisitionLoop(
        config,
        poll_interval=settings.poll_interval_seconds,
        buffer_size=settings.reading_buffer_size,
    )
    acquisition.subscribe(record_alerts_listener)
    app.state.acquisition = acquisition
    acquisition.start()
    logger.info("FarmWatch backend started (mock data: %s)", config.use_mock_data)

    yield

    await acquisition.stop()


app = FastAPI(
    title="FarmWatch API",
    version="0.1.0",
    description="Farm sensor acquisition, status classification and alerts.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "FarmWatch backend is running", "docs": "/docs"}


def run() -> None:
    import uvicorn

    uvicorn.run("farmwatch.main:app", host=settings.host, port=settings.port, reload=settings.debug)
