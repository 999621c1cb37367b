from farmwatch.core.config import Settings, settings
from farmwatch.core.database import Base, SessionLocal, engine, get_db

__all__ = ["Base", "SessionLocal", "Settings", "engine", "get_db", "settings"]
