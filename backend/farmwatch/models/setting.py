from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from farmwatch.core.database import Base


class SettingEntry(Base):
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<SettingEntry({self.key}={self.value!r})>"
