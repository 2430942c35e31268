from sqlalchemy import JSON, Column, DateTime, Integer, String

from .base import Base


class OptionRecord(Base):
    """One persisted option. The full contract lives in `payload`."""
    __tablename__ = "mobimap_options"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String)
    country = Column(String)
    status = Column(String)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime)


class AppSettingRecord(Base):
    """Key/value rows for the singleton parts of the state (weights, compare list)."""
    __tablename__ = "mobimap_settings"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=False)
