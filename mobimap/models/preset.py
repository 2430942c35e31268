from sqlalchemy import JSON, Column, DateTime, Integer, String

from .base import Base


class PresetRecord(Base):
    __tablename__ = "mobimap_presets"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    weights = Column(JSON, nullable=False)
    created_at = Column(DateTime)
