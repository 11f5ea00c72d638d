"""
Id counter model
"""

from sqlalchemy import Column, Integer, String

from app.core.db import Base

class IdCounter(Base):
    """Highest id ever issued per table, so deleted ids are not handed out again"""
    __tablename__ = "id_counters"

    name = Column(String(64), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
