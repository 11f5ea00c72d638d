"""
RSVP model
"""

from sqlalchemy import Column, Integer, String, Text

from app.core.db import Base

class Rsvp(Base):
    __tablename__ = "rsvps"

    # Ids are issued by the store, never by the database
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    attendance = Column(String(32), nullable=False)
    guests = Column(Integer, nullable=False, default=0)
    dietary = Column(Text, nullable=False, default="")
    message = Column(Text, nullable=False, default="")
    created_at = Column(String(32), nullable=False, index=True)  # ISO-8601, UTC
