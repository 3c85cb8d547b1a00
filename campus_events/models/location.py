"""Location model definitions."""

from sqlalchemy import Column, Float, Integer, String
from campus_events.database import Base


class Location(Base):
    """Venue of exactly one event."""
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
