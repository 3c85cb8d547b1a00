"""Event model definitions."""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import relationship
from campus_events.database import Base
from campus_events.models.location import Location


class Event(Base):
    """Represents a scheduled campus event."""
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(Text)
    event_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"))
    contact_email = Column(String, nullable=False)
    contact_phone = Column(String, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    event_type = Column(String, nullable=False)  # public/private/rso
    university_id = Column(Integer, ForeignKey("universities.id"))
    rso_id = Column(Integer, ForeignKey("rsos.id"))
    approved = Column(Boolean, nullable=False, default=False)

    location = relationship(Location)
