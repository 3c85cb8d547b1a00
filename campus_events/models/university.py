"""University model definitions."""

from sqlalchemy import Column, Integer, String, Text
from campus_events.database import Base


class University(Base):
    """A campus that users, RSOs and events belong to."""
    __tablename__ = "universities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    location = Column(String, nullable=False)
    description = Column(Text)
    email_domain = Column(String, unique=True, nullable=False)
