"""Comment model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, Text
from campus_events.database import Base


class Comment(Base):
    """A user's comment and optional rating on an event."""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)
    rating = Column(Integer)
