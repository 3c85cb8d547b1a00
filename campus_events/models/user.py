"""User model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from campus_events.database import Base


class User(Base):
    """Represents an application user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    university_id = Column(Integer, ForeignKey("universities.id"), nullable=True)
    role = Column(String, nullable=False)  # student/admin/super_admin
