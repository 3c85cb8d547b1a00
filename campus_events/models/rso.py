"""RSO and RSO membership model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from campus_events.database import Base


class Rso(Base):
    """A registered student organization scoped to one university."""
    __tablename__ = "rsos"
    __table_args__ = (
        UniqueConstraint("university_id", "name", name="uq_rsos_university_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    university_id = Column(Integer, ForeignKey("universities.id"), nullable=False, index=True)
    admin_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(String, nullable=False, default="inactive")  # active/inactive


class RsoMember(Base):
    """A (user, RSO) membership row."""
    __tablename__ = "rso_members"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    rso_id = Column(Integer, ForeignKey("rsos.id"), primary_key=True)
