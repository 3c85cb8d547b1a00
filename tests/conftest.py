import os
from datetime import date, time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

from campus_events.database import Base  # noqa: E402
from campus_events.domain.values import EventType, Principal, Role, RsoStatus  # noqa: E402
from campus_events.models.comment import Comment  # noqa: E402,F401
from campus_events.models.event import Event  # noqa: E402
from campus_events.models.location import Location  # noqa: E402
from campus_events.models.rso import Rso, RsoMember  # noqa: E402
from campus_events.models.university import University  # noqa: E402
from campus_events.models.user import User  # noqa: E402


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


class Seed:
    """Inserts rows directly, bypassing the services under test."""

    def __init__(self, db):
        self.db = db
        self._user_counter = 0

    def university(self, name: str = 'University of Central Florida', domain: str = 'ucf.edu') -> University:
        university = University(name=name, location='Orlando, FL', email_domain=domain)
        self.db.add(university)
        self.db.commit()
        return university

    def user(self, university: University | None = None, role: Role = Role.STUDENT, email: str | None = None) -> User:
        self._user_counter += 1
        domain = university.email_domain if university else 'example.com'
        user = User(
            email=email or f'user{self._user_counter}@{domain}',
            hashed_password='not-a-real-hash',
            first_name=f'First{self._user_counter}',
            last_name=f'Last{self._user_counter}',
            university_id=university.id if university else None,
            role=role.value,
        )
        self.db.add(user)
        self.db.commit()
        return user

    def rso(self, admin: User, name: str = 'Chess Club', members: int = 1, status: RsoStatus | None = None) -> Rso:
        """Create an RSO owned by ``admin`` with ``members`` members including the admin."""
        rso = Rso(
            name=name,
            description='',
            university_id=admin.university_id,
            admin_id=admin.id,
            status=RsoStatus.INACTIVE.value,
        )
        self.db.add(rso)
        self.db.flush()
        self.db.add(RsoMember(user_id=admin.id, rso_id=rso.id))
        university = self.db.get(University, admin.university_id)
        for _ in range(members - 1):
            member = self.user(university)
            self.db.add(RsoMember(user_id=member.id, rso_id=rso.id))
        if status is not None:
            rso.status = status.value
        self.db.commit()
        return rso

    def event(
        self,
        creator: User,
        event_type: EventType = EventType.PUBLIC,
        approved: bool = True,
        university_id: int | None = None,
        rso_id: int | None = None,
        with_location: bool = True,
        name: str = 'Knights Game Night',
    ) -> Event:
        location_id = None
        if with_location:
            location = Location(name='Student Union', address='12715 Pegasus Dr', latitude=28.6, longitude=-81.2)
            self.db.add(location)
            self.db.flush()
            location_id = location.id

        event = Event(
            name=name,
            category='social',
            event_date=date(2026, 11, 2),
            start_time=time(18, 0),
            end_time=time(20, 0),
            location_id=location_id,
            contact_email='events@ucf.edu',
            contact_phone='407-555-0100',
            created_by=creator.id,
            event_type=event_type.value,
            university_id=university_id if university_id is not None else creator.university_id,
            rso_id=rso_id,
            approved=approved,
        )
        self.db.add(event)
        self.db.commit()
        return event


@pytest.fixture
def seed(db) -> Seed:
    return Seed(db)


def principal_for(user: User) -> Principal:
    return Principal(user_id=user.id, role=Role(user.role), university_id=user.university_id)


@pytest.fixture
def as_principal():
    return principal_for


@pytest.fixture(autouse=True)
def skip_schema_check(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('campus_events.routes.common.ensure_database_ready', lambda: None)
