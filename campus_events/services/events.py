"""Event visibility and the approval workflow."""

import logging
from dataclasses import dataclass
from datetime import date, time

from sqlalchemy.orm import Session, joinedload

from campus_events.auth.guard import Action, authorize
from campus_events.database import atomic
from campus_events.domain.errors import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from campus_events.domain.values import EventType, Principal, Role, RsoStatus
from campus_events.models.event import Event
from campus_events.models.location import Location
from campus_events.models.rso import Rso, RsoMember

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationDetails:
    name: str
    address: str
    latitude: float | None = None
    longitude: float | None = None


@dataclass(frozen=True)
class EventDetails:
    name: str
    category: str
    event_date: date
    start_time: time
    end_time: time
    contact_email: str
    contact_phone: str
    event_type: EventType
    location: LocationDetails
    description: str | None = None
    rso_id: int | None = None


def is_auto_approved(event_type: EventType, role: Role) -> bool:
    if event_type in (EventType.PRIVATE, EventType.RSO):
        return True
    return role is Role.SUPER_ADMIN


def _events_query(db: Session):
    return db.query(Event).options(joinedload(Event.location))


def list_visible_events(db: Session, principal: Principal) -> list[Event]:
    """Return every event the principal may see.

    Public events are visible to everyone whether or not they are approved,
    private events to users of the owning university and RSO events to
    current members of the owning RSO. The three partitions never overlap
    because each one is selected by a different event type.
    """
    public_events = _events_query(db).filter(
        Event.event_type == EventType.PUBLIC.value,
    ).order_by(Event.id.asc()).all()

    university_events: list[Event] = []
    if principal.university_id is not None:
        university_events = _events_query(db).filter(
            Event.event_type == EventType.PRIVATE.value,
            Event.university_id == principal.university_id,
        ).order_by(Event.id.asc()).all()

    rso_events = _events_query(db).join(
        RsoMember, RsoMember.rso_id == Event.rso_id,
    ).filter(
        Event.event_type == EventType.RSO.value,
        RsoMember.user_id == principal.user_id,
    ).order_by(Event.id.asc()).all()

    return [*public_events, *university_events, *rso_events]


def list_pending_events(db: Session, principal: Principal) -> list[Event]:
    authorize(principal, Action.VIEW_PENDING_EVENTS)

    return _events_query(db).filter(
        Event.event_type == EventType.PUBLIC.value,
        Event.approved.is_(False),
    ).order_by(Event.event_date.asc(), Event.start_time.asc()).all()


def _validate_details(details: EventDetails) -> None:
    required = {
        'name': details.name,
        'category': details.category,
        'event_date': details.event_date,
        'start_time': details.start_time,
        'end_time': details.end_time,
        'location name': details.location.name if details.location else None,
        'address': details.location.address if details.location else None,
        'contact_email': details.contact_email,
        'contact_phone': details.contact_phone,
        'event_type': details.event_type,
    }
    missing = [
        field for field, value in required.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationFailedError(f"Missing required fields: {', '.join(missing)}")


def create_event(db: Session, principal: Principal, details: EventDetails) -> Event:
    authorize(principal, Action.CREATE_EVENT)
    _validate_details(details)

    try:
        event_type = EventType(details.event_type)
    except ValueError as exc:
        raise ValidationFailedError('Invalid event type') from exc

    if event_type is EventType.RSO:
        if details.rso_id is None:
            raise ValidationFailedError('RSO ID is required for RSO events')

        rso = db.query(Rso).filter(
            Rso.id == details.rso_id,
            Rso.admin_id == principal.user_id,
        ).first()
        if rso is None:
            raise ForbiddenError('You must be the admin of the RSO to create an event for it')
        if rso.status != RsoStatus.ACTIVE.value:
            raise InvalidStateError('RSO must be active to create events')
    elif principal.university_id is None:
        raise ValidationFailedError('University ID is required for public/private events')

    approved = is_auto_approved(event_type, principal.role)

    with atomic(db):
        location = Location(
            name=details.location.name.strip(),
            address=details.location.address.strip(),
            latitude=details.location.latitude,
            longitude=details.location.longitude,
        )
        db.add(location)
        db.flush()

        event = Event(
            name=details.name.strip(),
            category=details.category.strip(),
            description=details.description,
            event_date=details.event_date,
            start_time=details.start_time,
            end_time=details.end_time,
            location_id=location.id,
            contact_email=details.contact_email.strip(),
            contact_phone=details.contact_phone.strip(),
            created_by=principal.user_id,
            event_type=event_type.value,
            university_id=principal.university_id,
            rso_id=details.rso_id if event_type in (EventType.RSO, EventType.PRIVATE) else None,
            approved=approved,
        )
        db.add(event)
        db.flush()

    logger.info(
        'Event %s (%s) created by user %s, %s',
        event.id,
        event_type.value,
        principal.user_id,
        'approved' if approved else 'pending approval',
    )
    return event


def approve_event(db: Session, principal: Principal, event_id: int) -> Event:
    authorize(principal, Action.APPROVE_EVENT)

    with atomic(db):
        event = _events_query(db).filter(
            Event.id == event_id,
            Event.event_type == EventType.PUBLIC.value,
        ).first()
        if event is None:
            raise NotFoundError('Event not found or not a public event')

        if not event.approved:
            event.approved = True
            logger.info('Event %s approved by user %s', event.id, principal.user_id)

    return event
