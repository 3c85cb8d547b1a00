from datetime import date, time

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy.orm import Session

from campus_events.auth.dependencies import get_current_principal
from campus_events.domain.values import EventType, Principal
from campus_events.routes.common import get_db, run_operation
from campus_events.services import events
from campus_events.services.events import EventDetails, LocationDetails

router = APIRouter(tags=['events'])

MAX_DESCRIPTION_LENGTH = 2000


class CreateEventRequest(BaseModel):
    name: str
    category: str
    description: str | None = None
    event_date: date
    start_time: time
    end_time: time
    location_name: str
    address: str
    latitude: float | None = None
    longitude: float | None = None
    email: str
    phone_number: str
    event_type: EventType
    rso_id: int | None = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        if value is None:
            return None

        normalized = value.strip()
        if not normalized:
            return None

        if len(normalized) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f'Description must be {MAX_DESCRIPTION_LENGTH} characters or fewer.')

        return normalized

    @model_validator(mode='after')
    def require_rso_for_rso_events(self) -> 'CreateEventRequest':
        if self.event_type is EventType.RSO and self.rso_id is None:
            raise ValueError('RSO ID is required for RSO events')
        return self

    def to_details(self) -> EventDetails:
        return EventDetails(
            name=self.name,
            category=self.category,
            description=self.description,
            event_date=self.event_date,
            start_time=self.start_time,
            end_time=self.end_time,
            contact_email=self.email,
            contact_phone=self.phone_number,
            event_type=self.event_type,
            rso_id=self.rso_id,
            location=LocationDetails(
                name=self.location_name,
                address=self.address,
                latitude=self.latitude,
                longitude=self.longitude,
            ),
        )


class LocationResponse(BaseModel):
    id: int
    name: str
    address: str
    latitude: float | None = None
    longitude: float | None = None

    class Config:
        from_attributes = True


class EventResponse(BaseModel):
    id: int
    name: str
    category: str
    description: str | None = None
    event_date: date
    start_time: time
    end_time: time
    contact_email: str
    contact_phone: str
    created_by: int
    event_type: EventType
    university_id: int | None = None
    rso_id: int | None = None
    approved: bool
    location: LocationResponse | None = None

    class Config:
        from_attributes = True


@router.get('', response_model=list[EventResponse])
def list_events(principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    return run_operation(db, events.list_visible_events, principal)


@router.get('/pending-approval', response_model=list[EventResponse])
def list_pending_events(principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    return run_operation(db, events.list_pending_events, principal)


@router.post('', response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    data: CreateEventRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    return run_operation(db, events.create_event, principal, data.to_details())


@router.put('/{event_id}/approve', response_model=EventResponse)
def approve_event(event_id: int, principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    return run_operation(db, events.approve_event, principal, event_id)
