import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_events.auth.dependencies import get_current_principal
from campus_events.domain.errors import DomainError
from campus_events.domain.values import Principal
from campus_events.routes.common import database_unavailable, get_db, to_http_exception
from campus_events.services import universities

router = APIRouter(tags=['universities'])

logger = logging.getLogger(__name__)


class CreateUniversityRequest(BaseModel):
    name: str
    location: str
    email_domain: str
    description: str | None = None


class UniversityResponse(BaseModel):
    id: int
    name: str
    location: str
    description: str | None = None
    email_domain: str

    class Config:
        from_attributes = True


@router.get('', response_model=list[UniversityResponse])
def list_universities(db: Session = Depends(get_db)):
    try:
        return universities.list_universities(db)
    except SQLAlchemyError as exc:
        logger.exception('Listing universities failed.')
        raise database_unavailable() from exc


@router.post('', response_model=UniversityResponse, status_code=status.HTTP_201_CREATED)
def create_university(
    data: CreateUniversityRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    try:
        return universities.create_university(
            db,
            principal,
            name=data.name,
            location=data.location,
            email_domain=data.email_domain,
            description=data.description,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Creating university failed.')
        raise database_unavailable() from exc
