import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_events.auth.guard import Action, authorize
from campus_events.database import atomic
from campus_events.domain.errors import ConflictError, ValidationFailedError
from campus_events.domain.values import Principal
from campus_events.models.university import University

logger = logging.getLogger(__name__)


def normalize_domain(value: str) -> str:
    return value.strip().lower().lstrip('@')


def list_universities(db: Session) -> list[University]:
    return db.query(University).order_by(University.name.asc()).all()


def create_university(
    db: Session,
    principal: Principal,
    name: str,
    location: str,
    email_domain: str,
    description: str | None = None,
) -> University:
    authorize(principal, Action.CREATE_UNIVERSITY)

    name = (name or '').strip()
    location = (location or '').strip()
    email_domain = normalize_domain(email_domain or '')
    if not name or not location or not email_domain:
        raise ValidationFailedError('Name, location, and email domain are required')

    existing = db.query(University).filter(
        or_(University.name == name, University.email_domain == email_domain),
    ).first()
    if existing:
        raise ConflictError('A university with this name or email domain already exists')

    try:
        with atomic(db):
            university = University(
                name=name,
                location=location,
                description=description,
                email_domain=email_domain,
            )
            db.add(university)
            db.flush()
    except IntegrityError as exc:
        raise ConflictError('A university with this name or email domain already exists') from exc

    logger.info('University %s (%s) created by user %s', university.id, email_domain, principal.user_id)
    return university
