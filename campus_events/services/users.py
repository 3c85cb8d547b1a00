"""Registration, login and principal resolution."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_events.auth.passwords import hash_password, verify_password
from campus_events.database import atomic
from campus_events.domain.errors import ConflictError, NotFoundError, ValidationFailedError
from campus_events.domain.values import Principal, Role
from campus_events.models.university import University
from campus_events.models.user import User
from campus_events.services.universities import normalize_domain

DOMAIN_BOUND_ROLES = frozenset({Role.STUDENT, Role.ADMIN})


def email_domain(email: str) -> str:
    _, _, domain = email.rpartition('@')
    return normalize_domain(domain)


def get_principal(user: User) -> Principal:
    return Principal(user_id=user.id, role=Role(user.role), university_id=user.university_id)


def register_user(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: Role = Role.STUDENT,
    university_id: int | None = None,
) -> User:
    email = (email or '').strip().lower()
    if '@' not in email or not email_domain(email):
        raise ValidationFailedError('A valid email address is required')
    if not password:
        raise ValidationFailedError('Password is required')
    if not (first_name or '').strip() or not (last_name or '').strip():
        raise ValidationFailedError('First and last name are required')

    try:
        role = Role(role)
    except ValueError as exc:
        raise ValidationFailedError('Invalid user type') from exc

    if db.query(User).filter(User.email == email).first():
        raise ConflictError('Email already registered')

    if university_id is not None:
        university = db.query(University).filter(University.id == university_id).first()
        if university is None:
            raise NotFoundError('University not found')
        if role in DOMAIN_BOUND_ROLES and email_domain(email) != university.email_domain:
            raise ValidationFailedError('Email domain does not match university domain')

    try:
        with atomic(db):
            user = User(
                email=email,
                hashed_password=hash_password(password),
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                university_id=university_id,
                role=role.value,
            )
            db.add(user)
            db.flush()
    except IntegrityError as exc:
        raise ConflictError('Email already registered') from exc

    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    normalized = (email or '').strip().lower()
    user = db.query(User).filter(User.email == normalized).first()
    if user is None or not verify_password(user.hashed_password, password or ''):
        return None
    return user
