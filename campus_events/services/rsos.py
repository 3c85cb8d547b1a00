"""RSO lifecycle: creation, join/leave and the active/inactive status rule.

An RSO is ``active`` exactly when its member count has reached the activation
threshold. Status is re-derived inside the same transaction as every
membership change, so it is never stale once a join or leave returns.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_events.auth.guard import Action, authorize
from campus_events.core import config
from campus_events.database import atomic
from campus_events.domain.errors import (
    AdminCannotLeaveError,
    AlreadyMemberError,
    ConflictError,
    NotFoundError,
    NotMemberError,
    ValidationFailedError,
)
from campus_events.domain.values import Principal, RsoStatus
from campus_events.models.rso import Rso
from campus_events.services import memberships

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RsoSnapshot:
    id: int
    name: str
    description: str | None
    university_id: int
    admin_id: int
    status: RsoStatus
    member_count: int
    is_member: bool


def recompute_status(current: RsoStatus, member_count: int, *, joined: bool, threshold: int) -> RsoStatus:
    """Return the status an RSO should have after a membership change.

    A join can only activate and a leave can only deactivate; the opposite
    direction is left to the call that crosses it.
    """
    if joined and member_count >= threshold:
        return RsoStatus.ACTIVE
    if not joined and member_count < threshold:
        return RsoStatus.INACTIVE
    return current


def _threshold(threshold: int | None) -> int:
    return threshold if threshold is not None else config.RSO_ACTIVATION_THRESHOLD


def _snapshot(rso: Rso, member_count: int, is_member: bool) -> RsoSnapshot:
    return RsoSnapshot(
        id=rso.id,
        name=rso.name,
        description=rso.description,
        university_id=rso.university_id,
        admin_id=rso.admin_id,
        status=RsoStatus(rso.status),
        member_count=member_count,
        is_member=is_member,
    )


def _lock_rso_at_university(db: Session, rso_id: int, university_id: int | None) -> Rso | None:
    # Row lock serializes concurrent join/leave recounts on backends that support it.
    return db.query(Rso).filter(
        Rso.id == rso_id,
        Rso.university_id == university_id,
    ).with_for_update().first()


def _apply_status(rso: Rso, status: RsoStatus) -> None:
    if rso.status != status.value:
        logger.info('RSO %s status %s -> %s', rso.id, rso.status, status.value)
        rso.status = status.value


def list_rsos(db: Session, principal: Principal) -> list[RsoSnapshot]:
    if principal.university_id is None:
        raise ValidationFailedError('User is not associated with a university')

    rsos = db.query(Rso).filter(
        Rso.university_id == principal.university_id,
    ).order_by(Rso.name.asc()).all()

    counts = memberships.count_members_by_rso(db, [rso.id for rso in rsos])
    joined_ids = memberships.member_rso_ids(db, principal.user_id)

    return [_snapshot(rso, counts.get(rso.id, 0), rso.id in joined_ids) for rso in rsos]


def create_rso(db: Session, principal: Principal, name: str, description: str | None = None) -> RsoSnapshot:
    authorize(principal, Action.CREATE_RSO)

    if principal.university_id is None:
        raise ValidationFailedError('User is not associated with a university')

    normalized_name = (name or '').strip()
    if not normalized_name:
        raise ValidationFailedError('RSO name is required')

    existing = db.query(Rso).filter(
        Rso.name == normalized_name,
        Rso.university_id == principal.university_id,
    ).first()
    if existing:
        raise ConflictError('An RSO with this name already exists at your university')

    try:
        with atomic(db):
            rso = Rso(
                name=normalized_name,
                description=description,
                university_id=principal.university_id,
                admin_id=principal.user_id,
                status=RsoStatus.INACTIVE.value,
            )
            db.add(rso)
            db.flush()
            memberships.add_member(db, principal.user_id, rso.id)
            member_count = memberships.count_members(db, rso.id)
    except IntegrityError as exc:
        raise ConflictError('An RSO with this name already exists at your university') from exc

    logger.info('RSO %s created at university %s by user %s', rso.id, rso.university_id, principal.user_id)
    return _snapshot(rso, member_count, is_member=True)


def join_rso(db: Session, principal: Principal, rso_id: int, threshold: int | None = None) -> RsoSnapshot:
    threshold = _threshold(threshold)

    with atomic(db):
        rso = _lock_rso_at_university(db, rso_id, principal.university_id)
        if rso is None:
            raise NotFoundError('RSO not found or not at your university')

        if memberships.is_member(db, principal.user_id, rso_id):
            raise AlreadyMemberError(rso_id)

        try:
            memberships.add_member(db, principal.user_id, rso_id)
        except IntegrityError as exc:
            raise AlreadyMemberError(rso_id) from exc
        member_count = memberships.count_members(db, rso_id)
        _apply_status(
            rso,
            recompute_status(RsoStatus(rso.status), member_count, joined=True, threshold=threshold),
        )

    return _snapshot(rso, member_count, is_member=True)


def leave_rso(db: Session, principal: Principal, rso_id: int, threshold: int | None = None) -> RsoSnapshot:
    threshold = _threshold(threshold)

    with atomic(db):
        rso = db.query(Rso).filter(Rso.id == rso_id).with_for_update().first()
        if rso is None:
            raise NotFoundError('RSO not found')
        if not memberships.is_member(db, principal.user_id, rso_id):
            raise NotMemberError(rso_id)
        if rso.admin_id == principal.user_id:
            raise AdminCannotLeaveError(rso_id)

        memberships.remove_member(db, principal.user_id, rso_id)
        member_count = memberships.count_members(db, rso_id)
        _apply_status(
            rso,
            recompute_status(RsoStatus(rso.status), member_count, joined=False, threshold=threshold),
        )

    return _snapshot(rso, member_count, is_member=False)
