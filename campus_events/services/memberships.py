"""Membership ledger: the (user, RSO) rows that RSO status is derived from."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from campus_events.models.rso import RsoMember


def is_member(db: Session, user_id: int, rso_id: int) -> bool:
    return db.query(RsoMember).filter(
        RsoMember.user_id == user_id,
        RsoMember.rso_id == rso_id,
    ).first() is not None


def count_members(db: Session, rso_id: int) -> int:
    return db.query(func.count(RsoMember.user_id)).filter(RsoMember.rso_id == rso_id).scalar() or 0


def count_members_by_rso(db: Session, rso_ids: list[int]) -> dict[int, int]:
    if not rso_ids:
        return {}
    rows = db.query(RsoMember.rso_id, func.count(RsoMember.user_id)).filter(
        RsoMember.rso_id.in_(rso_ids),
    ).group_by(RsoMember.rso_id).all()
    return {rso_id: count for rso_id, count in rows}


def member_rso_ids(db: Session, user_id: int) -> set[int]:
    rows = db.query(RsoMember.rso_id).filter(RsoMember.user_id == user_id).all()
    return {rso_id for (rso_id,) in rows}


def add_member(db: Session, user_id: int, rso_id: int) -> None:
    db.add(RsoMember(user_id=user_id, rso_id=rso_id))
    db.flush()


def remove_member(db: Session, user_id: int, rso_id: int) -> None:
    db.query(RsoMember).filter(
        RsoMember.user_id == user_id,
        RsoMember.rso_id == rso_id,
    ).delete(synchronize_session=False)
    db.flush()
