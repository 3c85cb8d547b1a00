from dataclasses import dataclass

from sqlalchemy.orm import Session

from campus_events.auth.guard import Action, CommentOwnership, authorize
from campus_events.database import atomic
from campus_events.domain.errors import NotFoundError, ValidationFailedError
from campus_events.domain.values import Principal
from campus_events.models.comment import Comment
from campus_events.models.event import Event
from campus_events.models.user import User

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class CommentView:
    id: int
    event_id: int
    user_id: int
    text: str
    rating: int | None
    first_name: str
    last_name: str


def _validate(text: str, rating: int | None) -> str:
    normalized = (text or '').strip()
    if not normalized:
        raise ValidationFailedError('Comment text is required')
    if rating is not None and not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationFailedError(f'Rating must be between {MIN_RATING} and {MAX_RATING}')
    return normalized


def _view(comment: Comment, author: User) -> CommentView:
    return CommentView(
        id=comment.id,
        event_id=comment.event_id,
        user_id=comment.user_id,
        text=comment.text,
        rating=comment.rating,
        first_name=author.first_name,
        last_name=author.last_name,
    )


def _get_comment(db: Session, comment_id: int) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if comment is None:
        raise NotFoundError('Comment not found')
    return comment


def list_comments(db: Session, event_id: int) -> list[CommentView]:
    rows = db.query(Comment, User).join(User, User.id == Comment.user_id).filter(
        Comment.event_id == event_id,
    ).order_by(Comment.id.desc()).all()
    return [_view(comment, author) for comment, author in rows]


def add_comment(db: Session, principal: Principal, event_id: int, text: str, rating: int | None = None) -> CommentView:
    text = _validate(text, rating)

    if db.query(Event.id).filter(Event.id == event_id).first() is None:
        raise NotFoundError('Event not found')

    with atomic(db):
        comment = Comment(event_id=event_id, user_id=principal.user_id, text=text, rating=rating)
        db.add(comment)
        db.flush()

    author = db.query(User).filter(User.id == principal.user_id).one()
    return _view(comment, author)


def update_comment(
    db: Session,
    principal: Principal,
    comment_id: int,
    text: str,
    rating: int | None = None,
) -> CommentView:
    text = _validate(text, rating)

    with atomic(db):
        comment = _get_comment(db, comment_id)
        authorize(principal, Action.EDIT_COMMENT, CommentOwnership(comment.user_id, None))
        comment.text = text
        comment.rating = rating

    author = db.query(User).filter(User.id == comment.user_id).one()
    return _view(comment, author)


def delete_comment(db: Session, principal: Principal, comment_id: int) -> None:
    with atomic(db):
        comment = _get_comment(db, comment_id)
        event_creator_id = db.query(Event.created_by).filter(Event.id == comment.event_id).scalar()
        authorize(principal, Action.DELETE_COMMENT, CommentOwnership(comment.user_id, event_creator_id))
        db.delete(comment)
