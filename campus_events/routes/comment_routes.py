from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from campus_events.auth.dependencies import get_current_principal
from campus_events.domain.values import Principal
from campus_events.routes.common import get_db, run_operation
from campus_events.services import comments

router = APIRouter(tags=['comments'])


class CommentRequest(BaseModel):
    text: str
    rating: int | None = Field(default=None, ge=comments.MIN_RATING, le=comments.MAX_RATING)

    @field_validator('text')
    @classmethod
    def validate_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Comment text is required.')
        return normalized


class CommentResponse(BaseModel):
    id: int
    event_id: int
    user_id: int
    text: str
    rating: int | None = None
    first_name: str
    last_name: str

    class Config:
        from_attributes = True


@router.get('/events/{event_id}/comments', response_model=list[CommentResponse])
def list_comments(
    event_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    del principal
    return run_operation(db, comments.list_comments, event_id)


@router.post('/events/{event_id}/comments', response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    event_id: int,
    data: CommentRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    return run_operation(db, comments.add_comment, principal, event_id, data.text, data.rating)


@router.put('/comments/{comment_id}', response_model=CommentResponse)
def update_comment(
    comment_id: int,
    data: CommentRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    return run_operation(db, comments.update_comment, principal, comment_id, data.text, data.rating)


@router.delete('/comments/{comment_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    run_operation(db, comments.delete_comment, principal, comment_id)
