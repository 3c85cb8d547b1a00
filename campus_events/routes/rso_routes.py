from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from campus_events.auth.dependencies import get_current_principal
from campus_events.domain.values import Principal, RsoStatus
from campus_events.routes.common import get_db, run_operation
from campus_events.services import rsos

router = APIRouter(tags=['rsos'])


class CreateRsoRequest(BaseModel):
    name: str
    description: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('RSO name is required.')
        return normalized


class RsoResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    university_id: int
    admin_id: int
    status: RsoStatus
    member_count: int
    is_member: bool

    class Config:
        from_attributes = True


@router.get('', response_model=list[RsoResponse])
def list_rsos(principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    return run_operation(db, rsos.list_rsos, principal)


@router.post('', response_model=RsoResponse, status_code=status.HTTP_201_CREATED)
def create_rso(
    data: CreateRsoRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    return run_operation(db, rsos.create_rso, principal, data.name, data.description)


@router.post('/{rso_id}/join', response_model=RsoResponse)
def join_rso(rso_id: int, principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    return run_operation(db, rsos.join_rso, principal, rso_id)


@router.post('/{rso_id}/leave', response_model=RsoResponse)
def leave_rso(rso_id: int, principal: Principal = Depends(get_current_principal), db: Session = Depends(get_db)):
    return run_operation(db, rsos.leave_rso, principal, rso_id)
