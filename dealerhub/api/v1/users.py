"""User registration and profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.orm import Session

from dealerhub.api.v1._authz import authorize
from dealerhub.core.dependencies import get_db_session
from dealerhub.schemas.common import MessageResponse
from dealerhub.schemas.companies import RegisterUserRequest, UpdateProfileRequest, UserResponse
from dealerhub.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(payload: RegisterUserRequest, db: Session = Depends(get_db_session)) -> UserResponse:
    user = UserService(db).register(**payload.model_dump())
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
def get_me(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> UserResponse:
    current = authorize(authorization=authorization, scopes=[])
    return UserResponse.model_validate(UserService(db).get(current.user_id))


@router.patch("/me", response_model=UserResponse)
def update_me(
    payload: UpdateProfileRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> UserResponse:
    current = authorize(authorization=authorization, scopes=["profile.write"])
    user = UserService(db).update_profile(current.user_id, **payload.model_dump())
    return UserResponse.model_validate(user)


@router.delete("/me", response_model=MessageResponse)
def delete_me(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> MessageResponse:
    current = authorize(authorization=authorization, scopes=["profile.write"])
    UserService(db).delete(current.user_id)
    return MessageResponse(message="User deleted.")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> MessageResponse:
    authorize(authorization=authorization, scopes=["users.manage"])
    UserService(db).delete(user_id)
    return MessageResponse(message="User deleted.")
