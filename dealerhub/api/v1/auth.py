"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dealerhub.core.dependencies import get_db_session
from dealerhub.schemas.auth import LoginRequest, LoginResponse, RefreshRequest, TokenResponse
from dealerhub.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db_session)) -> LoginResponse:
    user, tokens = AuthService(db).login(payload.email.strip().lower(), payload.password)
    return LoginResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        user_id=user.id,
        name=user.name,
        email=user.email,
        is_admin=user.is_admin,
        company_code=user.company.code,
    )


@router.post("/refresh", response_model=TokenResponse)
def refresh(payload: RefreshRequest, db: Session = Depends(get_db_session)) -> TokenResponse:
    tokens = AuthService(db).refresh(payload.refresh_token)
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
    )
