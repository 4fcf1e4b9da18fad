"""Company administration endpoints (admin only)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from dealerhub.api.v1._authz import authorize
from dealerhub.core.dependencies import get_db_session
from dealerhub.schemas.common import MessageResponse, page_meta
from dealerhub.schemas.companies import (
    CompanyCreateRequest,
    CompanyPage,
    CompanyResponse,
    CompanyUpdateRequest,
    UserPage,
    UserResponse,
)
from dealerhub.services.company_service import CompanyService
from dealerhub.services.user_service import UserService

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def register_company(
    payload: CompanyCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CompanyResponse:
    authorize(authorization=authorization, scopes=["companies.manage"])
    company = CompanyService(db).register(payload.company_name, payload.company_code)
    return CompanyResponse.model_validate(company)


@router.get("", response_model=CompanyPage)
def list_companies(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100, alias="pageSize"),
    keyword: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CompanyPage:
    authorize(authorization=authorization, scopes=["companies.manage"])
    items, total = CompanyService(db).list(page, page_size, keyword)
    return CompanyPage(
        **page_meta(page, page_size, total).model_dump(),
        data=[CompanyResponse.model_validate(item) for item in items],
    )


@router.get("/users", response_model=UserPage)
def list_company_users(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100, alias="pageSize"),
    search_by: str | None = Query(default=None, alias="searchBy", pattern="^(companyName|name|email)$"),
    keyword: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> UserPage:
    authorize(authorization=authorization, scopes=["users.manage"])
    items, total = UserService(db).list(page, page_size, search_by, keyword)
    return UserPage(
        **page_meta(page, page_size, total).model_dump(),
        data=[UserResponse.model_validate(item) for item in items],
    )


@router.patch("/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: int,
    payload: CompanyUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CompanyResponse:
    authorize(authorization=authorization, scopes=["companies.manage"])
    company = CompanyService(db).update(
        company_id, {"name": payload.company_name, "code": payload.company_code}
    )
    return CompanyResponse.model_validate(company)


@router.delete("/{company_id}", response_model=MessageResponse)
def delete_company(
    company_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> MessageResponse:
    authorize(authorization=authorization, scopes=["companies.manage"])
    CompanyService(db).delete(company_id)
    return MessageResponse(message="Company deleted.")
