"""Customer endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Header, Query, UploadFile, status
from sqlalchemy.orm import Session

from dealerhub.api.v1._authz import authorize
from dealerhub.api.v1._uploads import import_result
from dealerhub.core.dependencies import get_db_session
from dealerhub.schemas.common import MessageResponse, page_meta
from dealerhub.schemas.customers import (
    CustomerCreateRequest,
    CustomerPage,
    CustomerResponse,
    CustomerUpdateRequest,
)
from dealerhub.schemas.uploads import ImportResultResponse
from dealerhub.services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CustomerResponse:
    user = authorize(authorization=authorization, scopes=["customers.write"])
    customer = CustomerService(db).create(user.tenant, **payload.model_dump())
    return CustomerResponse.model_validate(customer)


@router.get("", response_model=CustomerPage)
def list_customers(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100, alias="pageSize"),
    keyword: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CustomerPage:
    user = authorize(authorization=authorization, scopes=["customers.read"])
    items, total = CustomerService(db).list(user.tenant, page, page_size, keyword)
    return CustomerPage(
        **page_meta(page, page_size, total).model_dump(),
        data=[CustomerResponse.model_validate(item) for item in items],
    )


@router.post("/upload", response_model=ImportResultResponse)
def upload_customers(
    file: UploadFile = File(...),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ImportResultResponse:
    user = authorize(authorization=authorization, scopes=["customers.write"])
    content = file.file.read()
    upload, summary = CustomerService(db).import_csv(
        user.tenant, file.filename or "customers.csv", content, file.content_type
    )
    return import_result(upload, summary)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CustomerResponse:
    user = authorize(authorization=authorization, scopes=["customers.read"])
    return CustomerResponse.model_validate(CustomerService(db).get(user.tenant, customer_id))


@router.patch("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    payload: CustomerUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CustomerResponse:
    user = authorize(authorization=authorization, scopes=["customers.write"])
    customer = CustomerService(db).update(user.tenant, customer_id, payload.model_dump(exclude_unset=True))
    return CustomerResponse.model_validate(customer)


@router.delete("/{customer_id}", response_model=MessageResponse)
def delete_customer(
    customer_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> MessageResponse:
    user = authorize(authorization=authorization, scopes=["customers.write"])
    CustomerService(db).delete(user.tenant, customer_id)
    return MessageResponse(message="Customer deleted.")
