"""Contract endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.orm import Session

from dealerhub.api.v1._authz import authorize
from dealerhub.core.dependencies import get_db_session
from dealerhub.schemas.common import OptionItem, page_meta
from dealerhub.schemas.contracts import (
    ContractColumn,
    ContractCreateRequest,
    ContractDeleteResponse,
    ContractPage,
    ContractResponse,
    ContractUpdateRequest,
)
from dealerhub.services.contract_service import ContractService

router = APIRouter(prefix="/contracts", tags=["contracts"])

SEARCH_BY_PATTERN = "^(customerName|userName|carNumber|carModel|all)$"


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
def create_contract(
    payload: ContractCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    user = authorize(authorization=authorization, scopes=["contracts.write"])
    contract = ContractService(db).create(
        user.tenant,
        car_id=payload.car_id,
        customer_id=payload.customer_id,
        user_id=payload.user_id,
        contract_price=payload.contract_price,
        meetings=[meeting.model_dump() for meeting in payload.meetings],
    )
    return ContractResponse.model_validate(contract)


@router.get("", response_model=ContractPage)
def list_contracts(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100, alias="pageSize"),
    search_by: str | None = Query(default=None, alias="searchBy", pattern=SEARCH_BY_PATTERN),
    keyword: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ContractPage:
    user = authorize(authorization=authorization, scopes=["contracts.read"])
    result = ContractService(db).list(user.tenant, page, page_size, search_by, keyword)
    return ContractPage(
        **page_meta(result.page, result.page_size, result.total).model_dump(),
        data=[ContractResponse.model_validate(item) for item in result.items],
    )


@router.get("/board", response_model=dict[str, ContractColumn])
def contract_board(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100, alias="pageSize"),
    search_by: str | None = Query(default=None, alias="searchBy", pattern=SEARCH_BY_PATTERN),
    keyword: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> dict[str, ContractColumn]:
    user = authorize(authorization=authorization, scopes=["contracts.read"])
    board = ContractService(db).board(user.tenant, page, page_size, search_by, keyword)
    return {
        contract_status.value: ContractColumn(
            total_item_count=column.total,
            data=[ContractResponse.model_validate(item) for item in column.items],
        )
        for contract_status, column in board.items()
    }


@router.get("/cars", response_model=list[OptionItem])
def car_options(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[OptionItem]:
    user = authorize(authorization=authorization, scopes=["contracts.read"])
    return [OptionItem(id=id_, data=label) for id_, label in ContractService(db).car_options(user.tenant)]


@router.get("/customers", response_model=list[OptionItem])
def customer_options(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[OptionItem]:
    user = authorize(authorization=authorization, scopes=["contracts.read"])
    return [OptionItem(id=id_, data=label) for id_, label in ContractService(db).customer_options(user.tenant)]


@router.get("/users", response_model=list[OptionItem])
def user_options(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[OptionItem]:
    user = authorize(authorization=authorization, scopes=["contracts.read"])
    return [OptionItem(id=id_, data=label) for id_, label in ContractService(db).user_options(user.tenant)]


@router.get("/{contract_id}", response_model=ContractResponse)
def get_contract(
    contract_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    user = authorize(authorization=authorization, scopes=["contracts.read"])
    return ContractResponse.model_validate(ContractService(db).get(user.tenant, contract_id))


@router.patch("/{contract_id}", response_model=ContractResponse)
def update_contract(
    contract_id: int,
    payload: ContractUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ContractResponse:
    user = authorize(authorization=authorization, scopes=["contracts.write"])
    contract = ContractService(db).update(user.tenant, contract_id, payload.changes())
    return ContractResponse.model_validate(contract)


@router.delete("/{contract_id}", response_model=ContractDeleteResponse)
def delete_contract(
    contract_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ContractDeleteResponse:
    user = authorize(authorization=authorization, scopes=["contracts.write"])
    snapshot = ContractService(db).delete(user.tenant, contract_id)
    return ContractDeleteResponse(
        message="Contract deleted.",
        total_contract_count=snapshot.total_contract_count,
        revenue_by_car_type=snapshot.revenue_by_car_type,
    )
