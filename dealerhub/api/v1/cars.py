"""Car inventory endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Header, Query, UploadFile, status
from sqlalchemy.orm import Session

from dealerhub.api.v1._authz import authorize
from dealerhub.api.v1._uploads import import_result
from dealerhub.core.dependencies import get_db_session
from dealerhub.models import CarStatus
from dealerhub.schemas.cars import CarCreateRequest, CarModelGroup, CarPage, CarResponse, CarUpdateRequest
from dealerhub.schemas.common import MessageResponse, page_meta
from dealerhub.schemas.uploads import ImportResultResponse
from dealerhub.services.car_service import CAR_PAGE_SIZE, CarService

router = APIRouter(prefix="/cars", tags=["cars"])


@router.post("", response_model=CarResponse, status_code=status.HTTP_201_CREATED)
def create_car(
    payload: CarCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CarResponse:
    user = authorize(authorization=authorization, scopes=["cars.write"])
    car = CarService(db).create(user.tenant, **payload.model_dump())
    return CarResponse.model_validate(car)


@router.get("", response_model=CarPage)
def list_cars(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=CAR_PAGE_SIZE, ge=1, le=CAR_PAGE_SIZE, alias="pageSize"),
    car_status: CarStatus | None = Query(default=None, alias="status"),
    search_by: str | None = Query(default=None, alias="searchBy", pattern="^(carNumber|model)$"),
    keyword: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CarPage:
    user = authorize(authorization=authorization, scopes=["cars.read"])
    result = CarService(db).list(user.tenant, page, page_size, car_status, search_by, keyword)
    return CarPage(
        **page_meta(result.page, result.page_size, result.total).model_dump(),
        data=[CarResponse.model_validate(car) for car in result.items],
    )


@router.get("/models", response_model=list[CarModelGroup])
def list_car_models(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[CarModelGroup]:
    user = authorize(authorization=authorization, scopes=["cars.read"])
    return [CarModelGroup(**group) for group in CarService(db).models_catalog(user.tenant)]


@router.post("/upload", response_model=ImportResultResponse)
def upload_cars(
    file: UploadFile = File(...),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ImportResultResponse:
    user = authorize(authorization=authorization, scopes=["cars.write"])
    content = file.file.read()
    upload, summary = CarService(db).import_csv(
        user.tenant, file.filename or "cars.csv", content, file.content_type
    )
    return import_result(upload, summary)


@router.get("/{car_id}", response_model=CarResponse)
def get_car(
    car_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CarResponse:
    user = authorize(authorization=authorization, scopes=["cars.read"])
    return CarResponse.model_validate(CarService(db).get(user.tenant, car_id))


@router.patch("/{car_id}", response_model=CarResponse)
def update_car(
    car_id: int,
    payload: CarUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> CarResponse:
    user = authorize(authorization=authorization, scopes=["cars.write"])
    car = CarService(db).update(user.tenant, car_id, payload.model_dump(exclude_unset=True))
    return CarResponse.model_validate(car)


@router.delete("/{car_id}", response_model=MessageResponse)
def delete_car(
    car_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> MessageResponse:
    user = authorize(authorization=authorization, scopes=["cars.write"])
    CarService(db).delete(user.tenant, car_id)
    return MessageResponse(message="Car deleted.")
