"""Car request/response schemas."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from dealerhub.core.labels import CAR_TYPE_LABELS
from dealerhub.models import CarStatus, CarType
from dealerhub.schemas.common import INT32_MAX, INT64_MAX, PageMeta


class _CarFields(BaseModel):
    @field_validator("type", mode="before", check_fields=False)
    @classmethod
    def _parse_type(cls, value):
        if value is None or isinstance(value, CarType):
            return value
        car_type = CAR_TYPE_LABELS.parse(str(value))
        if car_type is None:
            raise ValueError(f"unknown car type {value!r}")
        return car_type

    @field_validator("manufacturing_year", check_fields=False)
    @classmethod
    def _check_year(cls, value: int | None) -> int | None:
        if value is not None and not 1900 <= value <= datetime.now(timezone.utc).year:
            raise ValueError("manufacturing year is out of range")
        return value


class CarCreateRequest(_CarFields):
    car_number: str = Field(min_length=1, max_length=32)
    manufacturer: str = Field(min_length=1, max_length=64)
    model: str = Field(min_length=1, max_length=64)
    type: CarType
    manufacturing_year: int = Field(le=INT32_MAX)
    mileage: int = Field(ge=0, le=INT32_MAX)
    price: int = Field(ge=0, le=INT64_MAX)
    accident_count: int = Field(default=0, ge=0, le=INT32_MAX)
    explanation: str | None = None
    accident_details: str | None = None


class CarUpdateRequest(_CarFields):
    car_number: str | None = Field(default=None, min_length=1, max_length=32)
    manufacturer: str | None = Field(default=None, min_length=1, max_length=64)
    model: str | None = Field(default=None, min_length=1, max_length=64)
    type: CarType | None = None
    manufacturing_year: int | None = Field(default=None, le=INT32_MAX)
    mileage: int | None = Field(default=None, ge=0, le=INT32_MAX)
    price: int | None = Field(default=None, ge=0, le=INT64_MAX)
    accident_count: int | None = Field(default=None, ge=0, le=INT32_MAX)
    explanation: str | None = None
    accident_details: str | None = None


class CarResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    car_number: str
    manufacturer: str
    model: str
    type: CarType
    manufacturing_year: int
    mileage: int
    price: int
    accident_count: int
    explanation: str | None = None
    accident_details: str | None = None
    status: CarStatus

    @field_validator("type", mode="before")
    @classmethod
    def _label_to_type(cls, value):
        if isinstance(value, str):
            return CAR_TYPE_LABELS.parse(value) or value
        return value

    @field_serializer("type")
    def _type_label(self, value: CarType) -> str:
        return CAR_TYPE_LABELS.label(value)


class CarPage(PageMeta):
    data: list[CarResponse]


class CarModelGroup(BaseModel):
    manufacturer: str
    models: list[str]
