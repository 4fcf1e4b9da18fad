"""Row schemas for CSV bulk imports.

Field aliases are the CSV column names; values arrive as raw strings and are
coerced here, so a row either validates completely or is rejected with every
violated constraint.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dealerhub.core.labels import AGE_GROUP_LABELS, CAR_TYPE_LABELS, GENDER_LABELS, REGION_LABELS
from dealerhub.models import AgeGroup, CarType, Gender, Region
from dealerhub.schemas.common import INT32_MAX, INT64_MAX

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _coerce_number(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    cleaned = value.replace(",", "").strip()
    if not cleaned:
        return None
    try:
        number = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"{value!r} is not a number") from exc
    if not number.is_finite():
        raise ValueError(f"{value!r} is not a number")
    if number.adjusted() > 18:
        raise ValueError(f"{value!r} is out of range")
    return int(number) if number == number.to_integral_value() else number


class CarCsvRow(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    car_number: str = Field(alias="carNumber", min_length=1, max_length=32)
    manufacturer: str = Field(min_length=1, max_length=64)
    model: str = Field(min_length=1, max_length=64)
    type: CarType
    manufacturing_year: int = Field(alias="manufacturingYear", le=INT32_MAX)
    mileage: int = Field(ge=0, le=INT32_MAX)
    price: int = Field(ge=0, le=INT64_MAX)
    accident_count: int = Field(default=0, alias="accidentCount", ge=0, le=INT32_MAX)
    explanation: str | None = None
    accident_details: str | None = Field(default=None, alias="accidentDetails")

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> CarType:
        car_type = CAR_TYPE_LABELS.parse(value) if isinstance(value, str) else None
        if car_type is None:
            raise ValueError(f"unknown car type label {value!r}")
        return car_type

    @field_validator("manufacturing_year", "mileage", "price", mode="before")
    @classmethod
    def _parse_number(cls, value: Any) -> Any:
        return _coerce_number(value)

    @field_validator("accident_count", mode="before")
    @classmethod
    def _default_accidents(cls, value: Any) -> Any:
        value = _coerce_number(value)
        return 0 if value is None else value

    @field_validator("manufacturing_year")
    @classmethod
    def _check_year(cls, value: int) -> int:
        current_year = datetime.now(timezone.utc).year
        if not 1900 <= value <= current_year:
            raise ValueError(f"must be between 1900 and {current_year}")
        return value

    @field_validator("explanation", "accident_details", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _blank_to_none(value)


class CustomerCsvRow(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(min_length=1, max_length=120)
    gender: Gender
    phone_number: str = Field(alias="phoneNumber", min_length=1, max_length=32)
    age_group: AgeGroup | None = Field(default=None, alias="ageGroup")
    region: Region | None = None
    email: str = Field(min_length=3, max_length=255)
    memo: str | None = None

    @field_validator("gender", mode="before")
    @classmethod
    def _parse_gender(cls, value: Any) -> Gender:
        gender = GENDER_LABELS.parse(value) if isinstance(value, str) else None
        if gender is None:
            raise ValueError(f"unknown gender {value!r}")
        return gender

    @field_validator("age_group", mode="before")
    @classmethod
    def _parse_age_group(cls, value: Any) -> AgeGroup | None:
        value = _blank_to_none(value)
        if value is None:
            return None
        age_group = AGE_GROUP_LABELS.parse(value)
        if age_group is None:
            raise ValueError(f"unknown age group {value!r}")
        return age_group

    @field_validator("region", mode="before")
    @classmethod
    def _parse_region(cls, value: Any) -> Region | None:
        value = _blank_to_none(value)
        if value is None:
            return None
        region = REGION_LABELS.parse(value)
        if region is None:
            raise ValueError(f"unknown region {value!r}")
        return region

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("invalid email address")
        return value.lower()

    @field_validator("memo", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _blank_to_none(value)
