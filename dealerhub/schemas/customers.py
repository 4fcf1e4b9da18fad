"""Customer request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from dealerhub.core.labels import AGE_GROUP_LABELS, GENDER_LABELS, REGION_LABELS
from dealerhub.models import AgeGroup, Gender, Region
from dealerhub.schemas.common import PageMeta

_PARSERS = {"gender": GENDER_LABELS, "age_group": AGE_GROUP_LABELS, "region": REGION_LABELS}


class _CustomerFields(BaseModel):
    @field_validator("gender", "age_group", "region", mode="before", check_fields=False)
    @classmethod
    def _parse_label(cls, value, info):
        if value is None or not isinstance(value, str):
            return value
        member = _PARSERS[info.field_name].parse(value)
        if member is None:
            raise ValueError(f"unknown {info.field_name} {value!r}")
        return member

    @field_validator("email", check_fields=False)
    @classmethod
    def _normalize_email(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("invalid email address")
        return value


class CustomerCreateRequest(_CustomerFields):
    name: str = Field(min_length=1, max_length=120)
    gender: Gender
    phone_number: str = Field(min_length=1, max_length=32)
    age_group: AgeGroup | None = None
    region: Region | None = None
    email: str = Field(min_length=3, max_length=255)
    memo: str | None = None


class CustomerUpdateRequest(_CustomerFields):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    gender: Gender | None = None
    phone_number: str | None = Field(default=None, min_length=1, max_length=32)
    age_group: AgeGroup | None = None
    region: Region | None = None
    email: str | None = Field(default=None, min_length=3, max_length=255)
    memo: str | None = None


class CustomerResponse(_CustomerFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    gender: Gender
    phone_number: str
    age_group: AgeGroup | None = None
    region: Region | None = None
    email: str
    memo: str | None = None
    contract_count: int
    created_at: datetime

    @field_serializer("age_group")
    def _age_label(self, value: AgeGroup | None) -> str | None:
        return AGE_GROUP_LABELS.label(value) if value is not None else None

    @field_serializer("region")
    def _region_label(self, value: Region | None) -> str | None:
        return REGION_LABELS.label(value) if value is not None else None


class CustomerPage(PageMeta):
    data: list[CustomerResponse]
