"""Company and user administration schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dealerhub.schemas.common import PageMeta


class CompanyCreateRequest(BaseModel):
    company_name: str = Field(min_length=1, max_length=120)
    company_code: str = Field(min_length=1, max_length=64)


class CompanyUpdateRequest(BaseModel):
    company_name: str | None = Field(default=None, min_length=1, max_length=120)
    company_code: str | None = Field(default=None, min_length=1, max_length=64)


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str = Field(validation_alias=AliasChoices("name", "company_name"))
    company_code: str = Field(validation_alias=AliasChoices("code", "company_code"))
    user_count: int


class CompanyPage(PageMeta):
    data: list[CompanyResponse]


class RegisterUserRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(min_length=3, max_length=255)
    employee_number: str = Field(min_length=1, max_length=64)
    phone_number: str = Field(min_length=1, max_length=32)
    password: str = Field(min_length=8, max_length=256)
    password_confirmation: str = Field(min_length=8, max_length=256)
    company_name: str = Field(min_length=1, max_length=120)
    company_code: str = Field(min_length=1, max_length=64)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("invalid email address")
        return value


class UpdateProfileRequest(BaseModel):
    current_password: str = Field(min_length=1, max_length=256)
    employee_number: str | None = Field(default=None, min_length=1, max_length=64)
    phone_number: str | None = Field(default=None, min_length=1, max_length=32)
    image_url: str | None = Field(default=None, max_length=512)
    password: str | None = Field(default=None, min_length=8, max_length=256)
    password_confirmation: str | None = Field(default=None, max_length=256)


class UserCompany(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company_name: str = Field(validation_alias=AliasChoices("name", "company_name"))
    company_code: str = Field(validation_alias=AliasChoices("code", "company_code"))


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    employee_number: str
    phone_number: str
    image_url: str | None = None
    is_admin: bool
    last_login_at: datetime | None = None
    company: UserCompany


class UserPage(PageMeta):
    data: list[UserResponse]
