"""Contract request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dealerhub.models import ContractStatus
from dealerhub.schemas.common import INT64_MAX, PageMeta, localize


class MeetingInput(BaseModel):
    date: datetime
    alarms: list[datetime] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def _localize_date(cls, value: datetime) -> datetime:
        return localize(value)

    @field_validator("alarms")
    @classmethod
    def _localize_alarms(cls, value: list[datetime]) -> list[datetime]:
        return [localize(alarm) for alarm in value]


class DocumentReference(BaseModel):
    id: int = Field(ge=1)
    file_name: str | None = Field(default=None, min_length=1, max_length=255)


class ContractCreateRequest(BaseModel):
    car_id: int = Field(ge=1)
    customer_id: int = Field(ge=1)
    user_id: int | None = Field(default=None, ge=1)
    contract_price: int | None = Field(default=None, ge=0, le=INT64_MAX)
    meetings: list[MeetingInput] = Field(default_factory=list)


class ContractUpdateRequest(BaseModel):
    """Partial update; status accepts loose spellings and is parsed by the service."""

    status: str | None = Field(default=None, min_length=1, max_length=64)
    contract_price: int | None = Field(default=None, ge=0, le=INT64_MAX)
    resolution_date: datetime | None = None
    customer_id: int | None = Field(default=None, ge=1)
    car_id: int | None = Field(default=None, ge=1)
    meetings: list[MeetingInput] | None = None
    contract_documents: list[int | DocumentReference] | None = None

    @field_validator("resolution_date")
    @classmethod
    def _localize_resolution(cls, value: datetime | None) -> datetime | None:
        return localize(value)

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        if self.contract_documents is not None:
            data["contract_documents"] = [
                reference if isinstance(reference, int) else reference.model_dump()
                for reference in self.contract_documents
            ]
        return data


class MeetingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    alarms: list[datetime]

    @field_validator("alarms", mode="before")
    @classmethod
    def _alarm_times(cls, value):
        return [alarm if isinstance(alarm, datetime) else alarm.time for alarm in value]


class NamedRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CarRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    model: str
    car_number: str


class DocumentRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str


class ContractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: ContractStatus
    contract_price: int
    contract_date: datetime
    resolution_date: datetime | None = None
    meetings: list[MeetingResponse]
    user: NamedRef
    customer: NamedRef
    car: CarRef
    contract_documents: list[DocumentRef] = Field(
        validation_alias=AliasChoices("documents", "contract_documents")
    )


class ContractPage(PageMeta):
    data: list[ContractResponse]


class ContractColumn(BaseModel):
    total_item_count: int
    data: list[ContractResponse]


class ContractDeleteResponse(BaseModel):
    message: str
    total_contract_count: int
    revenue_by_car_type: dict[str, int]
