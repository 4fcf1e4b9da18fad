"""Contract document schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from dealerhub.schemas.common import PageMeta


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str
    contract_id: int | None = None
    file_size: int
    mime_type: str
    created_at: datetime


class DocumentRenameRequest(BaseModel):
    file_name: str = Field(min_length=1, max_length=255)


class ContractDocumentGroup(BaseModel):
    id: int
    contract_name: str
    resolution_date: datetime | None = None
    documents_count: int
    manager: str
    car_number: str
    documents: list[dict]


class ContractDocumentPage(PageMeta):
    data: list[ContractDocumentGroup]
