"""Upload record and import summary schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from dealerhub.models import UploadStatus, UploadType


class RowErrorResponse(BaseModel):
    row: int
    errors: list[str]


class UploadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str
    file_type: UploadType
    status: UploadStatus
    total_records: int
    processed_records: int
    success_records: int
    failed_records: int
    error_message: str | None = None
    error_details: list[dict[str, Any]] | None = None
    created_at: datetime


class UploadListResponse(BaseModel):
    items: list[UploadResponse]
    total: int
    page: int
    limit: int


class ImportResultResponse(BaseModel):
    upload_id: int
    total_rows: int
    succeeded: int
    failed: int
    skipped: int
    errors: list[RowErrorResponse]
