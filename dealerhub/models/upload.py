"""Bulk upload bookkeeping model module."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dealerhub.models.base import AuditMixin, Base, CompanyScopedMixin
from dealerhub.models.enums import UploadStatus, UploadType


class Upload(Base, AuditMixin, CompanyScopedMixin):
    __tablename__ = "uploads"
    __table_args__ = (Index("idx_uploads_company_type", "company_id", "file_type"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_type: Mapped[UploadType] = mapped_column(Enum(UploadType, name="upload_type"), nullable=False)
    status: Mapped[UploadStatus] = mapped_column(
        Enum(UploadStatus, name="upload_status"), default=UploadStatus.PROCESSING, nullable=False
    )
    total_records: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    processed_records: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    success_records: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    failed_records: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    error_message: Mapped[str | None] = mapped_column(Text)
    error_details: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON)
