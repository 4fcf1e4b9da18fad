"""Upload record bookkeeping and the shared CSV import entry point."""

from __future__ import annotations

import io
import logging

from dealerhub.auth.tenant_context import TenantContext
from dealerhub.core.exceptions import BadRequestError, NotFoundError, PayloadTooLargeError
from dealerhub.core.logging import LogContext, build_log_event
from dealerhub.models import Upload, UploadStatus, UploadType
from dealerhub.repositories import UploadRepository
from dealerhub.services.base_service import BaseService
from dealerhub.services.csv_import import CarCsvImporter, CsvImportPipeline, CustomerCsvImporter, ImportSummary

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPES = {"text/csv", "application/csv", "application/vnd.ms-excel", "text/plain"}
MAX_STORED_ROW_ERRORS = 200

IMPORTERS: dict[UploadType, type[CsvImportPipeline]] = {
    UploadType.CAR: CarCsvImporter,
    UploadType.CUSTOMER: CustomerCsvImporter,
}


def check_csv_file(file_name: str, content_type: str | None, size: int, max_bytes: int) -> None:
    is_csv_type = content_type is not None and ("csv" in content_type or content_type in CSV_CONTENT_TYPES)
    if not (is_csv_type or file_name.lower().endswith(".csv")):
        raise BadRequestError("Only CSV files can be uploaded.")
    if size > max_bytes:
        raise PayloadTooLargeError(f"CSV file exceeds the {max_bytes} byte limit.")


class UploadService(BaseService):
    def __init__(self, db, settings=None) -> None:
        super().__init__(db, settings)
        self.uploads = UploadRepository(db)

    def get(self, actor: TenantContext, upload_id: int) -> Upload:
        upload = self.uploads.get(actor.company_id, upload_id)
        if upload is None:
            raise NotFoundError("Upload not found.")
        return upload

    def list(
        self, actor: TenantContext, page: int = 1, limit: int = 10, file_type: UploadType | None = None
    ) -> tuple[list[Upload], int]:
        return self.uploads.list(actor.company_id, max(page, 1), min(max(limit, 1), 100), file_type)

    def import_csv(
        self,
        actor: TenantContext,
        file_type: UploadType,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> tuple[Upload, ImportSummary]:
        """Run the import for ``file_type`` and keep its upload record current.

        A fatal stream error marks the record failed and is re-raised.
        """
        check_csv_file(file_name, content_type, len(content), self.settings.CSV_MAX_BYTES)

        with self.transaction():
            upload = self.uploads.add(
                Upload(
                    company_id=actor.company_id,
                    user_id=actor.user_id,
                    file_name=file_name,
                    file_type=file_type,
                    status=UploadStatus.PROCESSING,
                )
            )
        context = LogContext(company_id=actor.company_id, user_id=actor.user_id, upload_id=upload.id)

        importer = IMPORTERS[file_type](
            self.db,
            actor.company_id,
            batch_size=self.settings.CSV_BATCH_SIZE,
            on_batch=lambda summary: self._record_progress(upload, summary),
        )
        try:
            summary = importer.ingest(io.BytesIO(content))
        except Exception as exc:
            self.db.rollback()
            with self.transaction():
                upload.status = UploadStatus.FAILED
                upload.error_message = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
            logger.warning("upload.failed", extra=build_log_event("upload.failed", context))
            raise

        with self.transaction():
            self._record_progress(upload, summary)
            upload.status = UploadStatus.COMPLETED
            upload.error_details = [error.as_dict() for error in summary.errors[:MAX_STORED_ROW_ERRORS]]
            if summary.failed or summary.skipped:
                upload.error_message = (
                    f"{summary.failed} rows failed validation, {summary.skipped} duplicates skipped."
                )
        logger.info(
            "upload.completed",
            extra=build_log_event(
                "upload.completed",
                context,
                total_rows=summary.total_rows,
                succeeded=summary.succeeded,
                failed=summary.failed,
            ),
        )
        return upload, summary

    def _record_progress(self, upload: Upload, summary: ImportSummary) -> None:
        upload.total_records = summary.total_rows
        upload.processed_records = summary.processed
        upload.success_records = summary.succeeded
        upload.failed_records = summary.failed + summary.skipped
        self.db.flush()
