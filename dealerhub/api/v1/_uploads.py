"""Shared response mapping for CSV import endpoints."""

from __future__ import annotations

from dealerhub.models import Upload
from dealerhub.schemas.uploads import ImportResultResponse, RowErrorResponse
from dealerhub.services.csv_import import ImportSummary


def import_result(upload: Upload, summary: ImportSummary) -> ImportResultResponse:
    return ImportResultResponse(
        upload_id=upload.id,
        total_rows=summary.total_rows,
        succeeded=summary.succeeded,
        failed=summary.failed,
        skipped=summary.skipped,
        errors=[RowErrorResponse(**error.as_dict()) for error in summary.errors],
    )
