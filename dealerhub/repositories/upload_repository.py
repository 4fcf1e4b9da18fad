"""Upload record access."""

from __future__ import annotations

from dealerhub.models import Upload, UploadType
from dealerhub.repositories.base import BaseRepository, paginate


class UploadRepository(BaseRepository[Upload]):
    model = Upload

    def get(self, company_id: int, upload_id: int) -> Upload | None:
        return (
            self.session.query(Upload)
            .filter(Upload.company_id == company_id, Upload.id == upload_id)
            .first()
        )

    def list(
        self, company_id: int, page: int, limit: int, file_type: UploadType | None = None
    ) -> tuple[list[Upload], int]:
        query = self.session.query(Upload).filter(Upload.company_id == company_id)
        if file_type is not None:
            query = query.filter(Upload.file_type == file_type)
        return paginate(query.order_by(Upload.created_at.desc(), Upload.id.desc()), page, limit)
