"""Upload record endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from dealerhub.api.v1._authz import authorize
from dealerhub.core.dependencies import get_db_session
from dealerhub.models import UploadType
from dealerhub.schemas.uploads import UploadListResponse, UploadResponse
from dealerhub.services.upload_service import UploadService

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("", response_model=UploadListResponse)
def list_uploads(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    file_type: UploadType | None = Query(default=None, alias="type"),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> UploadListResponse:
    user = authorize(authorization=authorization, scopes=["uploads.read"])
    items, total = UploadService(db).list(user.tenant, page, limit, file_type)
    return UploadListResponse(
        items=[UploadResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        limit=limit,
    )


@router.get("/{upload_id}", response_model=UploadResponse)
def get_upload(
    upload_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> UploadResponse:
    user = authorize(authorization=authorization, scopes=["uploads.read"])
    return UploadResponse.model_validate(UploadService(db).get(user.tenant, upload_id))
