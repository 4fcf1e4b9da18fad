"""Dashboard endpoint for API v1."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from dealerhub.api.v1._authz import authorize
from dealerhub.core.dependencies import get_db_session
from dealerhub.schemas.dashboard import DashboardResponse
from dealerhub.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> DashboardResponse:
    user = authorize(authorization=authorization, scopes=["dashboard.read"])
    return DashboardResponse(**asdict(DashboardService(db).summary(user.tenant)))
