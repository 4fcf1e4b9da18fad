"""Health endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dealerhub.core.config import get_config
from dealerhub.core.dependencies import get_db_session

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db_session)) -> dict:
    cfg = get_config()
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        database = "unavailable"
    return {"status": "ok" if database == "ok" else "degraded", "database": database, "version": cfg.APP_VERSION}
