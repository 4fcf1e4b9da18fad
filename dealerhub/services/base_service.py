"""Shared service base with session lifecycle behavior."""

from __future__ import annotations

from contextlib import AbstractContextManager

from sqlalchemy.orm import Session

from dealerhub.core.config import Config, get_config
from dealerhub.database.db import unit_of_work


class BaseService:
    """Base class for services that operate on an injected SQLAlchemy session."""

    def __init__(self, db: Session, settings: Config | None = None) -> None:
        self.db = db
        self.settings = settings or get_config()

    def transaction(self) -> AbstractContextManager[Session]:
        """Open the unit of work for one orchestrated operation."""
        return unit_of_work(self.db)
