"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from dealerhub.core.config import get_config
from dealerhub.core.logging_config import configure_logging
from dealerhub.database.db import get_active_database_url, verify_database_connection

logger = logging.getLogger(__name__)


def prepare_document_storage(directory: str) -> Path:
    """Create the contract document root and make sure it accepts writes."""
    root = Path(directory)
    try:
        root.mkdir(parents=True, exist_ok=True)
        marker = root / ".write-check"
        marker.touch()
        marker.unlink()
    except OSError as exc:
        raise RuntimeError(f"Document storage directory {root} is not writable.") from exc
    return root


def validate_startup_config() -> None:
    """Fail-fast config, connectivity and document storage checks."""
    config = get_config()
    database_ok = verify_database_connection()
    active_database_url = get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )
    if config.is_production and active_database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    storage_root = prepare_document_storage(config.DOCUMENT_STORAGE_DIR)

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": active_database_url.split("://", 1)[0],
            "document_storage_dir": str(storage_root),
            "csv_batch_size": config.CSV_BATCH_SIZE,
            "strict_transitions": config.CONTRACT_STRICT_TRANSITIONS,
        },
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()
