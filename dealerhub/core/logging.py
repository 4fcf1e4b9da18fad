"""Structured logging helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LogContext:
    """Normalized context fields expected in structured logs."""

    company_id: int | None = None
    user_id: int | None = None
    upload_id: int | None = None
    request_path: str | None = None


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """Build a normalized structured log payload usable as ``extra=``."""
    payload: dict[str, Any] = {
        "event": event,
        "company_id": context.company_id,
        "user_id": context.user_id,
        "upload_id": context.upload_id,
        "request_path": context.request_path,
    }
    payload.update(fields)
    return payload
