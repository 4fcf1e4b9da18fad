"""Common schema module."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel

from dealerhub.core.config import get_config

# Column limits: Integer and BigInteger.
INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1


class MessageResponse(BaseModel):
    message: str


class PageMeta(BaseModel):
    current_page: int
    total_pages: int
    total_item_count: int


class OptionItem(BaseModel):
    id: int
    data: str


def page_meta(page: int, page_size: int, total: int) -> PageMeta:
    total_pages = (total + page_size - 1) // page_size if page_size else 0
    return PageMeta(current_page=page, total_pages=total_pages, total_item_count=total)


def localize(value: datetime | None) -> datetime | None:
    """Attach the configured default offset to naive client datetimes."""
    if value is None or value.tzinfo is not None:
        return value
    offset = timezone(timedelta(hours=get_config().DEFAULT_UTC_OFFSET_HOURS))
    return value.replace(tzinfo=offset)
