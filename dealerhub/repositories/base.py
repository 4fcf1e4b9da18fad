"""Shared repository plumbing."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Query, Session

from dealerhub.core.exceptions import DatabaseError

T = TypeVar("T")

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseRepository(Generic[T]):
    """Holds the injected session; subclasses add entity queries."""

    model: type[T]

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: T) -> T:
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete(self, entity: T) -> None:
        self.session.delete(entity)
        self.session.flush()


def paginate(query: Query, page: int, page_size: int) -> tuple[list[Any], int]:
    """Return one page of ``query`` plus the unpaged total."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return items, total


def insert_skip_duplicates(session: Session, table: Table, rows: list[dict[str, Any]]) -> int:
    """Bulk insert ``rows`` ignoring unique violations; return inserted count."""
    if not rows:
        return 0
    dialect = session.get_bind().dialect.name
    insert = _DIALECT_INSERTS.get(dialect)
    if insert is None:
        raise DatabaseError(f"Bulk insert is not supported on dialect {dialect!r}.")
    stmt = insert(table).values(rows).on_conflict_do_nothing().returning(table.c.id)
    return len(session.execute(stmt).all())
