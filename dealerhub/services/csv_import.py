"""Streaming CSV ingestion for bulk car and customer uploads.

The stream is parsed row by row. Each row is shape-validated, checked for
duplicate unique keys within the file, and buffered; a full buffer is checked
against persisted rows, bulk-inserted with database-level duplicate skipping,
and committed. Row problems never abort the run; only an unreadable stream
raises ``CSVParseError``.
"""

from __future__ import annotations

import csv
import io
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from dealerhub.core.exceptions import CSVParseError
from dealerhub.models import CarStatus
from dealerhub.models.base import utcnow
from dealerhub.repositories import CarRepository, CustomerRepository
from dealerhub.schemas.csv_rows import CarCsvRow, CustomerCsvRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowError:
    row: int
    errors: list[str]

    def as_dict(self) -> dict[str, Any]:
        return {"row": self.row, "errors": list(self.errors)}


@dataclass
class ImportSummary:
    """Outcome of one ingestion run.

    ``skipped`` counts rows that passed validation but were dropped by the
    database as duplicates inserted concurrently by another writer.
    """

    total_rows: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[RowError] = field(default_factory=list)

    def add_failure(self, row: int, errors: list[str]) -> None:
        self.failed += 1
        self.errors.append(RowError(row=row, errors=errors))

    @property
    def processed(self) -> int:
        return self.succeeded + self.failed + self.skipped


def _format_validation_errors(exc: PydanticValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "row"
        messages.append(f"{location}: {error['msg']}")
    return messages


class CsvImportPipeline(ABC):
    """Template for one CSV import variant."""

    row_schema: type[BaseModel]
    required_columns: tuple[str, ...] = ()
    header_aliases: dict[str, str] = {}

    def __init__(
        self,
        db: Session,
        company_id: int,
        batch_size: int = 1000,
        on_batch: Callable[[ImportSummary], None] | None = None,
    ) -> None:
        self.db = db
        self.company_id = company_id
        self.batch_size = batch_size
        self.on_batch = on_batch

    @abstractmethod
    def unique_keys(self, record: BaseModel) -> dict[str, str]:
        """Return ``{key_name: value}`` for every tenant-unique field of ``record``."""

    @abstractmethod
    def persisted_keys(self, records: list[BaseModel]) -> dict[str, set[str]]:
        """Return the values per key name already stored for this tenant."""

    @abstractmethod
    def to_row(self, record: BaseModel) -> dict[str, Any]:
        """Map a validated record to a column dict for bulk insert."""

    @abstractmethod
    def insert_rows(self, rows: list[dict[str, Any]]) -> int:
        """Insert rows skipping duplicates; return how many were inserted."""

    def _canonical_header(self, name: str | None) -> str | None:
        if name is None:
            return None
        name = name.strip()
        return self.header_aliases.get(name, name)

    def ingest(self, stream: BinaryIO) -> ImportSummary:
        summary = ImportSummary()
        text = io.TextIOWrapper(stream, encoding="utf-8-sig", newline="")
        reader = csv.DictReader(text, strict=True)
        try:
            if reader.fieldnames is None:
                raise CSVParseError("CSV file is empty.")
            reader.fieldnames = [self._canonical_header(name) for name in reader.fieldnames]
            missing = [column for column in self.required_columns if column not in reader.fieldnames]
            if missing:
                raise CSVParseError(f"CSV header is missing columns: {', '.join(missing)}")

            seen: dict[str, set[str]] = {}
            pending: list[tuple[int, BaseModel]] = []
            for row_number, raw in enumerate(reader, start=1):
                summary.total_rows += 1
                record = self._validate(row_number, raw, summary)
                if record is None:
                    continue
                duplicates = []
                keys = self.unique_keys(record)
                for key, value in keys.items():
                    if value in seen.setdefault(key, set()):
                        duplicates.append(f"{key}: duplicate value {value!r} earlier in file")
                if duplicates:
                    summary.add_failure(row_number, duplicates)
                    continue
                for key, value in keys.items():
                    seen[key].add(value)
                pending.append((row_number, record))
                if len(pending) >= self.batch_size:
                    self._flush(pending, summary)
                    pending = []
            self._flush(pending, summary)
        except csv.Error as exc:
            raise CSVParseError(f"Malformed CSV near line {reader.line_num}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise CSVParseError("CSV file must be UTF-8 encoded.") from exc
        finally:
            text.detach()

        summary.errors.sort(key=lambda error: error.row)
        logger.info(
            "csv_import.completed",
            extra={
                "event": "csv_import.completed",
                "company_id": self.company_id,
                "total_rows": summary.total_rows,
                "succeeded": summary.succeeded,
                "failed": summary.failed,
            },
        )
        return summary

    def _validate(self, row_number: int, raw: dict[str | None, Any], summary: ImportSummary) -> BaseModel | None:
        if raw.get(None):
            summary.add_failure(row_number, ["row: more values than header columns"])
            return None
        try:
            return self.row_schema.model_validate({key: value for key, value in raw.items() if key is not None})
        except PydanticValidationError as exc:
            summary.add_failure(row_number, _format_validation_errors(exc))
            return None

    def _flush(self, pending: list[tuple[int, BaseModel]], summary: ImportSummary) -> None:
        if not pending:
            return
        taken = self.persisted_keys([record for _, record in pending])
        accepted = []
        for row_number, record in pending:
            conflicts = [
                f"{key}: {value!r} already exists"
                for key, value in self.unique_keys(record).items()
                if value in taken.get(key, set())
            ]
            if conflicts:
                summary.add_failure(row_number, conflicts)
            else:
                accepted.append(self.to_row(record))

        try:
            inserted = self.insert_rows(accepted)
            summary.succeeded += inserted
            summary.skipped += len(accepted) - inserted
            if self.on_batch is not None:
                self.on_batch(summary)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug(
            "csv_import.batch_flushed",
            extra={"event": "csv_import.batch_flushed", "company_id": self.company_id, "succeeded": inserted},
        )


class CarCsvImporter(CsvImportPipeline):
    row_schema = CarCsvRow
    required_columns = ("carNumber", "manufacturer", "model", "type", "manufacturingYear", "mileage", "price")

    def __init__(self, db: Session, company_id: int, **kwargs: Any) -> None:
        super().__init__(db, company_id, **kwargs)
        self.cars = CarRepository(db)

    def unique_keys(self, record: CarCsvRow) -> dict[str, str]:
        return {"carNumber": record.car_number}

    def persisted_keys(self, records: list[CarCsvRow]) -> dict[str, set[str]]:
        return {"carNumber": self.cars.existing_numbers(self.company_id, (r.car_number for r in records))}

    def to_row(self, record: CarCsvRow) -> dict[str, Any]:
        now = utcnow()
        return {
            "company_id": self.company_id,
            "car_number": record.car_number,
            "manufacturer": record.manufacturer,
            "model": record.model,
            "type": record.type,
            "manufacturing_year": record.manufacturing_year,
            "mileage": record.mileage,
            "price": record.price,
            "accident_count": record.accident_count,
            "explanation": record.explanation,
            "accident_details": record.accident_details,
            "status": CarStatus.AVAILABLE,
            "created_at": now,
            "updated_at": now,
        }

    def insert_rows(self, rows: list[dict[str, Any]]) -> int:
        return self.cars.bulk_insert(rows)


class CustomerCsvImporter(CsvImportPipeline):
    row_schema = CustomerCsvRow
    required_columns = ("name", "gender", "phoneNumber", "email")
    header_aliases = {
        "고객명": "name",
        "성별": "gender",
        "연락처": "phoneNumber",
        "연령대": "ageGroup",
        "지역": "region",
        "이메일": "email",
        "메모": "memo",
    }

    def __init__(self, db: Session, company_id: int, **kwargs: Any) -> None:
        super().__init__(db, company_id, **kwargs)
        self.customers = CustomerRepository(db)

    def unique_keys(self, record: CustomerCsvRow) -> dict[str, str]:
        return {"email": record.email, "phoneNumber": record.phone_number}

    def persisted_keys(self, records: list[CustomerCsvRow]) -> dict[str, set[str]]:
        emails, phones = self.customers.existing_keys(
            self.company_id,
            (record.email for record in records),
            (record.phone_number for record in records),
        )
        return {"email": emails, "phoneNumber": phones}

    def to_row(self, record: CustomerCsvRow) -> dict[str, Any]:
        now = utcnow()
        return {
            "company_id": self.company_id,
            "name": record.name,
            "gender": record.gender,
            "phone_number": record.phone_number,
            "age_group": record.age_group,
            "region": record.region,
            "email": record.email,
            "memo": record.memo,
            "contract_count": 0,
            "created_at": now,
            "updated_at": now,
        }

    def insert_rows(self, rows: list[dict[str, Any]]) -> int:
        return self.customers.bulk_insert(rows)
