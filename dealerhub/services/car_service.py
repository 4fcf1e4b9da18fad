"""Car inventory service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from dealerhub.auth.tenant_context import TenantContext
from dealerhub.core.exceptions import ConflictError, NotFoundError
from dealerhub.models import Car, CarStatus, Upload, UploadType
from dealerhub.repositories import CarRepository
from dealerhub.services.base_service import BaseService
from dealerhub.services.csv_import import ImportSummary
from dealerhub.services.upload_service import UploadService

logger = logging.getLogger(__name__)

CAR_PAGE_SIZE = 8
UPDATABLE_FIELDS = (
    "car_number",
    "manufacturer",
    "model",
    "type",
    "manufacturing_year",
    "mileage",
    "price",
    "accident_count",
    "explanation",
    "accident_details",
)


@dataclass(frozen=True)
class CarPage:
    items: list[Car]
    total: int
    page: int
    page_size: int


class CarService(BaseService):
    def __init__(self, db, settings=None) -> None:
        super().__init__(db, settings)
        self.cars = CarRepository(db)

    def get(self, actor: TenantContext, car_id: int) -> Car:
        car = self.cars.get(actor.company_id, car_id)
        if car is None:
            raise NotFoundError("Car not found.")
        return car

    def create(self, actor: TenantContext, **fields: Any) -> Car:
        with self.transaction():
            if self.cars.find_by_number(actor.company_id, fields["car_number"]) is not None:
                raise ConflictError(f"Car number already registered: {fields['car_number']}")
            car = self.cars.add(
                Car(company_id=actor.company_id, status=CarStatus.AVAILABLE, **_pick(fields))
            )
        logger.info("car.created", extra={"event": "car.created", "company_id": actor.company_id, "car_id": car.id})
        return car

    def list(
        self,
        actor: TenantContext,
        page: int = 1,
        page_size: int = CAR_PAGE_SIZE,
        status: CarStatus | None = None,
        search_by: str | None = None,
        keyword: str | None = None,
    ) -> CarPage:
        page = max(page, 1)
        page_size = min(max(page_size, 1), CAR_PAGE_SIZE)
        items, total = self.cars.list(actor.company_id, page, page_size, status, search_by, keyword)
        return CarPage(items=items, total=total, page=page, page_size=page_size)

    def update(self, actor: TenantContext, car_id: int, changes: dict[str, Any]) -> Car:
        """Status is derived from contracts and cannot be changed here."""
        with self.transaction():
            car = self.get(actor, car_id)
            new_number = changes.get("car_number")
            if new_number and new_number != car.car_number:
                if self.cars.find_by_number(actor.company_id, new_number) is not None:
                    raise ConflictError(f"Car number already registered: {new_number}")
            for key, value in _pick(changes).items():
                if value is not None or key in ("explanation", "accident_details"):
                    setattr(car, key, value)
            self.db.flush()
        return car

    def delete(self, actor: TenantContext, car_id: int) -> None:
        with self.transaction():
            car = self.get(actor, car_id)
            if self.cars.has_contracts(car.id):
                raise ConflictError("Car has contracts and cannot be deleted.")
            self.cars.delete(car)
        logger.info("car.deleted", extra={"event": "car.deleted", "company_id": actor.company_id, "car_id": car_id})

    def models_catalog(self, actor: TenantContext) -> list[dict[str, Any]]:
        """Distinct models grouped by manufacturer."""
        grouped: dict[str, list[str]] = {}
        for manufacturer, model in self.cars.models_catalog(actor.company_id):
            grouped.setdefault(manufacturer, []).append(model)
        return [{"manufacturer": name, "models": models} for name, models in grouped.items()]

    def import_csv(
        self, actor: TenantContext, file_name: str, content: bytes, content_type: str | None = None
    ) -> tuple[Upload, ImportSummary]:
        return UploadService(self.db, self.settings).import_csv(
            actor, UploadType.CAR, file_name, content, content_type
        )


def _pick(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: fields[key] for key in UPDATABLE_FIELDS if key in fields}
