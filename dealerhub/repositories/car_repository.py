"""Car data access."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import select

from dealerhub.models import Car, CarStatus, Contract
from dealerhub.repositories.base import BaseRepository, insert_skip_duplicates, paginate

CAR_SEARCH_FIELDS = {
    "carNumber": Car.car_number,
    "model": Car.model,
}


class CarRepository(BaseRepository[Car]):
    model = Car

    def get(self, company_id: int, car_id: int) -> Car | None:
        return (
            self.session.query(Car)
            .filter(Car.company_id == company_id, Car.id == car_id)
            .first()
        )

    def find_by_number(self, company_id: int, car_number: str) -> Car | None:
        return (
            self.session.query(Car)
            .filter(Car.company_id == company_id, Car.car_number == car_number)
            .first()
        )

    def existing_numbers(self, company_id: int, car_numbers: Iterable[str]) -> set[str]:
        numbers = list(set(car_numbers))
        if not numbers:
            return set()
        rows = self.session.execute(
            select(Car.car_number).where(Car.company_id == company_id, Car.car_number.in_(numbers))
        )
        return {row[0] for row in rows}

    def list(
        self,
        company_id: int,
        page: int,
        page_size: int,
        status: CarStatus | None = None,
        search_by: str | None = None,
        keyword: str | None = None,
    ) -> tuple[list[Car], int]:
        query = self.session.query(Car).filter(Car.company_id == company_id)
        if status is not None:
            query = query.filter(Car.status == status)
        if keyword:
            column = CAR_SEARCH_FIELDS.get(search_by or "", None)
            if column is not None:
                query = query.filter(column.icontains(keyword, autoescape=True))
            else:
                query = query.filter(
                    Car.car_number.icontains(keyword, autoescape=True)
                    | Car.model.icontains(keyword, autoescape=True)
                )
        return paginate(query.order_by(Car.id.asc()), page, page_size)

    def list_available(self, company_id: int) -> list[Car]:
        return (
            self.session.query(Car)
            .filter(Car.company_id == company_id, Car.status == CarStatus.AVAILABLE)
            .order_by(Car.id.asc())
            .all()
        )

    def models_catalog(self, company_id: int) -> list[tuple[str, str]]:
        rows = self.session.execute(
            select(Car.manufacturer, Car.model)
            .where(Car.company_id == company_id)
            .distinct()
            .order_by(Car.manufacturer, Car.model)
        )
        return [(manufacturer, model) for manufacturer, model in rows]

    def has_contracts(self, car_id: int) -> bool:
        return self.session.query(Contract.id).filter(Contract.car_id == car_id).first() is not None

    def bulk_insert(self, rows: list[dict[str, Any]]) -> int:
        return insert_skip_duplicates(self.session, Car.__table__, rows)
