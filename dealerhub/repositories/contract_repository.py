"""Contract data access, including the aggregate queries behind the refresher and dashboard."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import joinedload, selectinload

from dealerhub.models import Car, CarType, Contract, ContractStatus, Customer, Meeting, MeetingAlarm, User
from dealerhub.repositories.base import BaseRepository, paginate

CONTRACT_SEARCH_FIELDS = ("customerName", "userName", "carNumber", "carModel")


def _search_clause(search_by: str | None, keyword: str):
    clauses = {
        "customerName": Contract.customer.has(Customer.name.icontains(keyword, autoescape=True)),
        "userName": Contract.user.has(User.name.icontains(keyword, autoescape=True)),
        "carNumber": Contract.car.has(Car.car_number.icontains(keyword, autoescape=True)),
        "carModel": Contract.car.has(Car.model.icontains(keyword, autoescape=True)),
    }
    if search_by in clauses:
        return clauses[search_by]
    clause = None
    for value in clauses.values():
        clause = value if clause is None else clause | value
    return clause


class ContractRepository(BaseRepository[Contract]):
    model = Contract

    def _scoped(self, company_id: int):
        return self.session.query(Contract).filter(Contract.company_id == company_id)

    def _with_relations(self, query):
        return query.options(
            joinedload(Contract.user),
            joinedload(Contract.customer),
            joinedload(Contract.car),
            selectinload(Contract.meetings).selectinload(Meeting.alarms),
            selectinload(Contract.documents),
        )

    def get(self, company_id: int, contract_id: int) -> Contract | None:
        return self._with_relations(self._scoped(company_id)).filter(Contract.id == contract_id).first()

    def search(
        self,
        company_id: int,
        page: int,
        page_size: int,
        search_by: str | None = None,
        keyword: str | None = None,
        status: ContractStatus | None = None,
    ) -> tuple[list[Contract], int]:
        query = self._scoped(company_id)
        if keyword:
            query = query.filter(_search_clause(search_by, keyword))
        if status is not None:
            query = query.filter(Contract.status == status)
        query = self._with_relations(query).order_by(Contract.updated_at.desc(), Contract.id.desc())
        return paginate(query, page, page_size)

    def replace_meetings(self, contract: Contract, meetings: Iterable[tuple[datetime, list[datetime]]]) -> None:
        """Delete every meeting of ``contract`` and recreate from ``(date, alarms)`` pairs."""
        contract.meetings.clear()
        self.session.flush()
        for date, alarms in meetings:
            contract.meetings.append(
                Meeting(date=date, alarms=[MeetingAlarm(time=alarm) for alarm in alarms])
            )
        self.session.flush()

    # Aggregates

    def count_for_company(self, company_id: int) -> int:
        return self._scoped(company_id).count()

    def revenue_by_car_type(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[CarType, tuple[int, int]]:
        """Successful contracts grouped by car type as ``{type: (count, revenue)}``."""
        query = (
            self.session.query(
                Car.type,
                func.count(Contract.id),
                func.coalesce(func.sum(Contract.contract_price), 0),
            )
            .join(Car, Contract.car_id == Car.id)
            .filter(
                Contract.company_id == company_id,
                Contract.status == ContractStatus.CONTRACT_SUCCESSFUL,
            )
        )
        if start is not None:
            query = query.filter(Contract.created_at >= start)
        if end is not None:
            query = query.filter(Contract.created_at < end)
        rows = query.group_by(Car.type).all()
        return {car_type: (int(count), int(revenue)) for car_type, count, revenue in rows}

    def count_for_customer(self, company_id: int, customer_id: int) -> int:
        return self._scoped(company_id).filter(Contract.customer_id == customer_id).count()

    def count_for_car(self, company_id: int, car_id: int, statuses: Iterable[ContractStatus]) -> int:
        return (
            self._scoped(company_id)
            .filter(Contract.car_id == car_id, Contract.status.in_(list(statuses)))
            .count()
        )

    def count_by_statuses(self, company_id: int, statuses: Iterable[ContractStatus]) -> int:
        return self._scoped(company_id).filter(Contract.status.in_(list(statuses))).count()

    def successful_revenue(self, company_id: int, start: datetime, end: datetime) -> int:
        total = (
            self.session.query(func.coalesce(func.sum(Contract.contract_price), 0))
            .filter(
                Contract.company_id == company_id,
                Contract.status == ContractStatus.CONTRACT_SUCCESSFUL,
                Contract.created_at >= start,
                Contract.created_at < end,
            )
            .scalar()
        )
        return int(total or 0)
