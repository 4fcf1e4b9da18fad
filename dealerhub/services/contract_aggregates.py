"""Recompute tenant aggregates and derived car status after a contract mutation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from dealerhub.core.labels import CAR_TYPE_LABELS
from dealerhub.models import OPEN_CONTRACT_STATUSES, Car, CarStatus, ContractStatus, Customer
from dealerhub.repositories.contract_repository import ContractRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateSnapshot:
    total_contract_count: int
    revenue_by_car_type: dict[str, int] = field(default_factory=dict)
    customer_contract_count: int | None = None
    updated_car_status: CarStatus | None = None


def derive_car_status(successful_count: int, open_count: int) -> CarStatus:
    if successful_count > 0:
        return CarStatus.SOLD
    if open_count > 0:
        return CarStatus.IN_NEGOTIATION
    return CarStatus.AVAILABLE


class ContractAggregateRefresher:
    """Runs inside the caller's transaction; never commits on its own."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.contracts = ContractRepository(db)

    def refresh(
        self,
        company_id: int,
        customer_id: int | None = None,
        car_id: int | None = None,
    ) -> AggregateSnapshot:
        self.db.flush()
        total = self.contracts.count_for_company(company_id)

        per_type = self.contracts.revenue_by_car_type(company_id)
        revenue = {label: per_type.get(car_type, (0, 0))[1] for car_type, label in CAR_TYPE_LABELS.items()}

        customer_count = None
        if customer_id is not None:
            customer_count = self.contracts.count_for_customer(company_id, customer_id)
            customer = self.db.get(Customer, customer_id)
            if customer is not None and customer.company_id == company_id:
                customer.contract_count = customer_count

        car_status = None
        if car_id is not None:
            successful = self.contracts.count_for_car(company_id, car_id, [ContractStatus.CONTRACT_SUCCESSFUL])
            open_count = 0 if successful else self.contracts.count_for_car(company_id, car_id, OPEN_CONTRACT_STATUSES)
            car_status = derive_car_status(successful, open_count)
            car = self.db.get(Car, car_id)
            if car is not None and car.company_id == company_id:
                car.status = car_status

        self.db.flush()
        logger.info(
            "aggregates.refreshed",
            extra={
                "event": "aggregates.refreshed",
                "company_id": company_id,
                "customer_id": customer_id,
                "car_id": car_id,
            },
        )
        return AggregateSnapshot(
            total_contract_count=total,
            revenue_by_car_type=revenue,
            customer_contract_count=customer_count,
            updated_car_status=car_status,
        )
