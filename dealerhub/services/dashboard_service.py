"""Read-only dashboard rollups, recomputed from source tables on every call."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from dealerhub.auth.tenant_context import TenantContext
from dealerhub.core.labels import CAR_TYPE_LABELS
from dealerhub.models import OPEN_CONTRACT_STATUSES, ContractStatus
from dealerhub.repositories import ContractRepository
from dealerhub.services.base_service import BaseService


@dataclass(frozen=True)
class DashboardSummary:
    monthly_sales: int
    last_month_sales: int
    growth_rate: float
    proceeding_contracts_count: int
    completed_contracts_count: int
    contracts_by_car_type: list[dict] = field(default_factory=list)
    sales_by_car_type: list[dict] = field(default_factory=list)


def month_bounds(now: datetime) -> tuple[datetime, datetime, datetime]:
    """Return (start of last month, start of this month, start of next month) in UTC."""
    this_month = datetime(now.year, now.month, 1, tzinfo=timezone.utc)
    if now.month == 1:
        last_month = datetime(now.year - 1, 12, 1, tzinfo=timezone.utc)
    else:
        last_month = datetime(now.year, now.month - 1, 1, tzinfo=timezone.utc)
    if now.month == 12:
        next_month = datetime(now.year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        next_month = datetime(now.year, now.month + 1, 1, tzinfo=timezone.utc)
    return last_month, this_month, next_month


def growth_rate(current: int, previous: int) -> float:
    if previous == 0:
        return 100.0
    return round((current - previous) / previous * 100, 2)


class DashboardService(BaseService):
    def __init__(self, db, settings=None) -> None:
        super().__init__(db, settings)
        self.contracts = ContractRepository(db)

    def summary(self, actor: TenantContext, now: datetime | None = None) -> DashboardSummary:
        now = now or datetime.now(timezone.utc)
        last_month, this_month, next_month = month_bounds(now)
        company_id = actor.company_id

        monthly = self.contracts.successful_revenue(company_id, this_month, next_month)
        previous = self.contracts.successful_revenue(company_id, last_month, this_month)
        per_type = self.contracts.revenue_by_car_type(company_id, start=this_month, end=next_month)

        return DashboardSummary(
            monthly_sales=monthly,
            last_month_sales=previous,
            growth_rate=growth_rate(monthly, previous),
            proceeding_contracts_count=self.contracts.count_by_statuses(company_id, OPEN_CONTRACT_STATUSES),
            completed_contracts_count=self.contracts.count_by_statuses(
                company_id, [ContractStatus.CONTRACT_SUCCESSFUL]
            ),
            contracts_by_car_type=[
                {"car_type": label, "count": per_type.get(car_type, (0, 0))[0]}
                for car_type, label in CAR_TYPE_LABELS.items()
            ],
            sales_by_car_type=[
                {"car_type": label, "amount": per_type.get(car_type, (0, 0))[1]}
                for car_type, label in CAR_TYPE_LABELS.items()
            ],
        )
