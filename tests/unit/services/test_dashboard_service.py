from __future__ import annotations

from datetime import datetime, timezone

from dealerhub.models import CarType, Contract, ContractStatus
from dealerhub.services.dashboard_service import DashboardService, growth_rate, month_bounds

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _contract(session, company, user, car, customer, status, price, created_at):
    contract = Contract(
        company_id=company.id,
        user_id=user.id,
        customer_id=customer.id,
        car_id=car.id,
        status=status,
        contract_price=price,
        created_at=created_at,
        updated_at=created_at,
    )
    session.add(contract)
    session.commit()
    return contract


def test_month_bounds_wrap_year():
    last, this, nxt = month_bounds(datetime(2026, 1, 10, tzinfo=timezone.utc))
    assert last == datetime(2025, 12, 1, tzinfo=timezone.utc)
    assert this == datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert nxt == datetime(2026, 2, 1, tzinfo=timezone.utc)

    last, this, nxt = month_bounds(datetime(2026, 12, 31, tzinfo=timezone.utc))
    assert last == datetime(2026, 11, 1, tzinfo=timezone.utc)
    assert nxt == datetime(2027, 1, 1, tzinfo=timezone.utc)


def test_growth_rate_rules():
    assert growth_rate(500, 0) == 100.0
    assert growth_rate(0, 0) == 100.0
    assert growth_rate(150, 100) == 50.0
    assert growth_rate(1, 3) == -66.67


def test_summary_computes_monthly_rollups(session, seed):
    company = seed.company()
    user = seed.user(company)
    customer = seed.customer(company)
    suv = seed.car(company, car_type=CarType.SUV)
    compact = seed.car(company, car_type=CarType.COMPACT)
    old_suv = seed.car(company, car_type=CarType.SUV)
    open_car = seed.car(company, car_type=CarType.FULLSIZE)
    this_month = datetime(2026, 3, 5, 9, 0, tzinfo=timezone.utc)
    last_month = datetime(2026, 2, 20, 9, 0, tzinfo=timezone.utc)

    _contract(session, company, user, suv, customer, ContractStatus.CONTRACT_SUCCESSFUL, 30_000_000, this_month)
    _contract(session, company, user, compact, customer, ContractStatus.CONTRACT_SUCCESSFUL, 10_000_000, this_month)
    _contract(session, company, user, old_suv, customer, ContractStatus.CONTRACT_SUCCESSFUL, 20_000_000, last_month)
    _contract(session, company, user, open_car, customer, ContractStatus.CONTRACT_DRAFT, 50_000_000, this_month)
    _contract(session, company, user, open_car, customer, ContractStatus.CONTRACT_FAILED, 50_000_000, this_month)

    summary = DashboardService(session).summary(seed.actor(user), now=NOW)

    assert summary.monthly_sales == 40_000_000
    assert summary.last_month_sales == 20_000_000
    assert summary.growth_rate == 100.0
    assert summary.proceeding_contracts_count == 1
    assert summary.completed_contracts_count == 3
    counts = {row["car_type"]: row["count"] for row in summary.contracts_by_car_type}
    amounts = {row["car_type"]: row["amount"] for row in summary.sales_by_car_type}
    assert counts == {"경·소형": 1, "준중·중형": 0, "대형": 0, "스포츠카": 0, "SUV": 1}
    assert amounts["SUV"] == 30_000_000
    assert amounts["경·소형"] == 10_000_000


def test_summary_for_empty_company(session, seed):
    company = seed.company()
    user = seed.user(company)

    summary = DashboardService(session).summary(seed.actor(user), now=NOW)

    assert summary.monthly_sales == 0
    assert summary.growth_rate == 100.0
    assert summary.proceeding_contracts_count == 0
    assert len(summary.contracts_by_car_type) == len(CarType)
