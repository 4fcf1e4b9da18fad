from __future__ import annotations

from dealerhub.models import CarStatus, CarType, Contract, ContractStatus
from dealerhub.services.contract_aggregates import ContractAggregateRefresher, derive_car_status


def _contract(session, company, user, car, customer, status, price):
    contract = Contract(
        company_id=company.id,
        user_id=user.id,
        customer_id=customer.id,
        car_id=car.id,
        status=status,
        contract_price=price,
    )
    session.add(contract)
    session.commit()
    return contract


def test_derive_car_status_prefers_sold_over_open():
    assert derive_car_status(successful_count=1, open_count=2) == CarStatus.SOLD
    assert derive_car_status(successful_count=0, open_count=1) == CarStatus.IN_NEGOTIATION
    assert derive_car_status(successful_count=0, open_count=0) == CarStatus.AVAILABLE


def test_refresh_reports_every_car_type_and_successful_revenue_only(session, seed):
    company = seed.company()
    user = seed.user(company)
    customer = seed.customer(company)
    suv = seed.car(company, car_type=CarType.SUV)
    compact = seed.car(company, car_type=CarType.COMPACT)
    sports = seed.car(company, car_type=CarType.SPORTS)
    _contract(session, company, user, suv, customer, ContractStatus.CONTRACT_SUCCESSFUL, 30_000_000)
    _contract(session, company, user, compact, customer, ContractStatus.CONTRACT_SUCCESSFUL, 8_000_000)
    _contract(session, company, user, sports, customer, ContractStatus.PRICE_NEGOTIATION, 90_000_000)

    snapshot = ContractAggregateRefresher(session).refresh(company.id)

    assert snapshot.total_contract_count == 3
    assert snapshot.revenue_by_car_type == {
        "경·소형": 8_000_000,
        "준중·중형": 0,
        "대형": 0,
        "스포츠카": 0,
        "SUV": 30_000_000,
    }
    assert snapshot.customer_contract_count is None
    assert snapshot.updated_car_status is None


def test_refresh_writes_customer_count_and_car_status(session, seed):
    company = seed.company()
    user = seed.user(company)
    customer = seed.customer(company)
    car = seed.car(company)
    _contract(session, company, user, car, customer, ContractStatus.CONTRACT_FAILED, 1)
    _contract(session, company, user, car, customer, ContractStatus.CONTRACT_DRAFT, 1)

    snapshot = ContractAggregateRefresher(session).refresh(company.id, customer_id=customer.id, car_id=car.id)
    session.commit()

    assert snapshot.customer_contract_count == 2
    assert snapshot.updated_car_status == CarStatus.IN_NEGOTIATION
    assert customer.contract_count == 2
    assert car.status == CarStatus.IN_NEGOTIATION


def test_refresh_is_scoped_to_one_company(session, seed):
    company = seed.company()
    other = seed.company()
    user = seed.user(other)
    customer = seed.customer(other)
    car = seed.car(other)
    _contract(session, other, user, car, customer, ContractStatus.CONTRACT_SUCCESSFUL, 5_000_000)

    snapshot = ContractAggregateRefresher(session).refresh(company.id, customer_id=customer.id, car_id=car.id)

    assert snapshot.total_contract_count == 0
    assert snapshot.revenue_by_car_type["SUV"] == 0
    assert customer.contract_count == 0
    assert car.status == CarStatus.AVAILABLE
