from __future__ import annotations

import pytest

from dealerhub.core.exceptions import AuthenticationError, BadRequestError, ConflictError, NotFoundError
from dealerhub.models import Car, CarStatus, CarType, Company, Customer, Gender, User
from dealerhub.services.auth_service import AuthService
from dealerhub.services.car_service import CAR_PAGE_SIZE, CarService
from dealerhub.services.company_service import CompanyService
from dealerhub.services.contract_service import ContractService
from dealerhub.services.customer_service import CustomerService
from dealerhub.services.user_service import UserService


def _car_fields(**overrides):
    fields = {
        "car_number": "12가3456",
        "manufacturer": "Hyundai",
        "model": "Tucson",
        "type": CarType.SUV,
        "manufacturing_year": 2022,
        "mileage": 12_000,
        "price": 28_000_000,
    }
    fields.update(overrides)
    return fields


def test_car_create_starts_available_and_rejects_duplicate_number(session, seed):
    company = seed.company()
    actor = seed.actor(seed.user(company))
    service = CarService(session)

    car = service.create(actor, **_car_fields())
    assert car.status == CarStatus.AVAILABLE
    assert car.company_id == company.id

    with pytest.raises(ConflictError):
        service.create(actor, **_car_fields(model="Santa Fe"))


def test_car_update_cannot_set_status(session, seed):
    company = seed.company()
    actor = seed.actor(seed.user(company))
    service = CarService(session)
    car = service.create(actor, **_car_fields())

    updated = service.update(actor, car.id, {"price": 27_000_000, "status": CarStatus.SOLD})
    assert updated.price == 27_000_000
    assert updated.status == CarStatus.AVAILABLE


def test_car_list_pages_by_eight_and_filters(session, seed):
    company = seed.company()
    actor = seed.actor(seed.user(company))
    for n in range(10):
        seed.car(company, model="Avante" if n % 2 else "Sonata")

    page = CarService(session).list(actor, page=2, page_size=50)
    assert page.page_size == CAR_PAGE_SIZE
    assert page.total == 10
    assert len(page.items) == 2

    filtered = CarService(session).list(actor, search_by="model", keyword="avan")
    assert filtered.total == 5


def test_car_with_contracts_cannot_be_deleted(session, seed):
    company = seed.company()
    user = seed.user(company)
    car = seed.car(company)
    customer = seed.customer(company)
    ContractService(session).create(seed.actor(user), car_id=car.id, customer_id=customer.id)

    with pytest.raises(ConflictError):
        CarService(session).delete(seed.actor(user), car.id)

    spare = seed.car(company)
    CarService(session).delete(seed.actor(user), spare.id)
    assert session.get(Car, spare.id) is None


def test_car_models_catalog_groups_by_manufacturer(session, seed):
    company = seed.company()
    actor = seed.actor(seed.user(company))
    service = CarService(session)
    service.create(actor, **_car_fields(car_number="1", manufacturer="Kia", model="K5"))
    service.create(actor, **_car_fields(car_number="2", manufacturer="Kia", model="EV6"))
    service.create(actor, **_car_fields(car_number="3", manufacturer="Kia", model="K5"))
    service.create(actor, **_car_fields(car_number="4", manufacturer="BMW", model="X5"))

    assert service.models_catalog(actor) == [
        {"manufacturer": "BMW", "models": ["X5"]},
        {"manufacturer": "Kia", "models": ["EV6", "K5"]},
    ]


def test_car_lookup_is_tenant_scoped(session, seed):
    car = seed.car(seed.company())
    stranger = seed.actor(seed.user(seed.company()))

    with pytest.raises(NotFoundError):
        CarService(session).get(stranger, car.id)


def test_customer_uniqueness_and_soft_delete(session, seed):
    company = seed.company()
    actor = seed.actor(seed.user(company))
    service = CustomerService(session)
    customer = service.create(
        actor, name="Choi", gender=Gender.MALE, phone_number="010-7777-8888", email="choi@example.com"
    )
    assert customer.contract_count == 0

    with pytest.raises(ConflictError):
        service.create(actor, name="Other", gender=Gender.MALE, phone_number="010-0000-0001", email="choi@example.com")

    service.delete(actor, customer.id)
    assert session.get(Customer, customer.id).deleted_at is not None
    with pytest.raises(NotFoundError):
        service.get(actor, customer.id)
    items, total = service.list(actor)
    assert total == 0

    again = service.create(
        actor, name="Choi", gender=Gender.MALE, phone_number="010-7777-8888", email="choi@example.com"
    )
    assert again.id != customer.id


def test_customer_update_checks_conflicts_against_others(session, seed):
    company = seed.company()
    actor = seed.actor(seed.user(company))
    first = seed.customer(company, email="first@example.com")
    second = seed.customer(company, email="second@example.com")
    service = CustomerService(session)

    service.update(actor, first.id, {"email": "first@example.com", "memo": "same email is fine"})
    with pytest.raises(ConflictError):
        service.update(actor, second.id, {"email": "first@example.com"})


def test_company_register_update_and_delete(session, seed):
    service = CompanyService(session)
    company = service.register("Blue Motors", "BLUE")

    with pytest.raises(ConflictError):
        service.register("Blue Motors", "OTHER")

    service.update(company.id, {"name": "Navy Motors"})
    assert session.get(Company, company.id).name == "Navy Motors"

    user = seed.user(company)
    seed.car(company)
    seed.customer(company)
    service.delete(company.id)
    assert session.get(Company, company.id) is None
    assert session.get(User, user.id) is None
    assert session.query(Car).count() == 0


def test_user_register_requires_matching_company_code(session, seed):
    company = seed.company(name="Red Cars", code="RED")
    service = UserService(session)
    common = {
        "name": "Jung",
        "email": "jung@example.com",
        "employee_number": "E-1",
        "phone_number": "010-1234-5678",
        "password": "pw-12345",
        "password_confirmation": "pw-12345",
    }

    with pytest.raises(BadRequestError):
        service.register(company_name="Red Cars", company_code="WRONG", **common)
    with pytest.raises(BadRequestError):
        service.register(company_name="Red Cars", company_code="RED", **{**common, "password_confirmation": "x"})

    user = service.register(company_name="Red Cars", company_code="RED", **common)
    assert user.company_id == company.id
    assert session.get(Company, company.id).user_count == 1
    with pytest.raises(ConflictError):
        service.register(company_name="Red Cars", company_code="RED", **common)


def test_profile_update_requires_current_password(session, seed):
    user = seed.user(seed.company())
    service = UserService(session)

    with pytest.raises(AuthenticationError):
        service.update_profile(user.id, current_password="wrong", phone_number="010-9999-9999")

    updated = service.update_profile(
        user.id,
        current_password=seed.password,
        phone_number="010-9999-9999",
        password="new-pass",
        password_confirmation="new-pass",
    )
    assert updated.phone_number == "010-9999-9999"
    AuthService(session).login(user.email, "new-pass")


def test_login_and_refresh(session, seed):
    user = seed.user(seed.company())
    service = AuthService(session)

    with pytest.raises(AuthenticationError):
        service.login(user.email, "wrong")

    logged_in, tokens = service.login(user.email, seed.password)
    assert logged_in.last_login_at is not None

    refreshed = service.refresh(tokens.refresh_token)
    assert refreshed.access_token
    with pytest.raises(AuthenticationError):
        service.refresh(tokens.access_token)


def test_user_with_contracts_cannot_be_deleted(session, seed):
    company = seed.company()
    user = seed.user(company)
    ContractService(session).create(
        seed.actor(user), car_id=seed.car(company).id, customer_id=seed.customer(company).id
    )

    with pytest.raises(ConflictError):
        UserService(session).delete(user.id)
