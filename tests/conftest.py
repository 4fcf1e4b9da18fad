from __future__ import annotations

import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dealerhub.auth.jwt import create_token_pair
from dealerhub.auth.tenant_context import TenantContext
from dealerhub.core.config import get_config
from dealerhub.core.dependencies import get_db_session
from dealerhub.core.security import hash_password
from dealerhub.models import Base, Car, CarStatus, CarType, Company, Customer, Gender, User

TEST_PASSWORD = "s3cret-pass"


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class Seeder:
    """Inserts committed rows with unique defaults and builds caller identities."""

    password = TEST_PASSWORD

    def __init__(self, session) -> None:
        self.session = session
        self._seq = itertools.count(1)

    def _save(self, entity):
        self.session.add(entity)
        self.session.commit()
        return entity

    def company(self, name: str | None = None, code: str | None = None) -> Company:
        n = next(self._seq)
        return self._save(Company(name=name or f"Company {n}", code=code or f"CODE{n}", user_count=0))

    def user(self, company: Company, is_admin: bool = False, email: str | None = None) -> User:
        n = next(self._seq)
        user = User(
            company_id=company.id,
            name=f"Seller {n}",
            email=email or f"seller{n}@example.com",
            employee_number=f"EMP-{n}",
            phone_number=f"010-1000-{n:04d}",
            password_hash=hash_password(TEST_PASSWORD, pepper=get_config().PASSWORD_PEPPER),
            is_admin=is_admin,
        )
        company.user_count += 1
        return self._save(user)

    def car(
        self,
        company: Company,
        car_type: CarType = CarType.SUV,
        price: int = 25_000_000,
        model: str = "Sorento",
        car_number: str | None = None,
    ) -> Car:
        n = next(self._seq)
        return self._save(
            Car(
                company_id=company.id,
                car_number=car_number or f"{n:02d}가{n:04d}",
                manufacturer="Kia",
                model=model,
                type=car_type,
                manufacturing_year=2021,
                mileage=30_000,
                price=price,
                accident_count=0,
                status=CarStatus.AVAILABLE,
            )
        )

    def customer(self, company: Company, name: str | None = None, email: str | None = None) -> Customer:
        n = next(self._seq)
        return self._save(
            Customer(
                company_id=company.id,
                name=name or f"Customer {n}",
                gender=Gender.FEMALE,
                phone_number=f"010-2000-{n:04d}",
                email=email or f"customer{n}@example.com",
                contract_count=0,
            )
        )

    @staticmethod
    def actor(user: User) -> TenantContext:
        return TenantContext(company_id=user.company_id, user_id=user.id, is_admin=user.is_admin, email=user.email)

    @staticmethod
    def headers(user: User) -> dict[str, str]:
        tokens = create_token_pair(
            user_id=user.id,
            company_id=user.company_id,
            email=user.email,
            is_admin=user.is_admin,
            secret=get_config().JWT_SECRET,
        )
        return {"Authorization": f"Bearer {tokens.access_token}"}


@pytest.fixture
def seed(session) -> Seeder:
    return Seeder(session)


@pytest.fixture
def client(session):
    from dealerhub.main import app

    def _override_db():
        yield session

    app.dependency_overrides[get_db_session] = _override_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
