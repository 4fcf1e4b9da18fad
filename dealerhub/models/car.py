"""Car inventory model module."""

from __future__ import annotations

from sqlalchemy import BigInteger, Enum, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dealerhub.models.base import AuditMixin, Base, CompanyScopedMixin
from dealerhub.models.enums import CarStatus, CarType


class Car(Base, AuditMixin, CompanyScopedMixin):
    __tablename__ = "cars"
    __table_args__ = (
        UniqueConstraint("company_id", "car_number", name="uq_cars_company_car_number"),
        Index("idx_cars_company_status", "company_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    car_number: Mapped[str] = mapped_column(String(32), nullable=False)
    manufacturer: Mapped[str] = mapped_column(String(64), nullable=False)
    model: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[CarType] = mapped_column(Enum(CarType, name="car_type"), nullable=False)
    manufacturing_year: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    accident_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text)
    accident_details: Mapped[str | None] = mapped_column(Text)
    status: Mapped[CarStatus] = mapped_column(
        Enum(CarStatus, name="car_status"), default=CarStatus.AVAILABLE, nullable=False
    )
