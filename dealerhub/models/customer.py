"""Customer model module."""

from __future__ import annotations

from sqlalchemy import Enum, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from dealerhub.models.base import AuditMixin, Base, CompanyScopedMixin, SoftDeleteMixin
from dealerhub.models.enums import AgeGroup, Gender, Region

_ACTIVE = text("deleted_at IS NULL")


class Customer(Base, AuditMixin, SoftDeleteMixin, CompanyScopedMixin):
    __tablename__ = "customers"
    __table_args__ = (
        Index(
            "uq_customers_company_email_active",
            "company_id",
            "email",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
        Index(
            "uq_customers_company_phone_active",
            "company_id",
            "phone_number",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    gender: Mapped[Gender] = mapped_column(Enum(Gender, name="gender"), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    age_group: Mapped[AgeGroup | None] = mapped_column(Enum(AgeGroup, name="age_group"))
    region: Mapped[Region | None] = mapped_column(Enum(Region, name="region"))
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    memo: Mapped[str | None] = mapped_column(Text)
    contract_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
