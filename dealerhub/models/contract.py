"""Contract, meeting and alarm model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealerhub.models.base import AuditMixin, Base, CompanyScopedMixin, utcnow
from dealerhub.models.enums import ContractStatus


class Contract(Base, AuditMixin, CompanyScopedMixin):
    __tablename__ = "contracts"
    __table_args__ = (
        Index("idx_contracts_company_status", "company_id", "status"),
        Index("idx_contracts_car", "car_id"),
        Index("idx_contracts_customer", "customer_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False)
    car_id: Mapped[int] = mapped_column(ForeignKey("cars.id", ondelete="RESTRICT"), nullable=False)
    status: Mapped[ContractStatus] = mapped_column(
        Enum(ContractStatus, name="contract_status"), default=ContractStatus.CAR_INSPECTION, nullable=False
    )
    contract_price: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    contract_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    resolution_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    user = relationship("User")
    customer = relationship("Customer")
    car = relationship("Car")
    meetings = relationship(
        "Meeting",
        back_populates="contract",
        cascade="all, delete-orphan",
        order_by="Meeting.date",
    )
    documents = relationship("ContractDocument", back_populates="contract", order_by="ContractDocument.id")


class Meeting(Base):
    __tablename__ = "meetings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contract_id: Mapped[int] = mapped_column(ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    contract = relationship("Contract", back_populates="meetings")
    alarms = relationship(
        "MeetingAlarm",
        back_populates="meeting",
        cascade="all, delete-orphan",
        order_by="MeetingAlarm.time",
    )


class MeetingAlarm(Base):
    __tablename__ = "meeting_alarms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    meeting_id: Mapped[int] = mapped_column(ForeignKey("meetings.id", ondelete="CASCADE"), nullable=False, index=True)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    meeting = relationship("Meeting", back_populates="alarms")
