"""Company (tenant) model module."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dealerhub.models.base import AuditMixin, Base


class Company(Base, AuditMixin):
    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    user_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    users = relationship("User", back_populates="company", passive_deletes=True)
