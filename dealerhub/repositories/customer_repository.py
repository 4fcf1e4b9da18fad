"""Customer data access; soft-deleted rows are invisible unless asked for."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import select

from dealerhub.models import Customer
from dealerhub.repositories.base import BaseRepository, insert_skip_duplicates, paginate


class CustomerRepository(BaseRepository[Customer]):
    model = Customer

    def _active(self, company_id: int):
        return self.session.query(Customer).filter(
            Customer.company_id == company_id, Customer.deleted_at.is_(None)
        )

    def get(self, company_id: int, customer_id: int) -> Customer | None:
        return self._active(company_id).filter(Customer.id == customer_id).first()

    def find_by_email(self, company_id: int, email: str, exclude_id: int | None = None) -> Customer | None:
        query = self._active(company_id).filter(Customer.email == email)
        if exclude_id is not None:
            query = query.filter(Customer.id != exclude_id)
        return query.first()

    def find_by_phone(self, company_id: int, phone_number: str, exclude_id: int | None = None) -> Customer | None:
        query = self._active(company_id).filter(Customer.phone_number == phone_number)
        if exclude_id is not None:
            query = query.filter(Customer.id != exclude_id)
        return query.first()

    def existing_keys(
        self, company_id: int, emails: Iterable[str], phone_numbers: Iterable[str]
    ) -> tuple[set[str], set[str]]:
        """Return the subset of ``emails`` and ``phone_numbers`` already in use."""
        emails = list(set(emails))
        phone_numbers = list(set(phone_numbers))
        base = select(Customer.email, Customer.phone_number).where(
            Customer.company_id == company_id,
            Customer.deleted_at.is_(None),
            Customer.email.in_(emails) | Customer.phone_number.in_(phone_numbers),
        )
        taken_emails: set[str] = set()
        taken_phones: set[str] = set()
        for email, phone in self.session.execute(base):
            taken_emails.add(email)
            taken_phones.add(phone)
        return taken_emails & set(emails), taken_phones & set(phone_numbers)

    def list(
        self, company_id: int, page: int, page_size: int, keyword: str | None = None
    ) -> tuple[list[Customer], int]:
        query = self._active(company_id)
        if keyword:
            query = query.filter(
                Customer.name.icontains(keyword, autoescape=True)
                | Customer.email.icontains(keyword, autoescape=True)
            )
        return paginate(query.order_by(Customer.created_at.desc(), Customer.id.desc()), page, page_size)

    def list_active(self, company_id: int) -> list[Customer]:
        return self._active(company_id).order_by(Customer.name.asc()).all()

    def bulk_insert(self, rows: list[dict[str, Any]]) -> int:
        return insert_skip_duplicates(self.session, Customer.__table__, rows)
