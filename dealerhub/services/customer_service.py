"""Customer service."""

from __future__ import annotations

import logging
from typing import Any

from dealerhub.auth.tenant_context import TenantContext
from dealerhub.core.exceptions import ConflictError, NotFoundError
from dealerhub.models import Customer, Upload, UploadType
from dealerhub.models.base import utcnow
from dealerhub.repositories import CustomerRepository
from dealerhub.services.base_service import BaseService
from dealerhub.services.csv_import import ImportSummary
from dealerhub.services.upload_service import UploadService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "gender", "phone_number", "age_group", "region", "email", "memo")


class CustomerService(BaseService):
    def __init__(self, db, settings=None) -> None:
        super().__init__(db, settings)
        self.customers = CustomerRepository(db)

    def get(self, actor: TenantContext, customer_id: int) -> Customer:
        customer = self.customers.get(actor.company_id, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found.")
        return customer

    def _check_unique(
        self, company_id: int, email: str | None, phone_number: str | None, exclude_id: int | None = None
    ) -> None:
        if email and self.customers.find_by_email(company_id, email, exclude_id) is not None:
            raise ConflictError(f"Customer email already registered: {email}")
        if phone_number and self.customers.find_by_phone(company_id, phone_number, exclude_id) is not None:
            raise ConflictError(f"Customer phone number already registered: {phone_number}")

    def create(self, actor: TenantContext, **fields: Any) -> Customer:
        with self.transaction():
            self._check_unique(actor.company_id, fields.get("email"), fields.get("phone_number"))
            values = {key: fields[key] for key in UPDATABLE_FIELDS if key in fields}
            customer = self.customers.add(Customer(company_id=actor.company_id, contract_count=0, **values))
        logger.info(
            "customer.created",
            extra={"event": "customer.created", "company_id": actor.company_id, "customer_id": customer.id},
        )
        return customer

    def list(
        self, actor: TenantContext, page: int = 1, page_size: int = 10, keyword: str | None = None
    ) -> tuple[list[Customer], int]:
        return self.customers.list(actor.company_id, max(page, 1), min(max(page_size, 1), 100), keyword)

    def update(self, actor: TenantContext, customer_id: int, changes: dict[str, Any]) -> Customer:
        with self.transaction():
            customer = self.get(actor, customer_id)
            self._check_unique(actor.company_id, changes.get("email"), changes.get("phone_number"), customer.id)
            for key in UPDATABLE_FIELDS:
                if key in changes and (changes[key] is not None or key == "memo"):
                    setattr(customer, key, changes[key])
            self.db.flush()
        return customer

    def delete(self, actor: TenantContext, customer_id: int) -> None:
        """Soft delete; contracts keep referencing the row."""
        with self.transaction():
            customer = self.get(actor, customer_id)
            customer.deleted_at = utcnow()
        logger.info(
            "customer.deleted",
            extra={"event": "customer.deleted", "company_id": actor.company_id, "customer_id": customer_id},
        )

    def import_csv(
        self, actor: TenantContext, file_name: str, content: bytes, content_type: str | None = None
    ) -> tuple[Upload, ImportSummary]:
        return UploadService(self.db, self.settings).import_csv(
            actor, UploadType.CUSTOMER, file_name, content, content_type
        )
