"""Company (tenant) administration."""

from __future__ import annotations

import logging
from typing import Any

from dealerhub.core.exceptions import ConflictError, NotFoundError
from dealerhub.models import (
    Car,
    Company,
    Contract,
    ContractDocument,
    Customer,
    Upload,
    User,
)
from dealerhub.repositories import CompanyRepository
from dealerhub.services.base_service import BaseService

logger = logging.getLogger(__name__)


class CompanyService(BaseService):
    def __init__(self, db, settings=None) -> None:
        super().__init__(db, settings)
        self.companies = CompanyRepository(db)

    def get(self, company_id: int) -> Company:
        company = self.companies.get(company_id)
        if company is None:
            raise NotFoundError("Company not found.")
        return company

    def _check_unique(self, name: str | None, code: str | None, exclude_id: int | None = None) -> None:
        if name:
            existing = self.companies.find_by_name(name)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(f"Company name already registered: {name}")
        if code:
            existing = self.companies.find_by_code(code)
            if existing is not None and existing.id != exclude_id:
                raise ConflictError(f"Company code already registered: {code}")

    def register(self, name: str, code: str) -> Company:
        with self.transaction():
            self._check_unique(name, code)
            company = self.companies.add(Company(name=name, code=code, user_count=0))
        logger.info("company.registered", extra={"event": "company.registered", "company_id": company.id})
        return company

    def list(self, page: int = 1, page_size: int = 10, keyword: str | None = None) -> tuple[list[Company], int]:
        return self.companies.list(max(page, 1), min(max(page_size, 1), 100), keyword)

    def update(self, company_id: int, changes: dict[str, Any]) -> Company:
        with self.transaction():
            company = self.get(company_id)
            self._check_unique(changes.get("name"), changes.get("code"), exclude_id=company.id)
            if changes.get("name"):
                company.name = changes["name"]
            if changes.get("code"):
                company.code = changes["code"]
            self.db.flush()
        return company

    def delete(self, company_id: int) -> None:
        """Remove the company and every row it owns, children first."""
        with self.transaction():
            company = self.get(company_id)
            for model in (ContractDocument, Contract, Upload, Customer, Car, User):
                for row in self.db.query(model).filter(model.company_id == company.id).all():
                    self.db.delete(row)
                self.db.flush()
            self.db.delete(company)
        logger.info("company.deleted", extra={"event": "company.deleted", "company_id": company_id})
