"""User registration and profile management."""

from __future__ import annotations

import logging

from dealerhub.core.exceptions import AuthenticationError, BadRequestError, ConflictError, NotFoundError
from dealerhub.core.security import hash_password, verify_password
from dealerhub.models import User
from dealerhub.repositories import CompanyRepository, UserRepository
from dealerhub.services.base_service import BaseService

logger = logging.getLogger(__name__)


class UserService(BaseService):
    def __init__(self, db, settings=None) -> None:
        super().__init__(db, settings)
        self.users = UserRepository(db)
        self.companies = CompanyRepository(db)

    def get(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def register(
        self,
        name: str,
        email: str,
        employee_number: str,
        phone_number: str,
        password: str,
        password_confirmation: str,
        company_name: str,
        company_code: str,
        is_admin: bool = False,
    ) -> User:
        if password != password_confirmation:
            raise BadRequestError("Password and confirmation do not match.")
        with self.transaction():
            if self.users.find_by_email(email) is not None:
                raise ConflictError(f"Email already registered: {email}")
            company = self.companies.find_by_name_and_code(company_name, company_code)
            if company is None:
                raise BadRequestError("Company name and code do not match.")
            user = self.users.add(
                User(
                    company_id=company.id,
                    name=name,
                    email=email,
                    employee_number=employee_number,
                    phone_number=phone_number,
                    password_hash=hash_password(password, pepper=self.settings.PASSWORD_PEPPER),
                    is_admin=is_admin,
                )
            )
            self.companies.adjust_user_count(company, +1)
        logger.info(
            "user.registered",
            extra={"event": "user.registered", "company_id": company.id, "user_id": user.id},
        )
        return user

    def update_profile(
        self,
        user_id: int,
        current_password: str,
        employee_number: str | None = None,
        phone_number: str | None = None,
        image_url: str | None = None,
        password: str | None = None,
        password_confirmation: str | None = None,
    ) -> User:
        """Every profile change must be confirmed with the current password."""
        with self.transaction():
            user = self.get(user_id)
            if not verify_password(current_password, user.password_hash, pepper=self.settings.PASSWORD_PEPPER):
                raise AuthenticationError("Current password is incorrect.")
            if password is not None:
                if password != password_confirmation:
                    raise BadRequestError("Password and confirmation do not match.")
                user.password_hash = hash_password(password, pepper=self.settings.PASSWORD_PEPPER)
            if employee_number is not None:
                user.employee_number = employee_number
            if phone_number is not None:
                user.phone_number = phone_number
            if image_url is not None:
                user.image_url = image_url
            self.db.flush()
        return user

    def list(
        self, page: int = 1, page_size: int = 10, search_by: str | None = None, keyword: str | None = None
    ) -> tuple[list[User], int]:
        return self.users.search(max(page, 1), min(max(page_size, 1), 100), search_by, keyword)

    def delete(self, user_id: int) -> None:
        with self.transaction():
            user = self.get(user_id)
            if self.users.has_contracts(user.id):
                raise ConflictError("User is assigned to contracts and cannot be deleted.")
            company = self.companies.get(user.company_id)
            self.users.delete(user)
            if company is not None:
                self.companies.adjust_user_count(company, -1)
        logger.info("user.deleted", extra={"event": "user.deleted", "user_id": user_id})
