"""User data access."""

from __future__ import annotations

from dealerhub.models import Company, Contract, User
from dealerhub.repositories.base import BaseRepository, paginate

USER_SEARCH_FIELDS = ("companyName", "name", "email")


class UserRepository(BaseRepository[User]):
    model = User

    def get(self, user_id: int) -> User | None:
        return self.session.query(User).filter(User.id == user_id).first()

    def get_in_company(self, company_id: int, user_id: int) -> User | None:
        return self.session.query(User).filter(User.company_id == company_id, User.id == user_id).first()

    def find_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def list_in_company(self, company_id: int) -> list[User]:
        return self.session.query(User).filter(User.company_id == company_id).order_by(User.name.asc()).all()

    def search(
        self,
        page: int,
        page_size: int,
        search_by: str | None = None,
        keyword: str | None = None,
    ) -> tuple[list[User], int]:
        query = self.session.query(User).join(Company, User.company_id == Company.id)
        if keyword:
            columns = {
                "companyName": Company.name,
                "name": User.name,
                "email": User.email,
            }
            if search_by in columns:
                query = query.filter(columns[search_by].icontains(keyword, autoescape=True))
            else:
                clause = None
                for column in columns.values():
                    match = column.icontains(keyword, autoescape=True)
                    clause = match if clause is None else clause | match
                query = query.filter(clause)
        return paginate(query.order_by(User.id.asc()), page, page_size)

    def has_contracts(self, user_id: int) -> bool:
        return self.session.query(Contract.id).filter(Contract.user_id == user_id).first() is not None
