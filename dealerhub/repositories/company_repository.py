"""Company data access."""

from __future__ import annotations

from dealerhub.models import Company
from dealerhub.repositories.base import BaseRepository, paginate


class CompanyRepository(BaseRepository[Company]):
    model = Company

    def get(self, company_id: int) -> Company | None:
        return self.session.query(Company).filter(Company.id == company_id).first()

    def find_by_name(self, name: str) -> Company | None:
        return self.session.query(Company).filter(Company.name == name).first()

    def find_by_code(self, code: str) -> Company | None:
        return self.session.query(Company).filter(Company.code == code).first()

    def find_by_name_and_code(self, name: str, code: str) -> Company | None:
        return self.session.query(Company).filter(Company.name == name, Company.code == code).first()

    def list(self, page: int, page_size: int, keyword: str | None = None) -> tuple[list[Company], int]:
        query = self.session.query(Company)
        if keyword:
            query = query.filter(Company.name.icontains(keyword, autoescape=True))
        return paginate(query.order_by(Company.id.asc()), page, page_size)

    def adjust_user_count(self, company: Company, delta: int) -> None:
        company.user_count = max(0, company.user_count + delta)
        self.session.flush()
