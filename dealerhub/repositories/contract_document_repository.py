"""Contract document metadata access."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import joinedload, selectinload

from dealerhub.models import Car, Contract, ContractDocument, ContractStatus, Customer, User
from dealerhub.repositories.base import BaseRepository, paginate


class ContractDocumentRepository(BaseRepository[ContractDocument]):
    model = ContractDocument

    def get(self, company_id: int, document_id: int) -> ContractDocument | None:
        return (
            self.session.query(ContractDocument)
            .filter(ContractDocument.company_id == company_id, ContractDocument.id == document_id)
            .first()
        )

    def get_many(self, company_id: int, document_ids: Iterable[int]) -> list[ContractDocument]:
        ids = list(set(document_ids))
        if not ids:
            return []
        return (
            self.session.query(ContractDocument)
            .filter(ContractDocument.company_id == company_id, ContractDocument.id.in_(ids))
            .all()
        )

    def count_for_contract(self, contract_id: int) -> int:
        return self.session.query(ContractDocument).filter(ContractDocument.contract_id == contract_id).count()

    def attach(self, documents: Iterable[ContractDocument], contract_id: int | None) -> None:
        for document in documents:
            document.contract_id = contract_id
        self.session.flush()

    def contracts_with_documents(
        self,
        company_id: int,
        page: int,
        page_size: int,
        search_by: str | None = None,
        keyword: str | None = None,
    ) -> tuple[list[Contract], int]:
        query = (
            self.session.query(Contract)
            .filter(Contract.company_id == company_id, Contract.documents.any())
            .options(
                joinedload(Contract.user),
                joinedload(Contract.customer),
                joinedload(Contract.car),
                selectinload(Contract.documents),
            )
        )
        if keyword:
            clauses = {
                "contractName": Contract.customer.has(Customer.name.icontains(keyword, autoescape=True))
                | Contract.car.has(Car.model.icontains(keyword, autoescape=True)),
                "userName": Contract.user.has(User.name.icontains(keyword, autoescape=True)),
                "carNumber": Contract.car.has(Car.car_number.icontains(keyword, autoescape=True)),
            }
            if search_by in clauses:
                query = query.filter(clauses[search_by])
            else:
                clause = None
                for value in clauses.values():
                    clause = value if clause is None else clause | value
                query = query.filter(clause)
        return paginate(query.order_by(Contract.resolution_date.desc(), Contract.id.desc()), page, page_size)

    def draft_contracts(self, company_id: int) -> list[Contract]:
        return (
            self.session.query(Contract)
            .filter(Contract.company_id == company_id, Contract.status == ContractStatus.CONTRACT_DRAFT)
            .options(joinedload(Contract.customer), joinedload(Contract.car))
            .order_by(Contract.id.asc())
            .all()
        )
