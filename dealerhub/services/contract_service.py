"""Contract lifecycle orchestration.

Every mutation runs in one unit of work: the contract change, its meetings
and documents, and the aggregate refresh for each touched customer and car
commit together or not at all.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dealerhub.auth.policy import enforce, evaluate_contract_modification
from dealerhub.auth.tenant_context import TenantContext
from dealerhub.core.exceptions import BadRequestError, NotFoundError
from dealerhub.core.labels import parse_contract_status
from dealerhub.models import CarStatus, Contract, ContractStatus
from dealerhub.repositories import (
    CarRepository,
    ContractDocumentRepository,
    ContractRepository,
    CustomerRepository,
    UserRepository,
)
from dealerhub.services.base_service import BaseService
from dealerhub.services.contract_aggregates import AggregateSnapshot, ContractAggregateRefresher
from dealerhub.services.contract_state import contract_state_machine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractPage:
    items: list[Contract]
    total: int
    page: int
    page_size: int


def _meeting_pairs(meetings: Iterable[dict[str, Any]]) -> list[tuple[datetime, list[datetime]]]:
    pairs = []
    for meeting in meetings:
        date = meeting.get("date")
        if date is None:
            continue
        alarms = [alarm for alarm in meeting.get("alarms") or [] if alarm is not None]
        pairs.append((date, alarms))
    return pairs


class ContractService(BaseService):
    """Create, update, delete and query contracts for one tenant."""

    def __init__(self, db, settings=None) -> None:
        super().__init__(db, settings)
        self.contracts = ContractRepository(db)
        self.cars = CarRepository(db)
        self.customers = CustomerRepository(db)
        self.users = UserRepository(db)
        self.documents = ContractDocumentRepository(db)
        self.refresher = ContractAggregateRefresher(db)

    def get(self, actor: TenantContext, contract_id: int) -> Contract:
        contract = self.contracts.get(actor.company_id, contract_id)
        if contract is None:
            raise NotFoundError("Contract not found.")
        return contract

    def create(
        self,
        actor: TenantContext,
        car_id: int,
        customer_id: int,
        user_id: int | None = None,
        contract_price: int | None = None,
        meetings: Iterable[dict[str, Any]] = (),
    ) -> Contract:
        with self.transaction():
            car = self.cars.get(actor.company_id, car_id)
            if car is None:
                raise NotFoundError("Car not found.")
            if car.status != CarStatus.AVAILABLE:
                raise BadRequestError("Car is not available for a new contract.")
            if self.customers.get(actor.company_id, customer_id) is None:
                raise NotFoundError("Customer not found.")
            salesperson_id = user_id if user_id is not None else actor.user_id
            if self.users.get_in_company(actor.company_id, salesperson_id) is None:
                raise NotFoundError("User not found.")

            contract = Contract(
                company_id=actor.company_id,
                user_id=salesperson_id,
                customer_id=customer_id,
                car_id=car_id,
                status=ContractStatus.CAR_INSPECTION,
                contract_price=contract_price if contract_price is not None else car.price,
            )
            self.contracts.add(contract)
            self.contracts.replace_meetings(contract, _meeting_pairs(meetings))
            self.refresher.refresh(actor.company_id, customer_id=customer_id, car_id=car_id)

        logger.info(
            "contract.created",
            extra={"event": "contract.created", "company_id": actor.company_id, "contract_id": contract.id},
        )
        return self.get(actor, contract.id)

    def update(self, actor: TenantContext, contract_id: int, changes: dict[str, Any]) -> Contract:
        """Apply a partial update; only keys present in ``changes`` are touched."""
        with self.transaction():
            contract = self.contracts.get(actor.company_id, contract_id)
            enforce(evaluate_contract_modification(actor, contract))
            previous_customer_id = contract.customer_id
            previous_car_id = contract.car_id

            if changes.get("status") is not None:
                status = parse_contract_status(str(changes["status"]))
                if self.settings.CONTRACT_STRICT_TRANSITIONS:
                    contract_state_machine.assert_transition(contract.status, status)
                contract.status = status
            if changes.get("contract_price") is not None:
                contract.contract_price = int(changes["contract_price"])
            if "resolution_date" in changes:
                contract.resolution_date = changes["resolution_date"]
            if changes.get("customer_id") is not None and changes["customer_id"] != contract.customer_id:
                if self.customers.get(actor.company_id, changes["customer_id"]) is None:
                    raise NotFoundError("Customer not found.")
                contract.customer_id = changes["customer_id"]
            if changes.get("car_id") is not None and changes["car_id"] != contract.car_id:
                car = self.cars.get(actor.company_id, changes["car_id"])
                if car is None:
                    raise NotFoundError("Car not found.")
                if car.status != CarStatus.AVAILABLE:
                    raise BadRequestError("Car is not available for a new contract.")
                contract.car_id = changes["car_id"]
            if changes.get("meetings") is not None:
                self.contracts.replace_meetings(contract, _meeting_pairs(changes["meetings"]))
            if changes.get("contract_documents") is not None:
                self._reassociate_documents(actor, contract, changes["contract_documents"])

            self.db.flush()
            self._refresh_touched(
                actor.company_id,
                customer_ids={previous_customer_id, contract.customer_id},
                car_ids={previous_car_id, contract.car_id},
            )

        logger.info(
            "contract.updated",
            extra={"event": "contract.updated", "company_id": actor.company_id, "contract_id": contract_id},
        )
        self.db.expire_all()
        return self.get(actor, contract_id)

    def delete(self, actor: TenantContext, contract_id: int) -> AggregateSnapshot:
        with self.transaction():
            contract = self.contracts.get(actor.company_id, contract_id)
            enforce(evaluate_contract_modification(actor, contract))
            customer_id = contract.customer_id
            car_id = contract.car_id
            self.contracts.delete(contract)
            snapshot = self.refresher.refresh(actor.company_id, customer_id=customer_id, car_id=car_id)

        logger.info(
            "contract.deleted",
            extra={"event": "contract.deleted", "company_id": actor.company_id, "contract_id": contract_id},
        )
        return snapshot

    def _refresh_touched(self, company_id: int, customer_ids: set[int], car_ids: set[int]) -> None:
        customers = sorted(customer_ids)
        cars = sorted(car_ids)
        for index in range(max(len(customers), len(cars))):
            self.refresher.refresh(
                company_id,
                customer_id=customers[index] if index < len(customers) else None,
                car_id=cars[index] if index < len(cars) else None,
            )

    def _reassociate_documents(
        self, actor: TenantContext, contract: Contract, references: Iterable[Any]
    ) -> None:
        """Attach documents to ``contract``; each reference is an id or ``{"id", "file_name"}``."""
        renames: dict[int, str | None] = {}
        for reference in references:
            if isinstance(reference, dict):
                document_id = reference.get("id")
                renames[int(document_id)] = reference.get("file_name")
            else:
                renames[int(reference)] = None

        found = self.documents.get_many(actor.company_id, renames)
        missing = sorted(set(renames) - {document.id for document in found})
        if missing:
            raise BadRequestError(f"Contract documents not found: {missing}")

        already_attached = self.documents.count_for_contract(contract.id)
        incoming = sum(1 for document in found if document.contract_id != contract.id)
        if already_attached + incoming > self.settings.DOCUMENT_MAX_PER_CONTRACT:
            raise BadRequestError(
                f"A contract can hold at most {self.settings.DOCUMENT_MAX_PER_CONTRACT} documents."
            )

        for document in found:
            new_name = renames.get(document.id)
            if new_name:
                document.file_name = new_name
        self.documents.attach(found, contract.id)

    # Listing

    def list(
        self,
        actor: TenantContext,
        page: int = 1,
        page_size: int = 10,
        search_by: str | None = None,
        keyword: str | None = None,
    ) -> ContractPage:
        page_size = min(max(page_size, 1), 100)
        page = max(page, 1)
        items, total = self.contracts.search(actor.company_id, page, page_size, search_by, keyword)
        return ContractPage(items=items, total=total, page=page, page_size=page_size)

    def board(
        self,
        actor: TenantContext,
        page: int = 1,
        page_size: int = 10,
        search_by: str | None = None,
        keyword: str | None = None,
    ) -> dict[ContractStatus, ContractPage]:
        """One page of contracts per status column."""
        page_size = min(max(page_size, 1), 100)
        page = max(page, 1)
        board = {}
        for status in ContractStatus:
            items, total = self.contracts.search(
                actor.company_id, page, page_size, search_by, keyword, status=status
            )
            board[status] = ContractPage(items=items, total=total, page=page, page_size=page_size)
        return board

    def car_options(self, actor: TenantContext) -> list[tuple[int, str]]:
        return [(car.id, f"{car.model}({car.car_number})") for car in self.cars.list_available(actor.company_id)]

    def customer_options(self, actor: TenantContext) -> list[tuple[int, str]]:
        return [
            (customer.id, f"{customer.name}({customer.email})")
            for customer in self.customers.list_active(actor.company_id)
        ]

    def user_options(self, actor: TenantContext) -> list[tuple[int, str]]:
        return [(user.id, f"{user.name}({user.email})") for user in self.users.list_in_company(actor.company_id)]
