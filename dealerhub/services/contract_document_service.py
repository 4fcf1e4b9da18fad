"""Contract document metadata; blobs live in the document storage collaborator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from dealerhub.auth.tenant_context import TenantContext
from dealerhub.core.exceptions import BadRequestError, NotFoundError, PayloadTooLargeError, ServiceError
from dealerhub.models import Contract, ContractDocument
from dealerhub.repositories import ContractDocumentRepository, ContractRepository
from dealerhub.services.base_service import BaseService
from dealerhub.services.document_storage import LocalDocumentStorage

logger = logging.getLogger(__name__)

DOCUMENT_MIME_TYPES = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".csv": "text/csv",
}


@dataclass(frozen=True)
class IncomingFile:
    file_name: str
    data: bytes


@dataclass(frozen=True)
class DocumentDownload:
    file_name: str
    mime_type: str
    data: bytes


def mime_type_for(file_name: str) -> str:
    extension = Path(file_name).suffix.lower()
    if extension not in DOCUMENT_MIME_TYPES:
        raise BadRequestError(
            f"Unsupported document type {extension or file_name!r}; allowed: {', '.join(DOCUMENT_MIME_TYPES)}"
        )
    return DOCUMENT_MIME_TYPES[extension]


class ContractDocumentService(BaseService):
    def __init__(self, db, settings=None, storage: LocalDocumentStorage | None = None) -> None:
        super().__init__(db, settings)
        self.storage = storage or LocalDocumentStorage(self.settings.DOCUMENT_STORAGE_DIR)
        self.documents = ContractDocumentRepository(db)
        self.contracts = ContractRepository(db)

    def upload(
        self, actor: TenantContext, files: list[IncomingFile], contract_id: int | None = None
    ) -> list[ContractDocument]:
        """Store blobs and record metadata, optionally attaching them to a contract."""
        if not files:
            raise BadRequestError("No files were uploaded.")
        prepared = []
        for incoming in files:
            mime_type = mime_type_for(incoming.file_name)
            if len(incoming.data) > self.settings.DOCUMENT_MAX_BYTES:
                raise PayloadTooLargeError(f"{incoming.file_name} exceeds the document size limit.")
            prepared.append((incoming, mime_type))

        with self.transaction():
            if contract_id is not None:
                self._check_capacity(actor, contract_id, len(prepared))
            saved_keys: list[str] = []
            created = []
            try:
                for incoming, mime_type in prepared:
                    try:
                        key = self.storage.save(actor.company_id, incoming.file_name, incoming.data)
                    except OSError as exc:
                        raise ServiceError(f"Could not store {incoming.file_name}.") from exc
                    saved_keys.append(key)
                    created.append(
                        self.documents.add(
                            ContractDocument(
                                company_id=actor.company_id,
                                contract_id=contract_id,
                                uploaded_by_id=actor.user_id,
                                file_name=incoming.file_name,
                                file_path=key,
                                file_size=len(incoming.data),
                                mime_type=mime_type,
                            )
                        )
                    )
            except Exception:
                for key in saved_keys:
                    self.storage.delete(key)
                raise
        logger.info(
            "contract_document.uploaded",
            extra={"event": "contract_document.uploaded", "company_id": actor.company_id, "contract_id": contract_id},
        )
        return created

    def _check_capacity(self, actor: TenantContext, contract_id: int, incoming: int) -> Contract:
        contract = self.contracts.get(actor.company_id, contract_id)
        if contract is None:
            raise NotFoundError("Contract not found.")
        limit = self.settings.DOCUMENT_MAX_PER_CONTRACT
        if self.documents.count_for_contract(contract_id) + incoming > limit:
            raise BadRequestError(f"A contract can hold at most {limit} documents.")
        return contract

    def list_by_contract(
        self,
        actor: TenantContext,
        page: int = 1,
        page_size: int = 10,
        search_by: str | None = None,
        keyword: str | None = None,
    ) -> tuple[list[Contract], int]:
        return self.documents.contracts_with_documents(
            actor.company_id, max(page, 1), min(max(page_size, 1), 100), search_by, keyword
        )

    def draft_options(self, actor: TenantContext) -> list[tuple[int, str]]:
        return [
            (contract.id, f"[{contract.car.car_number}] {contract.customer.name} {contract.car.model}")
            for contract in self.documents.draft_contracts(actor.company_id)
        ]

    def download(self, actor: TenantContext, document_id: int) -> DocumentDownload:
        document = self.documents.get(actor.company_id, document_id)
        if document is None:
            raise NotFoundError("Document not found.")
        try:
            data = self.storage.read(document.file_path)
        except FileNotFoundError as exc:
            raise NotFoundError("Document file is missing from storage.") from exc
        return DocumentDownload(file_name=document.file_name, mime_type=document.mime_type, data=data)

    def rename(self, actor: TenantContext, document_id: int, file_name: str) -> ContractDocument:
        mime_type_for(file_name)
        with self.transaction():
            document = self.documents.get(actor.company_id, document_id)
            if document is None:
                raise NotFoundError("Document not found.")
            document.file_name = file_name
        return document

    def delete(self, actor: TenantContext, document_id: int) -> None:
        with self.transaction():
            document = self.documents.get(actor.company_id, document_id)
            if document is None:
                raise NotFoundError("Document not found.")
            key = document.file_path
            self.documents.delete(document)
        self.storage.delete(key)
