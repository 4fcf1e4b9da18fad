"""Contract document endpoints for API v1."""

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Header, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from dealerhub.api.v1._authz import authorize
from dealerhub.core.dependencies import get_db_session
from dealerhub.schemas.common import MessageResponse, OptionItem, page_meta
from dealerhub.schemas.contract_documents import (
    ContractDocumentGroup,
    ContractDocumentPage,
    DocumentRenameRequest,
    DocumentResponse,
)
from dealerhub.services.contract_document_service import ContractDocumentService, IncomingFile

router = APIRouter(prefix="/contract-documents", tags=["contract-documents"])


@router.get("", response_model=ContractDocumentPage)
def list_contract_documents(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100, alias="pageSize"),
    search_by: str | None = Query(default=None, alias="searchBy", pattern="^(contractName|userName|carNumber)$"),
    keyword: str | None = Query(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> ContractDocumentPage:
    user = authorize(authorization=authorization, scopes=["documents.read"])
    contracts, total = ContractDocumentService(db).list_by_contract(user.tenant, page, page_size, search_by, keyword)
    return ContractDocumentPage(
        **page_meta(page, page_size, total).model_dump(),
        data=[
            ContractDocumentGroup(
                id=contract.id,
                contract_name=f"{contract.car.model} - {contract.customer.name}",
                resolution_date=contract.resolution_date,
                documents_count=len(contract.documents),
                manager=contract.user.name,
                car_number=contract.car.car_number,
                documents=[{"id": doc.id, "file_name": doc.file_name} for doc in contract.documents],
            )
            for contract in contracts
        ],
    )


@router.get("/draft", response_model=list[OptionItem])
def draft_contracts(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[OptionItem]:
    user = authorize(authorization=authorization, scopes=["documents.read"])
    return [OptionItem(id=id_, data=label) for id_, label in ContractDocumentService(db).draft_options(user.tenant)]


@router.post("/upload", response_model=list[DocumentResponse], status_code=status.HTTP_201_CREATED)
def upload_documents(
    files: list[UploadFile] = File(...),
    contract_id: int | None = Form(default=None),
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> list[DocumentResponse]:
    user = authorize(authorization=authorization, scopes=["documents.write"])
    incoming = [IncomingFile(file_name=item.filename or "document", data=item.file.read()) for item in files]
    documents = ContractDocumentService(db).upload(user.tenant, incoming, contract_id=contract_id)
    return [DocumentResponse.model_validate(document) for document in documents]


@router.get("/{document_id}/download")
def download_document(
    document_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> Response:
    user = authorize(authorization=authorization, scopes=["documents.read"])
    download = ContractDocumentService(db).download(user.tenant, document_id)
    return Response(
        content=download.data,
        media_type=download.mime_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(download.file_name)}"},
    )


@router.patch("/{document_id}", response_model=DocumentResponse)
def rename_document(
    document_id: int,
    payload: DocumentRenameRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> DocumentResponse:
    user = authorize(authorization=authorization, scopes=["documents.write"])
    document = ContractDocumentService(db).rename(user.tenant, document_id, payload.file_name)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_document(
    document_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
) -> MessageResponse:
    user = authorize(authorization=authorization, scopes=["documents.write"])
    ContractDocumentService(db).delete(user.tenant, document_id)
    return MessageResponse(message="Document deleted.")
