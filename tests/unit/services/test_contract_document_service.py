from __future__ import annotations

import dataclasses

import pytest

from dealerhub.core.config import get_config
from dealerhub.core.exceptions import BadRequestError, NotFoundError, ServiceError
from dealerhub.models import ContractDocument, ContractStatus
from dealerhub.services.contract_document_service import ContractDocumentService, IncomingFile, mime_type_for
from dealerhub.services.contract_service import ContractService
from dealerhub.services.document_storage import LocalDocumentStorage


@pytest.fixture
def storage(tmp_path):
    return LocalDocumentStorage(tmp_path)


def _contract(session, seed):
    company = seed.company()
    user = seed.user(company)
    contract = ContractService(session).create(
        seed.actor(user), car_id=seed.car(company).id, customer_id=seed.customer(company).id
    )
    return user, contract


def test_mime_type_is_derived_from_extension():
    assert mime_type_for("deal.PDF") == "application/pdf"
    with pytest.raises(BadRequestError):
        mime_type_for("payload.exe")


def test_upload_download_rename_delete(session, seed, storage):
    user, contract = _contract(session, seed)
    actor = seed.actor(user)
    service = ContractDocumentService(session, storage=storage)

    [document] = service.upload(actor, [IncomingFile("contract.pdf", b"%PDF-1.7")], contract_id=contract.id)
    assert document.contract_id == contract.id
    assert document.mime_type == "application/pdf"
    assert document.file_size == 8

    download = service.download(actor, document.id)
    assert download.data == b"%PDF-1.7"
    assert download.file_name == "contract.pdf"

    renamed = service.rename(actor, document.id, "signed.pdf")
    assert renamed.file_name == "signed.pdf"

    service.delete(actor, document.id)
    assert session.get(ContractDocument, document.id) is None
    assert not any(path.is_file() for path in storage.root.rglob("*"))


def test_documents_are_invisible_to_other_companies(session, seed, storage):
    user, contract = _contract(session, seed)
    service = ContractDocumentService(session, storage=storage)
    [document] = service.upload(seed.actor(user), [IncomingFile("a.png", b"png")], contract_id=contract.id)

    stranger = seed.actor(seed.user(seed.company()))
    with pytest.raises(NotFoundError):
        service.download(stranger, document.id)
    with pytest.raises(NotFoundError):
        service.upload(stranger, [IncomingFile("b.png", b"png")], contract_id=contract.id)


def test_contract_document_capacity_is_enforced(session, seed, storage):
    user, contract = _contract(session, seed)
    settings = dataclasses.replace(get_config(), DOCUMENT_MAX_PER_CONTRACT=2)
    service = ContractDocumentService(session, settings=settings, storage=storage)
    actor = seed.actor(user)
    service.upload(actor, [IncomingFile("1.pdf", b"1"), IncomingFile("2.pdf", b"2")], contract_id=contract.id)

    with pytest.raises(BadRequestError):
        service.upload(actor, [IncomingFile("3.pdf", b"3")], contract_id=contract.id)
    assert session.query(ContractDocument).count() == 2


def test_contract_update_attaches_uploaded_documents(session, seed, storage):
    user, contract = _contract(session, seed)
    actor = seed.actor(user)
    documents = ContractDocumentService(session, storage=storage).upload(
        actor, [IncomingFile("draft.docx", b"doc"), IncomingFile("id.jpg", b"jpg")]
    )
    assert all(document.contract_id is None for document in documents)

    updated = ContractService(session).update(
        actor,
        contract.id,
        {
            "status": "contractDraft",
            "contract_documents": [documents[0].id, {"id": documents[1].id, "file_name": "license.jpg"}],
        },
    )

    assert updated.status == ContractStatus.CONTRACT_DRAFT
    assert sorted(document.file_name for document in updated.documents) == ["draft.docx", "license.jpg"]

    with pytest.raises(BadRequestError):
        ContractService(session).update(actor, contract.id, {"contract_documents": [9999]})


def test_draft_options_and_document_listing(session, seed, storage):
    user, contract = _contract(session, seed)
    actor = seed.actor(user)
    ContractService(session).update(actor, contract.id, {"status": "contractDraft"})
    service = ContractDocumentService(session, storage=storage)

    assert [contract_id for contract_id, _ in service.draft_options(actor)] == [contract.id]

    items, total = service.list_by_contract(actor)
    assert total == 0
    service.upload(actor, [IncomingFile("a.pdf", b"a")], contract_id=contract.id)
    items, total = service.list_by_contract(actor)
    assert total == 1
    assert items[0].id == contract.id


def test_storage_failure_is_a_service_error(session, seed, storage, monkeypatch):
    user, contract = _contract(session, seed)

    def _broken_save(company_id, file_name, data):
        raise OSError("disk full")

    monkeypatch.setattr(storage, "save", _broken_save)
    with pytest.raises(ServiceError):
        ContractDocumentService(session, storage=storage).upload(
            seed.actor(user), [IncomingFile("a.pdf", b"a")], contract_id=contract.id
        )
    assert session.query(ContractDocument).count() == 0
