"""Per-entity data accessors; every query is parameterized by company id."""

from dealerhub.repositories.car_repository import CarRepository
from dealerhub.repositories.company_repository import CompanyRepository
from dealerhub.repositories.contract_document_repository import ContractDocumentRepository
from dealerhub.repositories.contract_repository import ContractRepository
from dealerhub.repositories.customer_repository import CustomerRepository
from dealerhub.repositories.upload_repository import UploadRepository
from dealerhub.repositories.user_repository import UserRepository

__all__ = [
    "CarRepository",
    "CompanyRepository",
    "ContractDocumentRepository",
    "ContractRepository",
    "CustomerRepository",
    "UploadRepository",
    "UserRepository",
]
