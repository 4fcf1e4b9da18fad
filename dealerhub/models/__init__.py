"""SQLAlchemy model package for the dealership schema."""

from dealerhub.models.base import Base
from dealerhub.models.car import Car
from dealerhub.models.company import Company
from dealerhub.models.contract import Contract, Meeting, MeetingAlarm
from dealerhub.models.contract_document import ContractDocument
from dealerhub.models.customer import Customer
from dealerhub.models.enums import (
    OPEN_CONTRACT_STATUSES,
    AgeGroup,
    CarStatus,
    CarType,
    ContractStatus,
    Gender,
    Region,
    UploadStatus,
    UploadType,
)
from dealerhub.models.upload import Upload
from dealerhub.models.user import User

__all__ = [
    "AgeGroup",
    "Base",
    "Car",
    "CarStatus",
    "CarType",
    "Company",
    "Contract",
    "ContractDocument",
    "ContractStatus",
    "Customer",
    "Gender",
    "Meeting",
    "MeetingAlarm",
    "OPEN_CONTRACT_STATUSES",
    "Region",
    "Upload",
    "UploadStatus",
    "UploadType",
    "User",
]
