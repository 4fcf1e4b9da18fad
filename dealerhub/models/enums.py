"""Canonical enum values for the dealership schema."""

from __future__ import annotations

import enum


class CarType(str, enum.Enum):
    COMPACT = "COMPACT"
    MIDSIZE = "MIDSIZE"
    FULLSIZE = "FULLSIZE"
    SPORTS = "SPORTS"
    SUV = "SUV"


class CarStatus(str, enum.Enum):
    """Derived from the car's contracts; never set directly by clients."""

    AVAILABLE = "possession"
    IN_NEGOTIATION = "contractProceeding"
    SOLD = "contractCompleted"


class ContractStatus(str, enum.Enum):
    CAR_INSPECTION = "carInspection"
    PRICE_NEGOTIATION = "priceNegotiation"
    CONTRACT_DRAFT = "contractDraft"
    CONTRACT_SUCCESSFUL = "contractSuccessful"
    CONTRACT_FAILED = "contractFailed"


OPEN_CONTRACT_STATUSES = frozenset(
    {
        ContractStatus.CAR_INSPECTION,
        ContractStatus.PRICE_NEGOTIATION,
        ContractStatus.CONTRACT_DRAFT,
    }
)


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class AgeGroup(str, enum.Enum):
    TEENAGER = "TEENAGER"
    TWENTIES = "TWENTIES"
    THIRTIES = "THIRTIES"
    FORTIES = "FORTIES"
    FIFTIES = "FIFTIES"
    SIXTIES = "SIXTIES"
    SEVENTIES = "SEVENTIES"
    EIGHTIES = "EIGHTIES"


class Region(str, enum.Enum):
    SEOUL = "SEOUL"
    GYEONGGI = "GYEONGGI"
    INCHEON = "INCHEON"
    GANGWON = "GANGWON"
    CHUNGBUK = "CHUNGBUK"
    CHUNGNAM = "CHUNGNAM"
    SEJONG = "SEJONG"
    DAEJEON = "DAEJEON"
    JEONBUK = "JEONBUK"
    JEONNAM = "JEONNAM"
    GWANGJU = "GWANGJU"
    GYEONGBUK = "GYEONGBUK"
    GYEONGNAM = "GYEONGNAM"
    DAEGU = "DAEGU"
    ULSAN = "ULSAN"
    BUSAN = "BUSAN"
    JEJU = "JEJU"


class UploadType(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    CAR = "CAR"


class UploadStatus(str, enum.Enum):
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
