from __future__ import annotations

import pytest

from dealerhub.core import config as config_module
from dealerhub.core.exceptions import BadRequestError, ConfigurationError
from dealerhub.core.labels import (
    AGE_GROUP_LABELS,
    CAR_TYPE_LABELS,
    GENDER_LABELS,
    REGION_LABELS,
    LabelMap,
    parse_contract_status,
)
from dealerhub.models import AgeGroup, CarType, ContractStatus, Gender, Region


def test_car_type_labels_are_bidirectional():
    for car_type, label in CAR_TYPE_LABELS.items():
        assert CAR_TYPE_LABELS.parse(label) is car_type
    assert CAR_TYPE_LABELS.label(CarType.MIDSIZE) == "준중·중형"
    assert CAR_TYPE_LABELS.parse(" suv ") is CarType.SUV
    assert CAR_TYPE_LABELS.parse("FULLSIZE") is CarType.FULLSIZE
    assert CAR_TYPE_LABELS.parse("tractor") is None


def test_customer_labels_parse_korean_and_canonical_values():
    assert GENDER_LABELS.parse("여성") is Gender.FEMALE
    assert GENDER_LABELS.parse("male") is Gender.MALE
    assert AGE_GROUP_LABELS.parse("40대") is AgeGroup.FORTIES
    assert REGION_LABELS.parse("제주") is Region.JEJU
    assert [region for region, _ in REGION_LABELS.items()] == list(Region)


def test_label_map_must_cover_every_member():
    with pytest.raises(ValueError):
        LabelMap(Gender, {Gender.MALE: ["남성"]})


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("contractSuccessful", ContractStatus.CONTRACT_SUCCESSFUL),
        ("contract_successful", ContractStatus.CONTRACT_SUCCESSFUL),
        ("Price-Negotiation", ContractStatus.PRICE_NEGOTIATION),
        ("carInspection|draft", ContractStatus.CAR_INSPECTION),
    ],
)
def test_contract_status_spellings(raw, expected):
    assert parse_contract_status(raw) is expected


def test_unknown_contract_status_is_bad_request():
    with pytest.raises(BadRequestError):
        parse_contract_status("delivered")


def test_production_rejects_placeholder_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql://user:pw@db.internal:5432/dealerhub")
    with pytest.raises(ConfigurationError):
        config_module._build_config("production")

    monkeypatch.setenv("JWT_SECRET", "a-real-secret")
    cfg = config_module._build_config("production")
    assert cfg.is_production
    assert cfg.DEBUG is False
    assert cfg.DB_CONNECTIVITY_REQUIRED is True


def test_invalid_settings_are_rejected(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "mysql://localhost/db")
    with pytest.raises(ConfigurationError):
        config_module._build_config("development")

    monkeypatch.setenv("DATABASE_URL", "sqlite:///./test.db")
    monkeypatch.setenv("CSV_BATCH_SIZE", "0")
    with pytest.raises(ConfigurationError):
        config_module._build_config("development")


def test_config_defaults(monkeypatch):
    for name in ("CSV_BATCH_SIZE", "CONTRACT_STRICT_TRANSITIONS", "DEFAULT_UTC_OFFSET_HOURS", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    cfg = config_module._build_config("development")
    assert cfg.CSV_BATCH_SIZE == 1000
    assert cfg.CONTRACT_STRICT_TRANSITIONS is False
    assert cfg.DEFAULT_UTC_OFFSET_HOURS == 9
    assert cfg.API_PREFIX.startswith("/")
