"""Bidirectional label tables shared by CSV ingestion and response mapping.

Each enum used in user-facing text has exactly one table here. Lookups
normalize case and surrounding whitespace; the first label registered for a
member is its display label.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Generic, TypeVar

from dealerhub.core.exceptions import ValidationError
from dealerhub.models.enums import AgeGroup, CarType, ContractStatus, Gender, Region

E = TypeVar("E", bound=enum.Enum)


def _normalize(value: str) -> str:
    return value.strip().lower()


class LabelMap(Generic[E]):
    """Map enum members to display labels and parse labels back to members."""

    def __init__(self, enum_cls: type[E], labels: dict[E, Iterable[str]], accept_names: bool = True) -> None:
        self.enum_cls = enum_cls
        self._display: dict[E, str] = {}
        self._lookup: dict[str, E] = {}
        for member, aliases in labels.items():
            aliases = list(aliases)
            self._display[member] = aliases[0]
            for alias in aliases:
                self._lookup[_normalize(alias)] = member
            if accept_names:
                self._lookup[_normalize(member.name)] = member
                self._lookup[_normalize(str(member.value))] = member
        missing = set(enum_cls) - set(self._display)
        if missing:
            raise ValueError(f"Label table for {enum_cls.__name__} misses {sorted(m.name for m in missing)}")

    def label(self, member: E) -> str:
        return self._display[member]

    def parse(self, raw: str | None) -> E | None:
        if raw is None:
            return None
        return self._lookup.get(_normalize(raw))

    def items(self) -> list[tuple[E, str]]:
        return [(member, self._display[member]) for member in self.enum_cls]


CAR_TYPE_LABELS: LabelMap[CarType] = LabelMap(
    CarType,
    {
        CarType.COMPACT: ["경·소형", "경소형", "경형", "소형"],
        CarType.MIDSIZE: ["준중·중형", "준중중형", "준중형", "중형"],
        CarType.FULLSIZE: ["대형"],
        CarType.SPORTS: ["스포츠카", "스포츠"],
        CarType.SUV: ["SUV"],
    },
)

GENDER_LABELS: LabelMap[Gender] = LabelMap(
    Gender,
    {
        Gender.MALE: ["남성", "남", "m"],
        Gender.FEMALE: ["여성", "여", "f"],
    },
)

AGE_GROUP_LABELS: LabelMap[AgeGroup] = LabelMap(
    AgeGroup,
    {
        AgeGroup.TEENAGER: ["10대"],
        AgeGroup.TWENTIES: ["20대"],
        AgeGroup.THIRTIES: ["30대"],
        AgeGroup.FORTIES: ["40대"],
        AgeGroup.FIFTIES: ["50대"],
        AgeGroup.SIXTIES: ["60대"],
        AgeGroup.SEVENTIES: ["70대"],
        AgeGroup.EIGHTIES: ["80대"],
    },
)

REGION_LABELS: LabelMap[Region] = LabelMap(
    Region,
    {
        Region.SEOUL: ["서울"],
        Region.GYEONGGI: ["경기"],
        Region.INCHEON: ["인천"],
        Region.GANGWON: ["강원"],
        Region.CHUNGBUK: ["충북"],
        Region.CHUNGNAM: ["충남"],
        Region.SEJONG: ["세종"],
        Region.DAEJEON: ["대전"],
        Region.JEONBUK: ["전북"],
        Region.JEONNAM: ["전남"],
        Region.GWANGJU: ["광주"],
        Region.GYEONGBUK: ["경북"],
        Region.GYEONGNAM: ["경남"],
        Region.DAEGU: ["대구"],
        Region.ULSAN: ["울산"],
        Region.BUSAN: ["부산"],
        Region.JEJU: ["제주"],
    },
)


def _status_key(raw: str) -> str:
    head = raw.split("|", 1)[0]
    return "".join(ch for ch in head if ch not in "_- ").lower()


_CONTRACT_STATUS_KEYS: dict[str, ContractStatus] = {
    _status_key(member.value): member for member in ContractStatus
}


def parse_contract_status(raw: str) -> ContractStatus:
    """Parse client status spellings (``contract_successful``, ``Price-Negotiation``...)."""
    status = _CONTRACT_STATUS_KEYS.get(_status_key(raw))
    if status is None:
        raise ValidationError(f"Invalid contract status: {raw!r}")
    return status
