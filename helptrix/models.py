"""Domain records and request/response shapes with JSON conversion."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

__all__ = [
    "AuthPayload",
    "Proposal",
    "CreateProposalRequest",
    "UpdateProposalStatusRequest",
    "ProposalResponse",
    "Review",
    "CreateReviewRequest",
    "ReviewListItem",
    "ServiceCategory",
    "CreateServiceRequest",
    "UpdateServiceRequest",
    "ServiceResponse",
]


def _object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("request body must be a JSON object")
    return data


def _check(key: str, value: Any, kind: type | tuple[type, ...]) -> Any:
    if isinstance(value, bool) and kind is not bool:
        raise ValueError(f"field '{key}' has the wrong type")
    if not isinstance(value, kind):
        raise ValueError(f"field '{key}' has the wrong type")
    return value


def _required(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise ValueError(f"field '{key}' is required")
    return _check(key, value, kind)


def _optional(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = data.get(key)
    return None if value is None else _check(key, value, kind)


def _uuid(key: str, value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"field '{key}' is not a valid UUID") from exc


def _timestamp(key: str, value: str) -> datetime:
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"field '{key}' is not a valid timestamp") from exc


def _strings(key: str, value: list) -> list[str]:
    if not all(isinstance(item, str) for item in value):
        raise ValueError(f"field '{key}' must be a list of strings")
    return list(value)


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


@dataclass(frozen=True)
class AuthPayload:
    """Identity of the authenticated caller."""

    user_id: str
    user_type: str


@dataclass
class Proposal:
    """A stored proposal from a business to a helper."""

    id: UUID
    user_id: UUID
    helper_id: UUID
    category_id: int
    description: str
    value: float
    status: str
    created_at: datetime
    updated_at: datetime


@dataclass
class CreateProposalRequest:
    helper_id: UUID
    category_id: int
    description: str
    value: float

    @classmethod
    def from_json(cls, data: Any) -> CreateProposalRequest:
        body = _object(data)
        return cls(
            helper_id=_uuid("helper_id", _required(body, "helper_id", str)),
            category_id=_required(body, "category_id", int),
            description=_required(body, "description", str),
            value=float(_required(body, "value", (int, float))),
        )


@dataclass
class UpdateProposalStatusRequest:
    status: str

    @classmethod
    def from_json(cls, data: Any) -> UpdateProposalStatusRequest:
        return cls(status=_required(_object(data), "status", str))


@dataclass
class ProposalResponse:
    id: UUID
    user_id: UUID
    helper_id: UUID
    category_id: int
    description: str
    value: float
    status: str
    created_at: datetime
    updated_at: datetime

    def to_json(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "helper_id": str(self.helper_id),
            "category_id": self.category_id,
            "description": self.description,
            "value": self.value,
            "status": str(self.status.value if hasattr(self.status, "value") else self.status),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass
class Review:
    """A stored review of a helper written by a business."""

    proposal_id: UUID
    business_id: UUID
    helper_id: UUID
    rate: int
    review: str
    service_type: str
    created_at: datetime | None = None
    id: UUID | None = None


@dataclass
class CreateReviewRequest:
    proposal_id: str
    helper_id: str
    rate: int
    review: str = ""
    service_type: str = ""

    @classmethod
    def from_json(cls, data: Any) -> CreateReviewRequest:
        body = _object(data)
        return cls(
            proposal_id=_required(body, "proposal_id", str),
            helper_id=_required(body, "helper_id", str),
            rate=_required(body, "rate", int),
            review=_optional(body, "review", str) or "",
            service_type=_optional(body, "service_type", str) or "",
        )


@dataclass
class ReviewListItem:
    rate: int
    review: str
    service_type: str
    created_at: datetime | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "rate": self.rate,
            "review": self.review,
            "service_type": self.service_type,
            "created_at": _iso(self.created_at),
        }


@dataclass
class ServiceCategory:
    id: int
    name: str


@dataclass
class CreateServiceRequest:
    name: str
    description: str
    actuation_days: list[str]
    value: str
    start_time: str
    end_time: str
    offer_since: datetime
    category_id: int
    photos: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> CreateServiceRequest:
        body = _object(data)
        photos = _optional(body, "photos", list)
        return cls(
            name=_required(body, "name", str),
            description=_required(body, "description", str),
            actuation_days=_strings("actuation_days", _required(body, "actuation_days", list)),
            value=_required(body, "value", str),
            start_time=_required(body, "start_time", str),
            end_time=_required(body, "end_time", str),
            offer_since=_timestamp("offer_since", _required(body, "offer_since", str)),
            category_id=_required(body, "category_id", int),
            photos=_strings("photos", photos) if photos is not None else [],
        )


@dataclass
class UpdateServiceRequest:
    """Partial update: every field left as None is kept unchanged."""

    name: str | None = None
    description: str | None = None
    actuation_days: list[str] | None = None
    value: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    offer_since: datetime | None = None
    category_id: int | None = None
    photos: list[str] | None = None

    @classmethod
    def from_json(cls, data: Any) -> UpdateServiceRequest:
        body = _object(data)
        days = _optional(body, "actuation_days", list)
        photos = _optional(body, "photos", list)
        since = _optional(body, "offer_since", str)
        return cls(
            name=_optional(body, "name", str),
            description=_optional(body, "description", str),
            actuation_days=_strings("actuation_days", days) if days is not None else None,
            value=_optional(body, "value", str),
            start_time=_optional(body, "start_time", str),
            end_time=_optional(body, "end_time", str),
            offer_since=_timestamp("offer_since", since) if since is not None else None,
            category_id=_optional(body, "category_id", int),
            photos=_strings("photos", photos) if photos is not None else None,
        )


@dataclass
class ServiceResponse:
    id: UUID
    name: str
    description: str
    actuation_days: list[str]
    value: Decimal
    start_time: str
    end_time: str
    offer_since: datetime
    category: ServiceCategory
    photos: list[str] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "actuation_days": list(self.actuation_days),
            "value": str(self.value),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "offer_since": _iso(self.offer_since),
            "category": {"id": self.category.id, "name": self.category.name},
            "photos": list(self.photos),
        }