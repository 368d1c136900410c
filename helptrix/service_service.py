"""Business rules for the services that helpers offer."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from helptrix.core import (
    CategoryNotAssignedToUser,
    HelperOnly,
    InvalidEndTimeFormat,
    InvalidStartTimeFormat,
    ServiceNameNotUnique,
    UserType,
    is_hhmm,
    parse_positive_decimal,
)
from helptrix.models import CreateServiceRequest, ServiceResponse, UpdateServiceRequest

__all__ = ["ServiceRepository", "ServiceService"]


class ServiceRepository(Protocol):
    """Storage for services; lookups of unknown ids raise ServiceNotFound."""

    def create(self, user_id: UUID, dto: CreateServiceRequest) -> ServiceResponse: ...

    def exists_by_name_and_user(self, name: str, user_id: UUID) -> bool: ...

    def exists_by_name_and_user_excluding(
        self, name: str, user_id: UUID, exclude_id: UUID
    ) -> bool: ...

    def user_has_category(self, user_id: UUID, category_id: int) -> bool: ...

    def list(self, user_id: UUID) -> list[ServiceResponse]: ...

    def get_by_id(self, service_id: UUID, user_id: UUID) -> ServiceResponse: ...

    def update(
        self, service_id: UUID, user_id: UUID, dto: UpdateServiceRequest
    ) -> ServiceResponse: ...

    def delete(self, service_id: UUID, user_id: UUID) -> None: ...


def _type_value(user_type: str) -> str:
    return user_type.value if isinstance(user_type, UserType) else user_type


def _require_helper(user_type: str) -> None:
    if _type_value(user_type) != UserType.HELPER.value:
        raise HelperOnly()


class ServiceService:
    """Validates and manages the service offerings of helper users."""

    def __init__(self, repo: ServiceRepository) -> None:
        self.repo = repo

    def create(
        self, user_id: UUID, user_type: str, dto: CreateServiceRequest
    ) -> ServiceResponse:
        _require_helper(user_type)
        parse_positive_decimal(dto.value)
        if not is_hhmm(dto.start_time):
            raise InvalidStartTimeFormat()
        if not is_hhmm(dto.end_time):
            raise InvalidEndTimeFormat()
        if not self.repo.user_has_category(user_id, dto.category_id):
            raise CategoryNotAssignedToUser()
        if self.repo.exists_by_name_and_user(dto.name, user_id):
            raise ServiceNameNotUnique()
        return self.repo.create(user_id, dto)

    def list(self, user_id: UUID, user_type: str) -> list[ServiceResponse]:
        _require_helper(user_type)
        return self.repo.list(user_id)

    def get_by_id(self, service_id: UUID, user_id: UUID, user_type: str) -> ServiceResponse:
        _require_helper(user_type)
        return self.repo.get_by_id(service_id, user_id)

    def update(
        self, service_id: UUID, user_id: UUID, user_type: str, dto: UpdateServiceRequest
    ) -> ServiceResponse:
        _require_helper(user_type)
        if dto.value is not None:
            parse_positive_decimal(dto.value)
        if dto.start_time is not None and not is_hhmm(dto.start_time):
            raise InvalidStartTimeFormat()
        if dto.end_time is not None and not is_hhmm(dto.end_time):
            raise InvalidEndTimeFormat()
        if dto.category_id is not None and not self.repo.user_has_category(
            user_id, dto.category_id
        ):
            raise CategoryNotAssignedToUser()
        if dto.name is not None and self.repo.exists_by_name_and_user_excluding(
            dto.name, user_id, service_id
        ):
            raise ServiceNameNotUnique()
        return self.repo.update(service_id, user_id, dto)

    def delete(self, service_id: UUID, user_id: UUID, user_type: str) -> None:
        _require_helper(user_type)
        self.repo.delete(service_id, user_id)