"""HTTP handlers for the services offered by helpers."""

from __future__ import annotations

import logging
from http import HTTPStatus
from uuid import UUID

from helptrix.core import (
    CategoryNotAssignedToUser,
    HelperOnly,
    InvalidEndTimeFormat,
    InvalidStartTimeFormat,
    InvalidValueFormat,
    ServiceNameNotUnique,
    ServiceNotFound,
    ValueNotPositive,
)
from helptrix.models import CreateServiceRequest, UpdateServiceRequest
from helptrix.service_service import ServiceService
from helptrix.web import Request, Response, error_response

__all__ = ["ServiceController"]

logger = logging.getLogger(__name__)

_ErrorMap = tuple[tuple[tuple[type[Exception], ...], HTTPStatus], ...]

_VALIDATION_ERRORS = (
    InvalidValueFormat,
    ValueNotPositive,
    InvalidStartTimeFormat,
    InvalidEndTimeFormat,
)

_CREATE_ERRORS: _ErrorMap = (
    ((HelperOnly,), HTTPStatus.FORBIDDEN),
    ((CategoryNotAssignedToUser,), HTTPStatus.UNPROCESSABLE_ENTITY),
    ((ServiceNameNotUnique,), HTTPStatus.CONFLICT),
    (_VALIDATION_ERRORS, HTTPStatus.BAD_REQUEST),
)
_LIST_ERRORS: _ErrorMap = (((HelperOnly,), HTTPStatus.FORBIDDEN),)
_LOOKUP_ERRORS: _ErrorMap = (
    ((HelperOnly,), HTTPStatus.FORBIDDEN),
    ((ServiceNotFound,), HTTPStatus.NOT_FOUND),
)
_UPDATE_ERRORS: _ErrorMap = (
    ((HelperOnly,), HTTPStatus.FORBIDDEN),
    ((ServiceNotFound,), HTTPStatus.NOT_FOUND),
    ((ServiceNameNotUnique,), HTTPStatus.CONFLICT),
    ((CategoryNotAssignedToUser,), HTTPStatus.UNPROCESSABLE_ENTITY),
    (_VALIDATION_ERRORS, HTTPStatus.BAD_REQUEST),
)


def _parse_uuid(text: str | None) -> UUID | None:
    try:
        return UUID(text)
    except (ValueError, TypeError, AttributeError):
        return None


def _failure(exc: Exception, known: _ErrorMap, action: str) -> Response:
    for kinds, status in known:
        if isinstance(exc, kinds):
            return error_response(status, str(exc))
    logger.error("%s failed: %s", action, exc)
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "internal server error")


def _invalid_user() -> Response:
    return error_response(HTTPStatus.BAD_REQUEST, "invalid user id")


def _invalid_service() -> Response:
    return error_response(HTTPStatus.BAD_REQUEST, "invalid service id")


class ServiceController:
    """Maps service requests onto the service-offering service."""

    def __init__(self, service: ServiceService) -> None:
        self.service = service

    def create(self, request: Request) -> Response:
        payload = request.payload
        user_id = _parse_uuid(payload.user_id)
        if user_id is None:
            return _invalid_user()

        try:
            dto = CreateServiceRequest.from_json(request.json())
        except ValueError as exc:
            return error_response(HTTPStatus.BAD_REQUEST, str(exc))

        try:
            response = self.service.create(user_id, payload.user_type, dto)
        except Exception as exc:
            return _failure(exc, _CREATE_ERRORS, "creating service")

        return Response(int(HTTPStatus.CREATED), response.to_json())

    def list(self, request: Request) -> Response:
        payload = request.payload
        user_id = _parse_uuid(payload.user_id)
        if user_id is None:
            return _invalid_user()

        try:
            services = self.service.list(user_id, payload.user_type)
        except Exception as exc:
            return _failure(exc, _LIST_ERRORS, "listing services")

        return Response(int(HTTPStatus.OK), [service.to_json() for service in services])

    def get_by_id(self, request: Request) -> Response:
        payload = request.payload
        user_id = _parse_uuid(payload.user_id)
        if user_id is None:
            return _invalid_user()

        service_id = _parse_uuid(request.params.get("id"))
        if service_id is None:
            return _invalid_service()

        try:
            response = self.service.get_by_id(service_id, user_id, payload.user_type)
        except Exception as exc:
            return _failure(exc, _LOOKUP_ERRORS, "fetching service")

        return Response(int(HTTPStatus.OK), response.to_json())

    def update(self, request: Request) -> Response:
        payload = request.payload
        user_id = _parse_uuid(payload.user_id)
        if user_id is None:
            return _invalid_user()

        service_id = _parse_uuid(request.params.get("id"))
        if service_id is None:
            return _invalid_service()

        try:
            dto = UpdateServiceRequest.from_json(request.json())
        except ValueError as exc:
            return error_response(HTTPStatus.BAD_REQUEST, str(exc))

        try:
            response = self.service.update(service_id, user_id, payload.user_type, dto)
        except Exception as exc:
            return _failure(exc, _UPDATE_ERRORS, "updating service")

        return Response(int(HTTPStatus.OK), response.to_json())

    def delete(self, request: Request) -> Response:
        payload = request.payload
        user_id = _parse_uuid(payload.user_id)
        if user_id is None:
            return _invalid_user()

        service_id = _parse_uuid(request.params.get("id"))
        if service_id is None:
            return _invalid_service()

        try:
            self.service.delete(service_id, user_id, payload.user_type)
        except Exception as exc:
            return _failure(exc, _LOOKUP_ERRORS, "deleting service")

        return Response(int(HTTPStatus.NO_CONTENT))