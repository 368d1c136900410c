"""HTTP handlers for proposals."""

from __future__ import annotations

import functools
import logging
from http import HTTPStatus
from typing import Any, Callable, Sequence, Tuple, Type, Union
from uuid import UUID

from helptrix.core import (
    NotProposalParticipant,
    ProposalAlreadyPendingForHelper,
    ProposalFinished,
    ProposalInvalidStatus,
    ProposalNotFound,
    ProposalUnauthorized,
    UserType,
)
from helptrix.models import CreateProposalRequest, UpdateProposalStatusRequest
from helptrix.proposal_service import ProposalService
from helptrix.web import Request, Response, error_response

__all__ = ["ProposalController"]

logger = logging.getLogger(__name__)

_ErrorKinds = Union[Type[Exception], Tuple[Type[Exception], ...]]
_ErrorMap = Sequence[Tuple[_ErrorKinds, HTTPStatus]]


class _Abort(Exception):
    """Carries a finished error response out of a handler."""

    def __init__(self, response: Response) -> None:
        super().__init__(response)
        self.response = response


def _handler(func: Callable[[Any, Request], Response]) -> Callable[[Any, Request], Response]:
    @functools.wraps(func)
    def wrapper(self: Any, request: Request) -> Response:
        try:
            return func(self, request)
        except _Abort as abort:
            return abort.response

    return wrapper


def _abort(status: HTTPStatus, message: str) -> _Abort:
    return _Abort(error_response(status, message))


def _uuid(text: str | None, status: HTTPStatus, message: str) -> UUID:
    try:
        return UUID(text)
    except (ValueError, TypeError, AttributeError):
        raise _abort(status, message) from None


def _requester_id(request: Request) -> UUID:
    return _uuid(request.payload.user_id, HTTPStatus.INTERNAL_SERVER_ERROR, "internal server error")


def _proposal_id(request: Request) -> UUID:
    return _uuid(request.params.get("id"), HTTPStatus.BAD_REQUEST, "invalid proposal id")


def _body(request: Request, model: Any) -> Any:
    try:
        return model.from_json(request.json())
    except ValueError as exc:
        raise _abort(HTTPStatus.BAD_REQUEST, str(exc)) from None


def _run(call: Callable[[], Any], action: str, errors: _ErrorMap = ()) -> Any:
    try:
        return call()
    except Exception as exc:
        for kinds, status in errors:
            if isinstance(exc, kinds):
                raise _abort(status, str(exc)) from None
        logger.exception("%s failed", action)
        raise _abort(HTTPStatus.INTERNAL_SERVER_ERROR, "internal server error") from None


class ProposalController:
    """Maps proposal requests onto the proposal service."""

    def __init__(self, service: ProposalService) -> None:
        self.service = service

    @_handler
    def create(self, request: Request) -> Response:
        if request.payload.user_type != UserType.BUSINESS:
            raise _abort(HTTPStatus.FORBIDDEN, "only business users can create proposals")
        dto = _body(request, CreateProposalRequest)
        user_id = _requester_id(request)
        response = _run(
            lambda: self.service.create(dto, user_id),
            "creating proposal",
            [(ProposalAlreadyPendingForHelper, HTTPStatus.CONFLICT)],
        )
        return Response(int(HTTPStatus.CREATED), response.to_json())

    @_handler
    def get_by_id(self, request: Request) -> Response:
        proposal_id = _proposal_id(request)
        requester_id = _requester_id(request)
        response = _run(
            lambda: self.service.get_by_id(proposal_id, requester_id),
            "fetching proposal",
            [
                (ProposalNotFound, HTTPStatus.NOT_FOUND),
                (NotProposalParticipant, HTTPStatus.FORBIDDEN),
            ],
        )
        return Response(int(HTTPStatus.OK), response.to_json())

    @_handler
    def update_status(self, request: Request) -> Response:
        proposal_id = _proposal_id(request)
        dto = _body(request, UpdateProposalStatusRequest)
        requester_id = _requester_id(request)
        user_type = request.payload.user_type
        response = _run(
            lambda: self.service.update_status(proposal_id, dto, requester_id, user_type),
            "updating proposal status",
            [
                (ProposalNotFound, HTTPStatus.NOT_FOUND),
                (ProposalUnauthorized, HTTPStatus.FORBIDDEN),
                ((ProposalInvalidStatus, ProposalFinished), HTTPStatus.UNPROCESSABLE_ENTITY),
            ],
        )
        return Response(int(HTTPStatus.OK), response.to_json())

    @_handler
    def list(self, request: Request) -> Response:
        status_filter = request.query.get("status", "")
        requester_id = _requester_id(request)
        user_type = request.payload.user_type
        proposals = _run(
            lambda: self.service.list(requester_id, user_type, status_filter),
            "listing proposals",
        )
        return Response(int(HTTPStatus.OK), [proposal.to_json() for proposal in proposals])