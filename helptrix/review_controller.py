"""HTTP handlers for reviews."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from http import HTTPStatus
from uuid import UUID

from helptrix.core import (
    CannotReviewSelf,
    ProposalNotFinished,
    ProposalNotFound,
    ReviewAlreadyExists,
    ReviewProposalMismatch,
    UserType,
)
from helptrix.models import CreateReviewRequest, ReviewListItem
from helptrix.review_service import ReviewService
from helptrix.web import Request, Response, error_response

__all__ = ["ReviewController"]

logger = logging.getLogger(__name__)

_CREATE_ERROR_STATUS: tuple[tuple[tuple[type[Exception], ...], HTTPStatus], ...] = (
    (
        (CannotReviewSelf, ProposalNotFound, ReviewProposalMismatch, ProposalNotFinished),
        HTTPStatus.FORBIDDEN,
    ),
    ((ReviewAlreadyExists,), HTTPStatus.CONFLICT),
)


def _parse_uuid(text: str | None) -> UUID | None:
    try:
        return UUID(text)
    except (ValueError, TypeError, AttributeError):
        return None


def _internal_error() -> Response:
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "internal server error")


def _requester_id(
    request: Request, required: UserType, forbidden_message: str
) -> tuple[UUID | None, Response | None]:
    """Return the requester's id, or the response that rejects the request."""
    payload = request.payload
    if payload.user_type != required:
        return None, error_response(HTTPStatus.FORBIDDEN, forbidden_message)
    requester_id = _parse_uuid(payload.user_id)
    if requester_id is None:
        return None, error_response(HTTPStatus.BAD_REQUEST, "invalid user id")
    return requester_id, None


def _create_error_status(exc: Exception) -> HTTPStatus | None:
    for kinds, status in _CREATE_ERROR_STATUS:
        if isinstance(exc, kinds):
            return status
    return None


class ReviewController:
    """Maps review requests onto the review service."""

    def __init__(self, service: ReviewService) -> None:
        self.service = service

    def create(self, request: Request) -> Response:
        business_id, rejection = _requester_id(
            request, UserType.BUSINESS, "only business users can create reviews"
        )
        if rejection is not None:
            return rejection

        try:
            dto = CreateReviewRequest.from_json(request.json())
        except ValueError as exc:
            return error_response(HTTPStatus.BAD_REQUEST, str(exc))

        try:
            self.service.create_review(business_id, dto)
        except Exception as exc:
            status = _create_error_status(exc)
            if status is None:
                logger.exception("creating review failed")
                return _internal_error()
            return error_response(status, str(exc))

        return Response(int(HTTPStatus.CREATED), {"status": "created"})

    def list_business(self, request: Request) -> Response:
        return self._list(
            request,
            UserType.BUSINESS,
            "only business users can access this endpoint",
            self.service.list_business_reviews,
        )

    def list_helper(self, request: Request) -> Response:
        return self._list(
            request,
            UserType.HELPER,
            "only helper users can access this endpoint",
            self.service.list_helper_reviews,
        )

    def _list(
        self,
        request: Request,
        required: UserType,
        forbidden_message: str,
        fetch: Callable[[UUID], Sequence[ReviewListItem]],
    ) -> Response:
        requester_id, rejection = _requester_id(request, required, forbidden_message)
        if rejection is not None:
            return rejection

        try:
            reviews = fetch(requester_id)
        except Exception:
            logger.exception("listing reviews failed")
            return _internal_error()

        return Response(int(HTTPStatus.OK), [review.to_json() for review in reviews])