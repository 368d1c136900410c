"""Shared vocabulary: user types, proposal statuses, domain errors and validators."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from enum import Enum

__all__ = [
    "UserType",
    "ProposalStatus",
    "HelptrixError",
    "ProposalAlreadyPendingForHelper",
    "ProposalNotFound",
    "NotProposalParticipant",
    "ProposalUnauthorized",
    "ProposalInvalidStatus",
    "ProposalFinished",
    "CannotReviewSelf",
    "ReviewProposalMismatch",
    "ProposalNotFinished",
    "ReviewAlreadyExists",
    "HelperOnly",
    "CategoryNotAssignedToUser",
    "ServiceNameNotUnique",
    "InvalidValueFormat",
    "ValueNotPositive",
    "InvalidStartTimeFormat",
    "InvalidEndTimeFormat",
    "ServiceNotFound",
    "NotOwner",
    "UserNotFound",
    "InvalidImageType",
    "is_hhmm",
    "parse_positive_decimal",
]


class UserType(str, Enum):
    """Kinds of account on the platform."""

    BUSINESS = "business"
    HELPER = "helper"


class ProposalStatus(str, Enum):
    """Lifecycle states of a service proposal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REFUSED = "refused"
    IN_PROGRESS = "in progress"
    CANCELLED = "cancelled"
    FINISHED = "finished"


class HelptrixError(Exception):
    """Base class of every domain error; carries a client-facing message."""

    message = "helptrix error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class ProposalAlreadyPendingForHelper(HelptrixError):
    message = "there is already an open proposal for this helper"


class ProposalNotFound(HelptrixError):
    message = "proposal not found"


class NotProposalParticipant(HelptrixError):
    message = "user is not a participant of this proposal"


class ProposalUnauthorized(HelptrixError):
    message = "user is not allowed to change this proposal"


class ProposalInvalidStatus(HelptrixError):
    message = "invalid proposal status"


class ProposalFinished(HelptrixError):
    message = "proposal is already in a final status"


class CannotReviewSelf(HelptrixError):
    message = "users cannot review themselves"


class ReviewProposalMismatch(HelptrixError):
    message = "review does not match the proposal"


class ProposalNotFinished(HelptrixError):
    message = "proposal is not finished"


class ReviewAlreadyExists(HelptrixError):
    message = "review already exists"


class HelperOnly(HelptrixError):
    message = "only helper users can access this resource"


class CategoryNotAssignedToUser(HelptrixError):
    message = "category is not assigned to the user"


class ServiceNameNotUnique(HelptrixError):
    message = "service name already in use"


class InvalidValueFormat(HelptrixError):
    message = "invalid value format"


class ValueNotPositive(HelptrixError):
    message = "value must be greater than zero"


class InvalidStartTimeFormat(HelptrixError):
    message = "start_time must be in HH:MM format"


class InvalidEndTimeFormat(HelptrixError):
    message = "end_time must be in HH:MM format"


class ServiceNotFound(HelptrixError):
    message = "service not found"


class NotOwner(HelptrixError):
    message = "requester is not the owner of this resource"


class UserNotFound(HelptrixError):
    message = "user not found"


class InvalidImageType(HelptrixError):
    message = "invalid image type"


_HHMM = re.compile(r"([01]\d|2[0-3]):[0-5]\d")
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def is_hhmm(value: str) -> bool:
    """Return True when *value* is a 24-hour clock time written as HH:MM."""
    return bool(_HHMM.fullmatch(value))


def parse_positive_decimal(value: str) -> Decimal:
    """Parse a decimal amount, requiring it to be strictly positive."""
    if not _DECIMAL.fullmatch(value):
        raise InvalidValueFormat()
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise InvalidValueFormat() from exc
    if amount <= 0:
        raise ValueNotPositive()
    return amount