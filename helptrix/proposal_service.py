"""Business rules for service proposals and their status transitions."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from helptrix.core import (
    NotProposalParticipant,
    ProposalAlreadyPendingForHelper,
    ProposalFinished,
    ProposalInvalidStatus,
    ProposalStatus,
    ProposalUnauthorized,
    UserType,
)
from helptrix.models import (
    CreateProposalRequest,
    Proposal,
    ProposalResponse,
    UpdateProposalStatusRequest,
)

__all__ = ["ProposalRepository", "ProposalService", "to_response"]

_TERMINAL = frozenset(
    {ProposalStatus.REFUSED.value, ProposalStatus.CANCELLED.value, ProposalStatus.FINISHED.value}
)
_VALID = frozenset(status.value for status in ProposalStatus)
_TRANSITIONS: dict[str, frozenset[str]] = {
    ProposalStatus.PENDING.value: frozenset(
        {ProposalStatus.ACCEPTED.value, ProposalStatus.REFUSED.value, ProposalStatus.CANCELLED.value}
    ),
    ProposalStatus.ACCEPTED.value: frozenset(
        {ProposalStatus.IN_PROGRESS.value, ProposalStatus.CANCELLED.value}
    ),
    ProposalStatus.IN_PROGRESS.value: frozenset(
        {ProposalStatus.FINISHED.value, ProposalStatus.CANCELLED.value}
    ),
}


class ProposalRepository(Protocol):
    """Storage for proposals; lookups of unknown ids raise ProposalNotFound."""

    def create(self, dto: CreateProposalRequest, user_id: UUID) -> Proposal: ...

    def find_by_id(self, proposal_id: UUID) -> Proposal: ...

    def update_status(self, proposal_id: UUID, status: str) -> Proposal: ...

    def list_by_user_id(self, user_id: UUID, status_filter: str) -> list[ProposalResponse]: ...

    def list_by_helper_id(self, helper_id: UUID, status_filter: str) -> list[ProposalResponse]: ...

    def has_blocking_proposal_for_helper(self, user_id: UUID, helper_id: UUID) -> bool: ...


def _status_value(status: str) -> str:
    return status.value if isinstance(status, ProposalStatus) else status


def to_response(proposal: Proposal) -> ProposalResponse:
    """Build the outward representation of a stored proposal."""
    return ProposalResponse(
        id=proposal.id,
        user_id=proposal.user_id,
        helper_id=proposal.helper_id,
        category_id=proposal.category_id,
        description=proposal.description,
        value=proposal.value,
        status=proposal.status,
        created_at=proposal.created_at,
        updated_at=proposal.updated_at,
    )


class ProposalService:
    """Creates, reads, lists and moves proposals through their lifecycle."""

    def __init__(self, repo: ProposalRepository) -> None:
        self.repo = repo

    def create(self, dto: CreateProposalRequest, user_id: UUID) -> ProposalResponse:
        if self.repo.has_blocking_proposal_for_helper(user_id, dto.helper_id):
            raise ProposalAlreadyPendingForHelper()
        return to_response(self.repo.create(dto, user_id))

    def get_by_id(self, proposal_id: UUID, requester_id: UUID) -> ProposalResponse:
        proposal = self.repo.find_by_id(proposal_id)
        if requester_id not in (proposal.user_id, proposal.helper_id):
            raise NotProposalParticipant()
        return to_response(proposal)

    def update_status(
        self,
        proposal_id: UUID,
        dto: UpdateProposalStatusRequest,
        requester_id: UUID,
        requester_type: str,
    ) -> ProposalResponse:
        proposal = self.repo.find_by_id(proposal_id)
        current = _status_value(proposal.status)
        target = _status_value(dto.status)

        if current in _TERMINAL:
            raise ProposalFinished()
        if target not in _VALID:
            raise ProposalInvalidStatus()

        if target == ProposalStatus.CANCELLED.value:
            if requester_id not in (proposal.user_id, proposal.helper_id):
                raise ProposalUnauthorized()
        elif requester_type != UserType.HELPER.value or requester_id != proposal.helper_id:
            raise ProposalUnauthorized()

        if target not in _TRANSITIONS.get(current, frozenset()):
            raise ProposalInvalidStatus()

        return to_response(self.repo.update_status(proposal_id, target))

    def list(
        self, requester_id: UUID, requester_type: str, status_filter: str
    ) -> list[ProposalResponse]:
        if requester_type == UserType.BUSINESS.value:
            return self.repo.list_by_user_id(requester_id, status_filter)
        return self.repo.list_by_helper_id(requester_id, status_filter)