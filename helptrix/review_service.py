"""Business rules for reviews that businesses leave for helpers."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from helptrix.core import CannotReviewSelf
from helptrix.models import CreateReviewRequest, Review, ReviewListItem

__all__ = ["ReviewRepository", "ReviewService"]


class ReviewRepository(Protocol):
    """Storage for reviews; create raises the domain errors on conflicts."""

    def create(self, review: Review) -> None: ...

    def list_by_business(self, business_id: UUID) -> list[Review]: ...

    def list_by_helper(self, helper_id: UUID) -> list[Review]: ...

    def get_by_business_and_helper(self, business_id: UUID, helper_id: UUID) -> Review | None: ...


class ReviewService:
    """Creates reviews and lists them for either side."""

    def __init__(self, repo: ReviewRepository) -> None:
        self.repo = repo

    def create_review(self, business_id: UUID, dto: CreateReviewRequest) -> None:
        """Store a review; raises ValueError for malformed ids."""
        proposal_id = UUID(dto.proposal_id)
        helper_id = UUID(dto.helper_id)
        if business_id == helper_id:
            raise CannotReviewSelf()
        self.repo.create(
            Review(
                proposal_id=proposal_id,
                business_id=business_id,
                helper_id=helper_id,
                rate=dto.rate,
                review=dto.review,
                service_type=dto.service_type,
            )
        )

    def list_business_reviews(self, business_id: UUID) -> list[ReviewListItem]:
        # The business does not see its own review text in the listing.
        return [
            ReviewListItem(rate=r.rate, review="", service_type=r.service_type, created_at=r.created_at)
            for r in self.repo.list_by_business(business_id)
        ]

    def list_helper_reviews(self, helper_id: UUID) -> list[ReviewListItem]:
        return [
            ReviewListItem(
                rate=r.rate, review=r.review, service_type=r.service_type, created_at=r.created_at
            )
            for r in self.repo.list_by_helper(helper_id)
        ]