from uuid import uuid4

import pytest

from helptrix.core import CannotReviewSelf
from helptrix.models import CreateReviewRequest, Review
from helptrix.review_service import ReviewService


class FakeReviewRepo:
    def __init__(self, by_business=None, by_helper=None):
        self.created = []
        self.by_business = by_business or {}
        self.by_helper = by_helper or {}

    def create(self, review):
        self.created.append(review)

    def list_by_business(self, business_id):
        return self.by_business[business_id]

    def list_by_helper(self, helper_id):
        return self.by_helper[helper_id]

    def get_by_business_and_helper(self, business_id, helper_id):
        return None


def test_create_review_success():
    repo = FakeReviewRepo()
    business_id, helper_id, proposal_id = uuid4(), uuid4(), uuid4()
    dto = CreateReviewRequest(
        proposal_id=str(proposal_id), helper_id=str(helper_id), rate=5,
        review="Great service!", service_type="Plumbing",
    )
    ReviewService(repo).create_review(business_id, dto)
    assert len(repo.created) == 1
    stored = repo.created[0]
    assert (stored.proposal_id, stored.business_id, stored.helper_id) == (
        proposal_id, business_id, helper_id,
    )
    assert (stored.rate, stored.review, stored.service_type) == (5, "Great service!", "Plumbing")


def test_create_review_self_review():
    repo = FakeReviewRepo()
    user_id = uuid4()
    dto = CreateReviewRequest(str(uuid4()), str(user_id), 5, "Self review", "Plumbing")
    with pytest.raises(CannotReviewSelf):
        ReviewService(repo).create_review(user_id, dto)
    assert repo.created == []


def test_create_review_invalid_helper_uuid():
    repo = FakeReviewRepo()
    dto = CreateReviewRequest(str(uuid4()), "invalid-uuid", 5, "Test", "Plumbing")
    with pytest.raises(ValueError):
        ReviewService(repo).create_review(uuid4(), dto)
    assert repo.created == []


def test_create_review_invalid_proposal_uuid():
    repo = FakeReviewRepo()
    dto = CreateReviewRequest("invalid-uuid", str(uuid4()), 5, "Test", "Plumbing")
    with pytest.raises(ValueError):
        ReviewService(repo).create_review(uuid4(), dto)
    assert repo.created == []


def test_list_business_reviews_hides_text():
    business_id = uuid4()
    review = Review(uuid4(), business_id, uuid4(), 5, "secret text", "Plumbing")
    repo = FakeReviewRepo(by_business={business_id: [review]})
    result = ReviewService(repo).list_business_reviews(business_id)
    assert len(result) == 1
    assert result[0].rate == 5
    assert result[0].service_type == "Plumbing"
    assert result[0].review == ""


def test_list_helper_reviews_shows_text():
    helper_id = uuid4()
    review = Review(uuid4(), uuid4(), helper_id, 4, "Good work", "Electrical")
    repo = FakeReviewRepo(by_helper={helper_id: [review]})
    result = ReviewService(repo).list_helper_reviews(helper_id)
    assert len(result) == 1
    assert result[0].rate == 4
    assert result[0].review == "Good work"
    assert result[0].service_type == "Electrical"


def test_list_errors_propagate():
    repo = FakeReviewRepo()
    with pytest.raises(KeyError):
        ReviewService(repo).list_helper_reviews(uuid4())