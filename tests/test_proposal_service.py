from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from helptrix.core import (
    NotProposalParticipant,
    ProposalAlreadyPendingForHelper,
    ProposalFinished,
    ProposalInvalidStatus,
    ProposalNotFound,
    ProposalStatus,
    ProposalUnauthorized,
    UserType,
)
from helptrix.models import CreateProposalRequest, Proposal, UpdateProposalStatusRequest
from helptrix.proposal_service import ProposalService, to_response

BUSINESS = UserType.BUSINESS.value
HELPER = UserType.HELPER.value
S = ProposalStatus


def new_proposal(user_id, helper_id, status):
    now = datetime.now(timezone.utc)
    return Proposal(
        id=uuid4(),
        user_id=user_id,
        helper_id=helper_id,
        category_id=1,
        description="Preciso de ajuda com encanamento",
        value=150.00,
        status=status,
        created_at=now,
        updated_at=now,
    )


class FakeRepo:
    def __init__(self, user_id, helper_id):
        self.proposal = new_proposal(user_id, helper_id, S.PENDING.value)
        self.blocking = lambda uid, hid: False
        self.create_fn = lambda dto, uid: self.proposal
        self.find_fn = lambda pid: self.proposal
        self.update_fn = lambda pid, status: replace(self.proposal, status=status)
        self.list_user_fn = lambda uid, f: []
        self.list_helper_fn = lambda hid, f: []

    def has_blocking_proposal_for_helper(self, user_id, helper_id):
        return self.blocking(user_id, helper_id)

    def create(self, dto, user_id):
        return self.create_fn(dto, user_id)

    def find_by_id(self, proposal_id):
        return self.find_fn(proposal_id)

    def update_status(self, proposal_id, status):
        return self.update_fn(proposal_id, status)

    def list_by_user_id(self, user_id, status_filter):
        return self.list_user_fn(user_id, status_filter)

    def list_by_helper_id(self, helper_id, status_filter):
        return self.list_helper_fn(helper_id, status_filter)


def _raiser(error):
    def fail(*args):
        raise error

    return fail


def valid_create_dto(helper_id):
    return CreateProposalRequest(
        helper_id=helper_id, category_id=1,
        description="Preciso de ajuda com encanamento", value=150.00,
    )


@pytest.fixture
def ids():
    return uuid4(), uuid4()


@pytest.fixture
def repo(ids):
    return FakeRepo(*ids)


def _requester(ids, who):
    user_id, helper_id = ids
    return {
        "owner": (user_id, BUSINESS),
        "helper": (helper_id, HELPER),
        "stranger": (uuid4(), BUSINESS),
        "stranger_helper": (uuid4(), HELPER),
    }[who]


def _update(repo, current, target, requester):
    repo.proposal = replace(repo.proposal, status=current.value)
    status = target.value if isinstance(target, ProposalStatus) else target
    requester_id, kind = requester
    return ProposalService(repo).update_status(
        repo.proposal.id, UpdateProposalStatusRequest(status), requester_id, kind
    )


# --- create ---

def test_create_success(ids, repo):
    user_id, helper_id = ids
    resp = ProposalService(repo).create(valid_create_dto(helper_id), user_id)
    assert (resp.user_id, resp.status) == (user_id, S.PENDING.value)


def test_create_blocked_same_helper(ids, repo):
    user_id, helper_id = ids
    repo.blocking = lambda uid, hid: True
    with pytest.raises(ProposalAlreadyPendingForHelper):
        ProposalService(repo).create(valid_create_dto(helper_id), user_id)


@pytest.mark.parametrize("hook", ["blocking", "create_fn"])
def test_create_repo_errors_propagate(ids, repo, hook):
    user_id, helper_id = ids
    error = RuntimeError("db error")
    setattr(repo, hook, _raiser(error))
    with pytest.raises(RuntimeError) as info:
        ProposalService(repo).create(valid_create_dto(helper_id), user_id)
    assert info.value is error


def test_create_allowed_when_previous_is_accepted(ids, repo):
    user_id, helper_id = ids
    captured = []
    repo.blocking = lambda uid, hid: captured.append(hid) or False
    resp = ProposalService(repo).create(valid_create_dto(helper_id), user_id)
    assert captured == [helper_id]
    assert resp.status == S.PENDING.value


def test_create_allowed_for_different_helper(ids, repo):
    user_id, helper_id = ids
    repo.blocking = lambda uid, hid: hid == helper_id
    resp = ProposalService(repo).create(valid_create_dto(uuid4()), user_id)
    assert resp.user_id == user_id


# --- get_by_id ---

@pytest.mark.parametrize("who", ["owner", "helper"])
def test_get_by_id_as_participant(ids, repo, who):
    proposal_id = uuid4()
    repo.proposal = replace(repo.proposal, id=proposal_id)
    resp = ProposalService(repo).get_by_id(proposal_id, _requester(ids, who)[0])
    assert (resp.id, resp.user_id, resp.helper_id) == (proposal_id, *ids)


def test_get_by_id_not_participant(repo):
    with pytest.raises(NotProposalParticipant):
        ProposalService(repo).get_by_id(uuid4(), uuid4())


def test_get_by_id_not_found(ids, repo):
    repo.find_fn = _raiser(ProposalNotFound())
    with pytest.raises(ProposalNotFound):
        ProposalService(repo).get_by_id(uuid4(), ids[0])


# --- update_status ---

@pytest.mark.parametrize(
    "current,target,who,expected",
    [
        (S.REFUSED, S.ACCEPTED, "helper", ProposalFinished),
        (S.CANCELLED, S.ACCEPTED, "helper", ProposalFinished),
        (S.FINISHED, S.ACCEPTED, "helper", ProposalFinished),
        (S.PENDING, "invalid_status", "helper", ProposalInvalidStatus),
        (S.PENDING, S.ACCEPTED, "owner", ProposalUnauthorized),
        (S.PENDING, S.ACCEPTED, "stranger_helper", ProposalUnauthorized),
        (S.PENDING, S.CANCELLED, "stranger", ProposalUnauthorized),
        (S.PENDING, S.FINISHED, "helper", ProposalInvalidStatus),
    ],
)
def test_update_status_rejected(ids, repo, current, target, who, expected):
    with pytest.raises(expected):
        _update(repo, current, target, _requester(ids, who))


@pytest.mark.parametrize(
    "current,target,who",
    [
        (S.PENDING, S.ACCEPTED, "helper"),
        (S.PENDING, S.REFUSED, "helper"),
        (S.PENDING, S.CANCELLED, "owner"),
        (S.PENDING, S.CANCELLED, "helper"),
        (S.ACCEPTED, S.IN_PROGRESS, "helper"),
        (S.ACCEPTED, S.CANCELLED, "owner"),
        (S.IN_PROGRESS, S.FINISHED, "helper"),
        (S.IN_PROGRESS, S.CANCELLED, "owner"),
    ],
)
def test_update_status_allowed(ids, repo, current, target, who):
    resp = _update(repo, current, target, _requester(ids, who))
    assert resp.status == target.value


def test_update_status_not_found(ids, repo):
    repo.find_fn = _raiser(ProposalNotFound())
    with pytest.raises(ProposalNotFound):
        _update(repo, S.PENDING, S.ACCEPTED, _requester(ids, "helper"))


# --- list ---

@pytest.mark.parametrize("who,listing", [("owner", "user"), ("helper", "helper")])
def test_list_routes_by_user_type(ids, repo, who, listing):
    calls = []
    repo.list_user_fn = lambda uid, f: calls.append(("user", uid, f)) or []
    repo.list_helper_fn = lambda hid, f: calls.append(("helper", hid, f)) or []
    requester_id, kind = _requester(ids, who)
    assert ProposalService(repo).list(requester_id, kind, "") == []
    assert calls == [(listing, requester_id, "")]


def test_list_passes_status_filter(ids, repo):
    listed = [to_response(replace(repo.proposal, status=S.ACCEPTED.value))]
    calls = []
    repo.list_user_fn = lambda uid, f: calls.append(f) or listed
    result = ProposalService(repo).list(ids[0], BUSINESS, S.ACCEPTED.value)
    assert calls == [S.ACCEPTED.value]
    assert result == listed
    assert result[0].status == S.ACCEPTED.value


def test_to_response_copies_every_field(ids):
    proposal = new_proposal(*ids, S.ACCEPTED.value)
    resp = to_response(proposal)
    fields = ("id", "user_id", "helper_id", "category_id", "description", "value", "status",
              "created_at", "updated_at")
    assert [getattr(resp, name) for name in fields] == [getattr(proposal, name) for name in fields]