# helptrix

Domain logic and framework-neutral request handlers for a marketplace where
business users hire helpers. The package covers four areas:

- **Proposals**: a business sends a proposal to a helper, and the proposal
  moves through a fixed set of states.
- **Reviews**: a business reviews a helper.
- **Services**: helpers publish their offerings.
- **Image uploads**: profile pictures and service photos are sent to object
  storage through pluggable strategies.

Storage is up to you. Each service is built from a repository object that
you supply, described by a `typing.Protocol` in the same module.

## Installation

```
pip install helptrix
```

The package has no runtime dependencies.

## Modules

| Module | Contents |
| --- | --- |
| `helptrix.core` | `UserType`, `ProposalStatus`, the domain errors (all subclasses of `HelptrixError`), `is_hhmm`, `parse_positive_decimal` |
| `helptrix.models` | Dataclasses for stored records, requests and responses: `AuthPayload`, `Proposal`, `Review`, `CreateProposalRequest`, `UpdateProposalStatusRequest`, `ProposalResponse`, `CreateReviewRequest`, `ReviewListItem`, `ServiceCategory`, `CreateServiceRequest`, `UpdateServiceRequest`, `ServiceResponse` |
| `helptrix.proposal_service` | `ProposalRepository`, `ProposalService`, `to_response` |
| `helptrix.review_service` | `ReviewRepository`, `ReviewService` |
| `helptrix.service_service` | `ServiceRepository`, `ServiceService` |
| `helptrix.strategies` | `StorageService`, `UserRepository`, `ImageUploadStrategy`, `ProfileImageStrategy`, `ServiceImageStrategy`, `object_path` |
| `helptrix.uploader_service` | `UploaderService` |
| `helptrix.web` | `Request`, `Response`, `UploadedFile`, `BadRequestBody`, `error_response` |
| `helptrix.proposal_controller` | `ProposalController` |
| `helptrix.review_controller` | `ReviewController` |
| `helptrix.service_controller` | `ServiceController` |
| `helptrix.uploader_controller` | `UploaderController` |

The request models have a `from_json(data)` classmethod. It raises
`ValueError` when a required field is missing or a field has the wrong type.
The response models have a `to_json()` method that returns a JSON-ready dict.

## Rules enforced by the services

**Proposals** (`ProposalService`):

- `create` raises `ProposalAlreadyPendingForHelper` when the repository
  reports a blocking proposal between the business and the helper.
- `get_by_id` raises `NotProposalParticipant` unless the requester is the
  business or the helper on the proposal.
- `update_status`:
  - raises `ProposalFinished` when the proposal is already `refused`,
    `cancelled` or `finished`;
  - raises `ProposalInvalidStatus` for an unknown target status or a move the
    state machine does not allow. The allowed moves are:
    - `pending` → `accepted`, `refused` or `cancelled`
    - `accepted` → `in progress` or `cancelled`
    - `in progress` → `finished` or `cancelled`
  - Either party may cancel. Every other change must come from the proposal's
    own helper; anyone else gets `ProposalUnauthorized`.
- `list` returns the proposals a business created, or those addressed to a
  helper. It passes the status filter through to the repository.

**Reviews** (`ReviewService`):

- `create_review` raises `ValueError` for malformed proposal or helper ids,
  and `CannotReviewSelf` when a user reviews themselves.
- `list_business_reviews` leaves the review text empty.
- `list_helper_reviews` includes the review text.

**Services** (`ServiceService`):

- Every operation raises `HelperOnly` for non-helper users.
- On create, and for each field given on update:
  - the value must be a decimal greater than zero (`InvalidValueFormat`,
    `ValueNotPositive`);
  - start and end times must be 24-hour `HH:MM` (`InvalidStartTimeFormat`,
    `InvalidEndTimeFormat`);
  - the category must be assigned to the user (`CategoryNotAssignedToUser`);
  - the name must be unique among the user's services (`ServiceNameNotUnique`).

**Uploads** (`UploaderService` plus strategies):

- `UploaderService` routes each image type to the strategy registered for it,
  and raises `InvalidImageType` for an unknown type.
- `ProfileImageStrategy` accepts uploads only from the owner (`NotOwner`).
  It deletes the previous picture, uploads the new one under
  `profile-images/`, and stores its URL.
- `ServiceImageStrategy` loads the requester's service. It uploads the file
  under `service-images/` with a random name, keeping the file's extension
  (`.jpg` when the name has none), and appends the URL to the service's
  photos. If saving the photo list fails, the uploaded object is deleted
  again and the error is re-raised.

```python
from helptrix.core import ProposalInvalidStatus, ProposalStatus, UserType
from helptrix.models import UpdateProposalStatusRequest
from helptrix.proposal_service import ProposalService

service = ProposalService(my_proposal_repository)

try:
    updated = service.update_status(
        proposal_id,
        UpdateProposalStatusRequest(status=ProposalStatus.ACCEPTED),
        helper_id,
        UserType.HELPER,
    )
except ProposalInvalidStatus:
    ...
```

## Controllers

Each controller method takes a `helptrix.web.Request` and returns a
`helptrix.web.Response`. The request holds:

- the authenticated `AuthPayload`;
- path `params`, such as `id` and `image-type`;
- the `query`, such as `status` for proposal listing;
- the raw JSON `body`;
- uploaded `files`.

The response holds the HTTP status code and a JSON-ready body. Errors come
back as `{"error": "<message>"}`. Unexpected failures are logged and answered
with status 500 and `"internal server error"`.

`UploaderController.upload` checks the following before calling the service:

- the image type is `profile-images` or `service-images`;
- an `image` file is present;
- the file is at most 5 MB;
- its content type is `image/jpeg`, `image/png` or `image/webp`.

```python
from helptrix.models import AuthPayload
from helptrix.web import Request

request = Request(
    payload=AuthPayload(user_id=str(user_id), user_type="business"),
    body=b'{"helper_id": "...", "category_id": 1, "description": "Fix sink", "value": 150.0}',
)
response = proposal_controller.create(request)
print(response.status, response.body)
```

## What the package does not do

- It has no database layer. The repository protocols must be implemented by
  the caller.
- It has no object-storage client. `StorageService` must be supplied.
- It has no HTTP server or routing. Wire the controllers into a web framework
  yourself.
- It does not authenticate callers or verify tokens. The `AuthPayload` on a
  request is trusted as given.

## Running the tests

```
pip install -e ".[test]"
pytest
```