import json

import pytest

from helptrix.models import AuthPayload
from helptrix.web import BadRequestBody, Request, Response, UploadedFile, error_response


def _payload():
    return AuthPayload(user_id="00000000-0000-0000-0000-000000000001", user_type="helper")


def test_json_round_trip_from_bytes():
    data = {"status": "accepted", "items": [1, 2, 3]}
    request = Request(payload=_payload(), body=json.dumps(data).encode("utf-8"))
    assert request.json() == data


def test_json_round_trip_from_text():
    data = {"helper_id": "abc", "value": 150.0}
    request = Request(payload=_payload(), body=json.dumps(data))
    assert request.json() == data


def test_json_empty_body_raises():
    with pytest.raises(BadRequestBody):
        Request(payload=_payload()).json()
    with pytest.raises(BadRequestBody):
        Request(payload=_payload(), body=b"").json()


def test_json_malformed_body_raises():
    request = Request(payload=_payload(), body=b'{"invalid": "json"')
    with pytest.raises(BadRequestBody):
        request.json()


def test_bad_request_body_is_value_error():
    with pytest.raises(ValueError):
        Request(payload=_payload(), body=b"\xff\xfe").json()


def test_error_response_shape():
    response = error_response(400, "invalid proposal id")
    assert response.status == 400
    assert response.body == {"error": "invalid proposal id"}


def test_response_defaults_to_no_body():
    assert Response(204).body is None


def test_uploaded_file_size_matches_data():
    upload = UploadedFile(filename="photo.jpg", content_type="image/jpeg", data=b"data")
    assert upload.size == len(b"data")


def test_request_defaults_are_independent():
    first = Request(payload=_payload())
    second = Request(payload=_payload())
    first.params["id"] = "x"
    assert second.params == {}