import json

import pytest

from http_exception import (
    DirectoryNotEmptyException,
    ForbiddenException,
    HTTPStatusCodeException,
    HTTPStatusCodeToException,
    InsufficientPermissionsException,
    OxygenException,
    RangeNotSatisfiableException,
    RequestDidNotSucceedException,
)
from oxygen_codes import ErrorCode, ErrorEnvelope


def envelope(code, description: str = "") -> bytes:
    return json.dumps({"code": code, "description": description}).encode()


@pytest.mark.parametrize("status_code", [200, 201, 204, 206, 299])
def test_success_is_not_an_error(status_code: int):
    HTTPStatusCodeToException.raise_exception_for_failed_requests(status_code, b"ignored")


def test_directory_not_empty():
    with pytest.raises(DirectoryNotEmptyException) as raised:
        HTTPStatusCodeToException.raise_exception_for_failed_requests(403, envelope(35, "Directory not empty"))
    assert raised.value.http_response_code == 403
    assert raised.value.error_envelope.code == ErrorCode.ERROR_DIRECTORY_NOT_EMPTY
    assert isinstance(raised.value, ForbiddenException)


@pytest.mark.parametrize(
    "content",
    [
        None,
        b"",
        b"not json",
        b"[35]",
        b'{"description": "no code"}',
        b'{"code": "35"}',
        envelope(ErrorCode.ERROR_INSUFFICIENT_PERMISSIONS),
        envelope(ErrorCode.ERROR_INVALID_TOKEN),
        envelope(999),
    ],
)
def test_other_forbidden_is_insufficient_permissions(content):
    with pytest.raises(InsufficientPermissionsException) as raised:
        HTTPStatusCodeToException.raise_exception_for_failed_requests(403, content)
    assert raised.value.http_response_code == 403
    assert not isinstance(raised.value, DirectoryNotEmptyException)


def test_forbidden_description_becomes_message():
    with pytest.raises(InsufficientPermissionsException) as raised:
        HTTPStatusCodeToException.raise_exception_for_failed_requests(403, envelope(40, "You may not"))
    assert raised.value.message == "You may not"


@pytest.mark.parametrize("content", [None, b"", envelope(35), b"garbage"])
def test_range_not_satisfiable_ignores_body(content):
    with pytest.raises(RangeNotSatisfiableException) as raised:
        HTTPStatusCodeToException.raise_exception_for_failed_requests(416, content)
    assert raised.value.http_response_code == 416


@pytest.mark.parametrize("status_code", [100, 301, 400, 401, 404, 409, 500, 503])
def test_everything_else_is_collapsed(status_code: int):
    with pytest.raises(RequestDidNotSucceedException) as raised:
        HTTPStatusCodeToException.raise_exception_for_failed_requests(status_code, envelope(35))
    assert raised.value.http_response_code == status_code
    assert isinstance(raised.value, HTTPStatusCodeException)
    assert isinstance(raised.value, OxygenException)


def test_fixed_value_exception_rejects_other_codes():
    with pytest.raises(ValueError):
        ForbiddenException.__new__(ForbiddenException).check_in_range(404)


def test_envelope_unknown_code():
    parsed = ErrorEnvelope.from_content(envelope(999, "new"))
    assert parsed.code == 999
    assert parsed.known_code is None
    assert parsed.description == "new"


def test_envelope_known_code():
    assert ErrorEnvelope.from_content(envelope(36)).known_code == ErrorCode.ERROR_PATH_ALREADY_EXISTS


@pytest.mark.parametrize(
    "code, value",
    [
        (ErrorCode.SUCCESS, 1000000),
        (ErrorCode.ERROR_PARSING_JSON, 2),
        (ErrorCode.ERROR_INVALID_TOKEN, 8),
        (ErrorCode.ERROR_PATH_NOT_FOUND, 23),
        (ErrorCode.ERROR_DIRECTORY_NOT_EMPTY, 35),
        (ErrorCode.ERROR_INSUFFICIENT_PERMISSIONS, 40),
        (ErrorCode.NO_RESPONSE_REQUIRED, 45),
    ],
)
def test_error_codes_are_stable(code: ErrorCode, value: int):
    assert code == value
