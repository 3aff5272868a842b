import pytest

from movieshelf.enums import ErrorKind
from movieshelf.services.errors import (
    AlreadyExistsError,
    InternalError,
    InvalidArgumentError,
    IOFailureError,
    NotFoundError,
    UpstreamAuthFailureError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
    http_status_for,
    wrap_unexpected,
)
from movieshelf.services.validation import validate_external_id, validate_query


@pytest.mark.parametrize(
    "error, kind, status",
    [
        (InvalidArgumentError("bad"), ErrorKind.invalid_argument, 400),
        (NotFoundError("missing"), ErrorKind.not_found, 404),
        (AlreadyExistsError("dup"), ErrorKind.already_exists, 409),
        (IOFailureError("disk"), ErrorKind.io_failure, 500),
        (UpstreamAuthFailureError("key"), ErrorKind.upstream_auth_failure, 502),
        (UpstreamError("boom", status=500), ErrorKind.upstream_error, 502),
        (UpstreamUnavailableError("down"), ErrorKind.upstream_unavailable, 503),
        (UpstreamTimeoutError("slow"), ErrorKind.upstream_timeout, 504),
        (InternalError("oops"), ErrorKind.internal, 500),
    ],
)
def test_each_kind_maps_to_a_distinct_detail_and_status(error, kind, status):
    assert error.kind is kind
    assert http_status_for(error) == status
    assert error.to_detail()["kind"] == kind.value


def test_upstream_error_detail_carries_provider_status():
    detail = UpstreamError("OMDb API error: 503", status=503).to_detail()
    assert detail == {"kind": "upstream_error", "message": "OMDb API error: 503", "status": 503}


def test_wrap_unexpected_keeps_service_errors_and_wraps_others():
    original = NotFoundError("missing")
    assert wrap_unexpected(original) is original

    cause = RuntimeError("raw")
    wrapped = wrap_unexpected(cause)
    assert isinstance(wrapped, InternalError)
    assert wrapped.cause is cause


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        validate_query("   ")


def test_validators_strip_and_reject():
    assert validate_query("  matrix ") == "matrix"
    with pytest.raises(InvalidArgumentError):
        validate_external_id(" \t")
    with pytest.raises(InvalidArgumentError):
        validate_external_id(None)
