"""Tests for domain error to HTTP error mapping."""

from keepalive.api.errors import ERROR_HEADER, from_domain_error, http_exception
from keepalive.core.domain.errors import HostNotFoundError, KeepaliveError


def test_http_exception_payload() -> None:
    exc = http_exception(status_code=400, code="invalid_request", message="bad")
    assert exc.status_code == 400
    assert exc.headers == {ERROR_HEADER: "1"}
    assert exc.detail == {"code": "invalid_request", "message": "bad", "detail": "bad"}


def test_from_domain_error_keeps_status_and_details() -> None:
    exc = from_domain_error(HostNotFoundError("abc"))
    assert exc.status_code == 404
    assert exc.detail["code"] == "not_found"
    assert exc.detail["details"] == {"host_id": "abc"}


def test_from_domain_error_defaults_to_500() -> None:
    exc = from_domain_error(KeepaliveError("unexpected"))
    assert exc.status_code == 500
    assert exc.detail["code"] == "keepalive_error"
