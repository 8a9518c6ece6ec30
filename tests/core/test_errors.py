"""Error hierarchy — status codes, pages and log fields.

Tests:
    - Each error maps to its HTTP status and static page
    - to_log_extra carries the context fields the JSON formatter surfaces
"""

import pytest

from app.core.errors import (
    DatabaseError, ErrorContext, ErrorPage, NotFoundError, SessionInvalidError,
    UnhandledContentTypeError, UpstreamFailureError, UserContentError,
)


@pytest.mark.parametrize("error, status, page", [
    (NotFoundError("Path"), 404, ErrorPage.NOT_FOUND),
    (SessionInvalidError(), 401, ErrorPage.LOGGED_OUT),
    (UnhandledContentTypeError("x/y"), 415, ErrorPage.GENERIC),
    (DatabaseError("boom", "query"), 503, ErrorPage.GENERIC),
    (UpstreamFailureError("boom", "read"), 502, ErrorPage.GENERIC),
])
def test_status_and_page(error, status, page):
    assert isinstance(error, UserContentError)
    assert error.http_status == status
    assert error.to_page() == page


def test_not_found_message_names_what():
    assert NotFoundError("Account").message == "Account not found"


def test_log_extra_from_context():
    err = NotFoundError("Path", ErrorContext(account_id=3, path="a/b"))
    assert err.to_log_extra() == {
        "error_code": "FILE_NOT_FOUND", "account_id": 3, "path": "a/b",
    }


def test_unhandled_content_type_keeps_mime():
    err = UnhandledContentTypeError("application/x-foo")
    assert err.mime == "application/x-foo"
    assert "application/x-foo" in err.message
