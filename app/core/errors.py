"""Error Hierarchy — typed, categorized exceptions for all usercontent failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error names the static page rendered for it (to_page())
    - Absent accounts, absent paths and visibility-denied files all raise NotFoundError:
      one externally observable outcome, so existence never leaks
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserContentError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    UNSUPPORTED = "unsupported"
    DATABASE = "database"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class ErrorPage(str, Enum):
    """Static HTML pages under <static_dir>/htmls/ served for terminal errors."""
    NOT_FOUND = "notfound.html"
    LOGGED_OUT = "been-loggedout.html"
    GENERIC = "error.html"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: int | None = None
    path: str | None = None
    debug_info: dict[str, Any] | None = None


class UserContentError(Exception):
    """Base exception for all usercontent errors."""

    page: ErrorPage = ErrorPage.GENERIC

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_page(self) -> ErrorPage:
        return self.page

    def to_log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "account_id": self.context.account_id,
            "path": self.context.path,
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class NotFoundError(UserContentError):
    """Target account, path, or visibility-denied file."""

    page = ErrorPage.NOT_FOUND

    def __init__(self, what: str, context: ErrorContext | None = None):
        super().__init__(
            f"{what} not found",
            "FILE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


class SessionInvalidError(UserContentError):
    """A session token was supplied but no account owns it."""

    page = ErrorPage.LOGGED_OUT

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Session token does not resolve to an account",
            "SESSION_INVALID", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class UnhandledContentTypeError(UserContentError):
    """No preview rule matches the file's MIME type and fallback is disabled."""

    def __init__(self, mime: str, context: ErrorContext | None = None):
        super().__init__(
            f"No preview available for content type {mime}",
            "UNHANDLED_CONTENT_TYPE", ErrorCategory.UNSUPPORTED,
            ErrorSeverity.WARNING, context, 415,
        )
        self.mime = mime


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(UserContentError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class UpstreamFailureError(UserContentError):
    """Storage or rendering collaborator failed while serving a request."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"{operation} failed: {message}",
            "UPSTREAM_FAILURE", ErrorCategory.UPSTREAM,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.operation = operation
