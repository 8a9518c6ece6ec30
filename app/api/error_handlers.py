"""Error Handlers — global exception handlers that map failures to static HTML pages.

Invariants:
    - UserContentError → its static page (notfound / been-loggedout / error) with its status
    - RequestValidationError (e.g. non-numeric account id) → the not-found page
    - Exception (catch-all) → generic error page, never leaks internal details
    - Every error page carries the static Content-Security-Policy header

Design Decisions:
    - Three-layer handler: domain (UserContentError), validation, catch-all (Exception)
    - Pages are read from <static_dir>/htmls at response time, so every NotFound
      outcome is byte-identical regardless of its cause
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, HTMLResponse, Response

from app.config import get_settings
from app.core.errors import ErrorPage, UserContentError
from app.core.pages import FILE_PAGE_CSP

logger = logging.getLogger(__name__)

_FALLBACK_BODY = "<!DOCTYPE html><html><body><h1>{status}</h1></body></html>"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_usercontent_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def error_page_response(page: ErrorPage, status_code: int) -> Response:
    """Serve a static error page, or a bare status page if it is missing."""
    path = get_settings().static_dir / "htmls" / page.value
    headers = {"Content-Security-Policy": FILE_PAGE_CSP}
    if not path.is_file():
        logger.error(f"Missing error page {path}")
        return HTMLResponse(
            _FALLBACK_BODY.format(status=status_code),
            status_code=status_code, headers=headers,
        )
    return FileResponse(
        path, status_code=status_code, media_type="text/html", headers=headers,
    )


def _register_usercontent_error_handler(app: FastAPI) -> None:
    """Register usercontent domain/infrastructure error handler."""

    @app.exception_handler(UserContentError)
    async def usercontent_error_handler(request: Request, exc: UserContentError):
        """Handle all usercontent domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"UserContentError: {exc.message}",
            extra={
                **exc.to_log_extra(),
                "path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return error_page_response(exc.to_page(), exc.http_status)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Malformed /fs URLs are indistinguishable from missing ones."""
        logger.info(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return error_page_response(
            ErrorPage.NOT_FOUND, status.HTTP_404_NOT_FOUND,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return error_page_response(
            ErrorPage.GENERIC, status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
