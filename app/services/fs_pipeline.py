"""Fs Pipeline — identity → authorization → listing | preview → response.

Invariants:
    - Stages run strictly in sequence; nothing is sent before the outcome is known
    - ExpiredSession short-circuits with SessionInvalidError before any path work
    - Every HTML response carries a Content-Security-Policy header
    - The visibility gate runs for directories and files alike, so a private
      directory answers exactly like a missing one
    - Domain errors propagate to the global handlers in api/error_handlers.py
"""

import logging
from dataclasses import dataclass

from fastapi.responses import FileResponse, HTMLResponse, Response

from app.config import Settings
from app.core import fragments
from app.core.domain_types import AccountId, TargetKind
from app.core.errors import SessionInvalidError
from app.core.navigation import ExpiredSession
from app.core.pages import FILE_PAGE_CSP, file_page
from app.core.repository_protocols import (
    AccountStore, MimeLookup, Storage, VisibilityStore,
)
from app.services.file_preview import InlineStream, ensure_visible, render_file
from app.services.fs_authorization import resolve_target
from app.services.identity import resolve_navigation
from app.services.listing import build_listing

logger = logging.getLogger(__name__)

CSP_HEADER = "Content-Security-Policy"


@dataclass(frozen=True)
class FsCollaborators:
    """Everything the pipeline reads from, bundled per request."""
    accounts: AccountStore
    storage: Storage
    visibilities: VisibilityStore
    mimes: MimeLookup
    settings: Settings


async def serve_fs(
    account_id: AccountId,
    sub_path: str,
    token: str | None,
    deps: FsCollaborators,
) -> Response:
    """Serve GET /fs/{id}/{path} for one request."""
    navigation = await resolve_navigation(token, deps.accounts)
    if isinstance(navigation, ExpiredSession):
        raise SessionInvalidError()

    target = await resolve_target(
        account_id, sub_path, navigation, deps.accounts, deps.storage,
    )

    await ensure_visible(target, deps.visibilities)

    if target.kind == TargetKind.DIRECTORY:
        listing = await build_listing(target, deps.storage, navigation.chrome)
        return HTMLResponse(listing.html, headers={CSP_HEADER: listing.csp})

    preview = await render_file(target, deps.storage, deps.mimes, deps.settings)

    if isinstance(preview, InlineStream):
        return FileResponse(
            preview.path,
            media_type=preview.media_type,
            headers={"Content-Disposition": "inline"},
        )

    html = file_page(
        chrome=navigation.chrome,
        head=preview.fragment.head,
        path_display=fragments.path_display(
            fragments.PathProps(id=target.account.id, path=target.sub_path),
        ),
        display=preview.fragment.display,
        info=fragments.file_info(preview.mime, target.size or 0),
    )
    return HTMLResponse(html, headers={CSP_HEADER: FILE_PAGE_CSP})
