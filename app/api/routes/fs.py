"""Fs Routes — GET /fs/{id} and GET /fs/{id}/{path...}.

Invariants:
    - Both routes run the same pipeline; /fs/{id} is the empty sub-path
    - The only request input besides the path is the optional "token" cookie
    - Collaborators are built per request around one DB session
"""

import logging

from fastapi import APIRouter, Cookie, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import AccountId, ItemVisibility
from app.infrastructure.database import get_db
from app.infrastructure.mime_db import get_mime_database
from app.infrastructure.storage import LocalStorage
from app.services.account_store import SqlAccountStore
from app.services.fs_pipeline import FsCollaborators, serve_fs
from app.services.visibility_store import SqlVisibilityStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/fs", tags=["fs"])


def get_collaborators(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> FsCollaborators:
    """FastAPI dependency wiring the pipeline to the DB and local disk."""
    visibilities = SqlVisibilityStore(
        db, ItemVisibility(settings.default_visibility),
    )
    return FsCollaborators(
        accounts=SqlAccountStore(db),
        storage=LocalStorage(settings.storage_root, visibilities),
        visibilities=visibilities,
        mimes=get_mime_database(),
        settings=settings,
    )


@router.get("/{account_id}", response_class=HTMLResponse)
async def fs_root(
    account_id: int,
    token: str | None = Cookie(None),
    deps: FsCollaborators = Depends(get_collaborators),
):
    """Root of an account's sandbox."""
    return await serve_fs(AccountId(account_id), "", token, deps)


@router.get("/{account_id}/{path:path}", response_class=HTMLResponse)
async def fs_path(
    account_id: int,
    path: str,
    token: str | None = Cookie(None),
    deps: FsCollaborators = Depends(get_collaborators),
):
    """A directory or file inside an account's sandbox."""
    return await serve_fs(AccountId(account_id), path, token, deps)
