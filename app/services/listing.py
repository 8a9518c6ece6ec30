"""Listing Builder — directory branch of the fs pipeline.

Invariants:
    - Every call generates a fresh nonce; the CSP header and the fragment's
      inline script carry the same value
    - Non-owners never see private entries; nobody sees dot-entries
    - Listing is non-recursive, ordered directories first then by name
"""

import logging
import secrets
from dataclasses import dataclass
from pathlib import Path

from app.core.domain_types import Service
from app.core.fragments import FsItemsProps, fs_items
from app.core.fs_types import FileSystemTarget
from app.core.pages import listing_csp, listing_page
from app.core.repository_protocols import Storage

logger = logging.getLogger(__name__)


def generate_nonce() -> str:
    return secrets.token_urlsafe(16)


@dataclass(frozen=True)
class ListingResult:
    html: str
    csp: str
    nonce: str


async def build_listing(
    target: FileSystemTarget, storage: Storage, chrome: str,
) -> ListingResult:
    """Render the listing page of a directory target."""
    items = await storage.dir_items(
        target.account.id,
        Path(Service.TEX.value) / target.sub_path,
        target.is_owner,
        False,
    )
    nonce = generate_nonce()
    items_display = fs_items(FsItemsProps(
        nonce=nonce,
        id=target.account.id,
        items=tuple(items),
        path=target.sub_path,
    ))
    logger.info(
        f"Listing {len(items)} entries",
        extra={"account_id": target.account.id, "path": target.sub_path},
    )
    return ListingResult(
        html=listing_page(target.account.id, target.sub_path, chrome, items_display),
        csp=listing_csp(nonce),
        nonce=nonce,
    )
