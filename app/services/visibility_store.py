"""Visibility Store — effective public/private flag of sandbox paths.

Invariants:
    - The effective visibility of a path is its own flag, else the flag of its
      nearest flagged ancestor, else the configured default
    - Paths are relative to the account's user dir ("tex/notes/a.tex")
    - Lookups never write
"""

import posixpath

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import AccountId, ItemVisibility
from app.models.visibility_flag import VisibilityFlag


def normalize_rel_path(rel_path: str) -> str:
    """Posix form without leading/trailing slashes; "." and ".." collapsed."""
    normalized = posixpath.normpath(rel_path.strip("/") or ".")
    return "" if normalized == "." else normalized


def ancestor_paths(rel_path: str) -> list[str]:
    """The path itself followed by each ancestor, nearest first ("" last)."""
    normalized = normalize_rel_path(rel_path)
    parts = normalized.split("/") if normalized else []
    return ["/".join(parts[:i]) for i in range(len(parts), -1, -1)]


class SqlVisibilityStore:
    """VisibilityStore protocol implementation over item_visibilities."""

    def __init__(self, db: AsyncSession, default: ItemVisibility):
        self.db = db
        self.default = default

    async def visibility(
        self, account_id: AccountId, rel_path: str,
    ) -> ItemVisibility:
        candidates = ancestor_paths(rel_path)
        result = await self.db.execute(
            select(VisibilityFlag.path, VisibilityFlag.visibility)
            .where(VisibilityFlag.account_id == account_id)
            .where(VisibilityFlag.path.in_(candidates)),
        )
        flags = dict(result.all())
        for path in candidates:
            if path in flags:
                return ItemVisibility(flags[path])
        return self.default

    async def child_flags(
        self, account_id: AccountId, rel_dir: str,
    ) -> dict[str, ItemVisibility]:
        """Explicit flags of the direct children of rel_dir, keyed by name."""
        parent = normalize_rel_path(rel_dir)
        prefix = f"{parent}/" if parent else ""
        result = await self.db.execute(
            select(VisibilityFlag.path, VisibilityFlag.visibility)
            .where(VisibilityFlag.account_id == account_id)
            .where(VisibilityFlag.path.startswith(prefix, autoescape=True)),
        )
        children: dict[str, ItemVisibility] = {}
        for path, visibility in result.all():
            name = path[len(prefix):]
            if name and "/" not in name:
                children[name] = ItemVisibility(visibility)
        return children
