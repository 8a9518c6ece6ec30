"""Boundary Protocols — contracts between the request pipeline and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO
"""

import os
from pathlib import Path
from typing import Protocol

from app.core.domain_types import AccountId, ItemVisibility, Service
from app.core.fs_types import AccountView, DirEntry


class AccountStore(Protocol):
    """Account lookups — implemented over the accounts table."""
    async def find_by_token(self, token: str) -> AccountView | None: ...
    async def find_by_id(self, account_id: AccountId) -> AccountView | None: ...


class VisibilityStore(Protocol):
    """Per-path visibility flags; paths are relative to the account's user dir."""
    async def visibility(
        self, account_id: AccountId, rel_path: str,
    ) -> ItemVisibility: ...
    async def child_flags(
        self, account_id: AccountId, rel_dir: str,
    ) -> dict[str, ItemVisibility]: ...


class Storage(Protocol):
    """Sandboxed access to account directories on disk."""
    def user_dir(self, account_id: AccountId, service: Service | None) -> Path: ...
    async def join(self, root: Path, sub_path: str) -> Path: ...
    async def try_exists(self, path: Path) -> bool: ...
    async def stat(self, path: Path) -> os.stat_result: ...
    async def read_text(self, path: Path) -> str: ...
    async def dir_items(
        self,
        account_id: AccountId,
        path: Path,
        is_owner: bool,
        recursive: bool,
    ) -> list[DirEntry]: ...


class MimeLookup(Protocol):
    """Ranked MIME candidates for a file name (best first)."""
    def mime_types_for(self, filename: str) -> list[str]: ...
