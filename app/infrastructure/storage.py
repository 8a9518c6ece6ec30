"""Local Storage — sandboxed disk access to per-account directories.

Invariants:
    - user_dir(id, service) = <storage_root>/<id>[/<service>]
    - join() never returns a path outside the given root: "..", absolute
      sub-paths and symlinks leaving the root raise NotFoundError
    - dir_items() never returns dot-entries; for non-owners it never returns
      PRIVATE entries (or anything beneath them)
    - dir_items() output order: directories first, then case-folded name

Design Decisions:
    - Blocking os calls run in asyncio.to_thread so the event loop never stalls
    - Visibility of a listed entry = its own flag, else the listed directory's
      effective visibility (one lookup + one child query per directory)
"""

import asyncio
import logging
import os
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from app.core.domain_types import AccountId, ItemVisibility, Service
from app.core.errors import ErrorContext, NotFoundError, UpstreamFailureError
from app.core.fs_types import DirEntry
from app.core.repository_protocols import VisibilityStore

logger = logging.getLogger(__name__)


def listing_order(entry: DirEntry) -> tuple[bool, str, str]:
    return (entry.is_file, entry.name.casefold(), entry.name)


class LocalStorage:
    """Storage protocol implementation over a local directory tree."""

    def __init__(self, storage_root: Path, visibilities: VisibilityStore):
        self.storage_root = storage_root
        self.visibilities = visibilities

    def user_dir(self, account_id: AccountId, service: Service | None) -> Path:
        base = self.storage_root / str(account_id)
        if service is None:
            return base
        return base / service.value

    # ─── Path resolution ────────────────────────────────────────

    @staticmethod
    def _join_sync(root: Path, sub_path: str) -> Path:
        if "\x00" in sub_path:
            raise ValueError("null byte in path")
        root = root.resolve()
        resolved = (root / sub_path.lstrip("/")).resolve()
        resolved.relative_to(root)
        return resolved

    async def join(self, root: Path, sub_path: str) -> Path:
        try:
            return await asyncio.to_thread(self._join_sync, root, sub_path)
        except (ValueError, OSError, RuntimeError) as e:
            logger.info(
                f"Rejected sandbox path: {e}", extra={"path": sub_path},
            )
            raise NotFoundError("Path", ErrorContext(path=sub_path)) from None

    async def try_exists(self, path: Path) -> bool:
        return await asyncio.to_thread(path.exists)

    async def stat(self, path: Path) -> os.stat_result:
        try:
            return await asyncio.to_thread(path.stat)
        except FileNotFoundError:
            raise NotFoundError("Path", ErrorContext(path=str(path))) from None
        except OSError as e:
            raise UpstreamFailureError(str(e), "stat") from e

    async def read_text(self, path: Path) -> str:
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise UpstreamFailureError(str(e), "read") from e
        return data.decode("utf-8", errors="replace")

    # ─── Listing ────────────────────────────────────────────────

    @staticmethod
    def _scan_sync(directory: Path, root: Path) -> list[tuple[str, bool, int, float]]:
        """(name, is_file, size, mtime) for every non-dot entry that stays inside root."""
        found = []
        root = root.resolve()
        with os.scandir(directory) as it:
            for entry in it:
                if entry.name.startswith("."):
                    continue
                try:
                    if entry.is_symlink():
                        Path(entry.path).resolve().relative_to(root)
                    st = entry.stat()
                except (OSError, ValueError):
                    continue
                is_file = not entry.is_dir()
                found.append((entry.name, is_file, st.st_size, st.st_mtime))
        return found

    async def dir_items(
        self,
        account_id: AccountId,
        path: Path,
        is_owner: bool,
        recursive: bool,
    ) -> list[DirEntry]:
        """Entries of <user_dir>/<path>; path is relative to the user dir."""
        rel_dir = PurePosixPath(path.as_posix())
        inherited = await self.visibilities.visibility(account_id, str(rel_dir))
        items = await self._dir_items(account_id, rel_dir, inherited, is_owner, recursive)
        return sorted(items, key=listing_order)

    async def _dir_items(
        self,
        account_id: AccountId,
        rel_dir: PurePosixPath,
        inherited: ItemVisibility,
        is_owner: bool,
        recursive: bool,
        prefix: str = "",
    ) -> list[DirEntry]:
        user_root = self.user_dir(account_id, None)
        try:
            scanned = await asyncio.to_thread(
                self._scan_sync, user_root / rel_dir, user_root,
            )
        except OSError as e:
            raise UpstreamFailureError(str(e), "list directory") from e

        flags = await self.visibilities.child_flags(account_id, str(rel_dir))
        items: list[DirEntry] = []
        for name, is_file, size, mtime in scanned:
            visibility = flags.get(name, inherited)
            if visibility == ItemVisibility.PRIVATE and not is_owner:
                continue
            items.append(DirEntry(
                name=f"{prefix}{name}",
                is_file=is_file,
                size=size if is_file else None,
                last_modified=datetime.fromtimestamp(max(0, mtime), timezone.utc),
                visibility=visibility,
            ))
            if recursive and not is_file:
                items.extend(await self._dir_items(
                    account_id, rel_dir / name, visibility, is_owner, True,
                    prefix=f"{prefix}{name}/",
                ))
        return items
