"""Filesystem Value Types — immutable per-request values passed between pipeline stages.

Invariants:
    - All dataclasses are frozen — built once per request, never mutated
    - FileSystemTarget.size is set for files and None for directories
    - FileSystemTarget.is_owner is True iff requester id == target account id
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from app.core.domain_types import (
    AccountId, CapabilityToken, ItemVisibility, Service, TargetKind,
)


@dataclass(frozen=True)
class AccountView:
    """Read-only projection of an account row handed to the pipeline."""
    id: AccountId
    token: CapabilityToken
    services: frozenset[Service]

    def has_service(self, service: Service) -> bool:
        return service in self.services


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing."""
    name: str
    is_file: bool
    size: int | None
    last_modified: datetime
    visibility: ItemVisibility


@dataclass(frozen=True)
class FileSystemTarget:
    """A sub-path resolved inside an account's sandbox."""
    account: AccountView
    sub_path: str
    location: Path
    kind: TargetKind
    size: int | None
    is_owner: bool

    @property
    def filename(self) -> str:
        return self.location.name


@dataclass(frozen=True)
class RenderedFragment:
    """Display markup plus the head injections it needs."""
    display: str
    head: str = ""
