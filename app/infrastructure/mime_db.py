"""MIME Database — ranked MIME candidates for a file name.

Invariants:
    - mime_types_for() returns candidates best-first, without duplicates
    - Explicit extension table entries rank above the platform mimetypes registry
    - The database is built once per process and is read-only afterwards

Design Decisions:
    - Extension table mirrors freedesktop shared-mime-info names for the types the
      previewer cares about (e.g. .opus → audio/x-opus+ogg); the stdlib registry
      covers everything else
"""

import mimetypes
from functools import lru_cache

from app.core.content_dispatch import file_extension

_EXTENSION_TYPES: dict[str, tuple[str, ...]] = {
    "opus": ("audio/x-opus+ogg", "audio/ogg"),
    "oga": ("audio/ogg",),
    "ogg": ("audio/ogg", "video/ogg"),
    "flac": ("audio/flac",),
    "m4a": ("audio/mp4",),
    "tex": ("text/x-tex",),
    "latex": ("text/x-tex",),
    "rs": ("text/rust",),
    "md": ("text/markdown",),
    "toml": ("application/toml",),
    "yaml": ("application/x-yaml",),
    "yml": ("application/x-yaml",),
    "webp": ("image/webp",),
    "avif": ("image/avif",),
    "mkv": ("video/x-matroska",),
    "webm": ("video/webm", "audio/webm"),
}


class MimeDatabase:
    """Extension table layered over a private mimetypes registry."""

    def __init__(self, extra: dict[str, tuple[str, ...]] | None = None):
        self._registry = mimetypes.MimeTypes()
        self._table = dict(_EXTENSION_TYPES)
        if extra:
            self._table.update(extra)

    def mime_types_for(self, filename: str) -> list[str]:
        candidates: list[str] = list(self._table.get(file_extension(filename), ()))
        for strict in (True, False):
            guessed, _ = self._registry.guess_type(filename, strict=strict)
            if guessed:
                candidates.append(guessed)
        return list(dict.fromkeys(candidates))


@lru_cache
def get_mime_database() -> MimeDatabase:
    return MimeDatabase()
