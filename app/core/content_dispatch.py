"""Content Dispatch — pure MIME classification and access-URL rules for file previews.

Invariants:
    - All functions are pure (no IO, no async, no DB)
    - image/* → IMAGE, audio/* → AUDIO, */pdf → PDF take precedence over every
      later rule
    - classify() never returns UNHANDLED while download_fallback is enabled
    - Owner URLs embed the capability token; non-owner URLs embed only the id

Design Decisions:
    - Rules are an ordered table of (predicate, kind) instead of nested ifs, so the
      precedence is readable top to bottom
    - html_friendly_mime only rewrites types browsers refuse in <source type>;
      every other string passes through unchanged
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable
from urllib.parse import quote

from app.core.domain_types import Service
from app.core.fs_types import AccountView

FALLBACK_MIME = "application/octet-stream"

_BROWSER_MIME = {
    "audio/x-opus+ogg": "audio/ogg",
}

# application/* types whose payload is readable text
_TEXT_APPLICATION_SUBTYPES = frozenset({
    "json", "xml", "javascript", "x-tex", "x-latex", "x-sh", "toml", "x-yaml",
})


class DisplayKind(str, Enum):
    """How a file preview is produced."""
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    PDF = "pdf"
    HTML = "html"
    TEXT = "text"
    DOWNLOAD = "download"
    UNHANDLED = "unhandled"


# --- Head injections ---------------------------------------------------------

IMG_HEAD = '<link rel="stylesheet" href="/static/css/img.css" />'
AUDIO_HEAD = '<link rel="stylesheet" href="/static/css/audio.css" />'
VIDEO_HEAD = '<link rel="stylesheet" href="/static/css/video.css" />'
HTML_HEAD = '<link rel="stylesheet" href="/static/css/html.css" />'
DOWNLOAD_HEAD = '<link rel="stylesheet" href="/static/css/download.css" />'


@dataclass(frozen=True)
class Highlighter:
    """Prism language class plus the assets that highlight it.

    The token stylesheets ship in static/css/prism/. The Prism bundles at
    static/scripts/prism/<asset>.js are copied from the prismjs release at
    deploy time; without them the block still renders as escaped plain text.
    """
    language: str
    asset: str

    @property
    def head(self) -> str:
        return (
            f'<link href="/static/css/prism/{self.asset}.css" rel="stylesheet" />'
            f'<script src="/static/scripts/prism/{self.asset}.js" defer></script>'
        )


HIGHLIGHTERS: dict[str, Highlighter] = {
    "tex": Highlighter("latex", "tex"),
    "rs": Highlighter("rust", "rust"),
    "md": Highlighter("markdown", "md"),
}

PLAIN_HIGHLIGHTER = Highlighter("text", "plain")


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot; empty for dotfiles and bare names."""
    stem, dot, ext = filename.rpartition(".")
    if not dot or not stem:
        return ""
    return ext.lower()


def highlighter_for(filename: str) -> Highlighter | None:
    return HIGHLIGHTERS.get(file_extension(filename))


def split_mime(mime: str) -> tuple[str, str]:
    """("type", "subtype") of a MIME string, parameters dropped."""
    essence = mime.split(";", 1)[0].strip().lower()
    top, _, sub = essence.partition("/")
    return top, sub


def html_friendly_mime(mime: str) -> str:
    return _BROWSER_MIME.get(mime, mime)


def _is_text(top: str, sub: str, filename: str) -> bool:
    if top == "text":
        return True
    if top == "application" and sub in _TEXT_APPLICATION_SUBTYPES:
        return True
    return highlighter_for(filename) is not None


_RULES: list[tuple[Callable[[str, str, str], bool], DisplayKind]] = [
    (lambda top, sub, fn: top == "image", DisplayKind.IMAGE),
    (lambda top, sub, fn: top == "audio", DisplayKind.AUDIO),
    (lambda top, sub, fn: sub == "pdf", DisplayKind.PDF),
    (lambda top, sub, fn: top == "video", DisplayKind.VIDEO),
    (lambda top, sub, fn: (top, sub) == ("text", "html"), DisplayKind.HTML),
    (_is_text, DisplayKind.TEXT),
]


def classify(mime: str, filename: str, *, download_fallback: bool = True) -> DisplayKind:
    """Pick the preview kind for a file from its MIME type and name."""
    top, sub = split_mime(mime)
    for predicate, kind in _RULES:
        if predicate(top, sub, filename):
            return kind
    return DisplayKind.DOWNLOAD if download_fallback else DisplayKind.UNHANDLED


def access_url(account: AccountView, sub_path: str, is_owner: bool) -> str:
    """URL the browser fetches the raw bytes from.

    Owners get the capability-token route (no further authorization lookup);
    everyone else gets the public usercontent route, which re-checks visibility.
    """
    path = quote(sub_path.strip("/"))
    scope = Service.TEX.value
    if is_owner:
        return f"/api/storage/v1/file/{quote(account.token, safe='')}/{scope}/{path}"
    return f"/api/usercontent/v1/file/id/{account.id}/{scope}/{path}"
