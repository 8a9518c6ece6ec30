"""File Preview — visibility gate and MIME-driven rendering of file targets.

Invariants:
    - A PRIVATE target requested by a non-owner raises the same NotFoundError as a
      missing path
    - PDFs are never wrapped in HTML: they come back as an InlineStream
    - Text is escaped before display; HTML passthrough is served verbatim
    - Captions show the browser-friendly MIME for audio and the raw MIME otherwise
"""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from app.config import Settings
from app.core import fragments
from app.core.content_dispatch import (
    AUDIO_HEAD, DOWNLOAD_HEAD, FALLBACK_MIME, HTML_HEAD, IMG_HEAD,
    PLAIN_HIGHLIGHTER, VIDEO_HEAD, DisplayKind, access_url, classify,
    file_extension, highlighter_for, html_friendly_mime,
)
from app.core.domain_types import ItemVisibility, Service
from app.core.errors import (
    ErrorContext, NotFoundError, UnhandledContentTypeError,
)
from app.core.fs_types import FileSystemTarget, RenderedFragment
from app.core.repository_protocols import MimeLookup, Storage, VisibilityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preview:
    """An HTML preview plus the MIME string shown in its caption."""
    fragment: RenderedFragment
    mime: str


@dataclass(frozen=True)
class InlineStream:
    """Raw file bytes served with an inline disposition."""
    path: Path
    media_type: str


def _visibility_path(target: FileSystemTarget) -> str:
    return str(PurePosixPath(Service.TEX.value) / target.sub_path)


async def ensure_visible(
    target: FileSystemTarget, visibilities: VisibilityStore,
) -> None:
    """Raise NotFoundError when a non-owner asks for a private target."""
    if target.is_owner:
        return
    visibility = await visibilities.visibility(
        target.account.id, _visibility_path(target),
    )
    if visibility == ItemVisibility.PRIVATE:
        raise NotFoundError(
            "Path", ErrorContext(account_id=target.account.id, path=target.sub_path),
        )


def pick_mime(candidates: list[str]) -> str:
    return candidates[0] if candidates else FALLBACK_MIME


async def render_text(target: FileSystemTarget, storage: Storage) -> RenderedFragment:
    """Escaped source in a highlight-ready block, keyed by extension."""
    content = await storage.read_text(target.location)
    highlighter = highlighter_for(target.filename)
    if highlighter is None:
        logger.warning(
            f"No highlighter for .{file_extension(target.filename)}",
            extra={"path": target.sub_path},
        )
        highlighter = PLAIN_HIGHLIGHTER
    return RenderedFragment(
        fragments.code_block(content, highlighter.language), highlighter.head,
    )


async def render_html(target: FileSystemTarget, storage: Storage) -> RenderedFragment:
    return RenderedFragment(await storage.read_text(target.location), HTML_HEAD)


def _download(url: str, target: FileSystemTarget) -> RenderedFragment:
    return RenderedFragment(fragments.download(url, target.filename), DOWNLOAD_HEAD)


async def render_file(
    target: FileSystemTarget,
    storage: Storage,
    mimes: MimeLookup,
    settings: Settings,
) -> Preview | InlineStream:
    """Dispatch on the file's MIME type to a preview or a raw inline stream."""
    mime = pick_mime(mimes.mime_types_for(target.filename))
    kind = classify(mime, target.filename, download_fallback=settings.download_fallback)
    url = access_url(target.account, target.sub_path, target.is_owner)
    size = target.size or 0
    logger.debug(
        f"Previewing as {kind.value}",
        extra={"mime": mime, "path": target.sub_path, "is_owner": target.is_owner},
    )

    match kind:
        case DisplayKind.PDF:
            return InlineStream(target.location, mime)
        case DisplayKind.IMAGE:
            return Preview(
                RenderedFragment(fragments.img(fragments.ImgProps(url=url)), IMG_HEAD),
                mime,
            )
        case DisplayKind.AUDIO:
            shown = html_friendly_mime(mime)
            return Preview(RenderedFragment(fragments.audio(url, shown), AUDIO_HEAD), shown)
        case DisplayKind.VIDEO:
            return Preview(RenderedFragment(fragments.video(url), VIDEO_HEAD), mime)
        case DisplayKind.HTML | DisplayKind.TEXT if size > settings.max_text_preview_bytes:
            return Preview(_download(url, target), mime)
        case DisplayKind.HTML:
            return Preview(await render_html(target, storage), mime)
        case DisplayKind.TEXT:
            return Preview(await render_text(target, storage), mime)
        case DisplayKind.DOWNLOAD:
            return Preview(_download(url, target), mime)
        case _:
            raise UnhandledContentTypeError(
                mime, ErrorContext(account_id=target.account.id, path=target.sub_path),
            )
