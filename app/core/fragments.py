"""Markup Fragments — pure functions from immutable props to serialized HTML.

Invariants:
    - All functions are pure (no IO, no async, no DB)
    - Every interpolated value passes through markupsafe.escape, except the
      HTML passthrough body which is served verbatim by contract
    - The listing script nonce is the exact value the caller put in the CSP header

Design Decisions:
    - Props dataclasses + plain functions instead of a component tree: server-side
      fragments are rendered once and never re-rendered
    - Inline script data goes through json.dumps with "<" escaped so user file
      names cannot close the <script> element
"""

import json
from dataclasses import dataclass
from urllib.parse import quote

from markupsafe import escape

from app.core.fs_types import DirEntry
from app.core.format_size import format_size
from app.core.domain_types import ItemVisibility


# --- Top bar -----------------------------------------------------------------

TOPBAR_LOGGEDOUT = """
    <div id="top-bar">
      <div id="top-bar-left">
        <a href="/" id="top-bar-icon"><img src="/static/images/favicon-dark.svg" alt="" width="30"></a>
        <a href="/docs" class="top-bar-link">API</a>
        <a href="" class="top-bar-link">Blog</a>
      </div>
      <div id="top-bar-right">
        <a href="/login" class="buttonlike buttonlike-hover" id="signin">Sign in</a>
        <a href="/login?type=new" class="buttonlike hover-dropshadow" id="top-bar-register">Register</a>
      </div>
    </div>"""


@dataclass(frozen=True)
class TopbarLoggedinProps:
    id: int


def profile_image_url(account_id: int) -> str:
    return f"/api/tex/generic/v1/pfp/id/{account_id}"


def topbar_loggedin(props: TopbarLoggedinProps) -> str:
    """Top bar for a signed-in account: profile link and picture."""
    return f"""
    <div id="top-bar">
      <div id="top-bar-left">
        <a href="/" id="top-bar-icon"><img src="/static/images/favicon-dark.svg" alt="" width="30"></a>
        <a href="/docs" class="top-bar-link">API</a>
        <a href="" class="top-bar-link">Blog</a>
      </div>
      <div id="top-bar-right">
        <a href="/user/{props.id}"><img src="{escape(profile_image_url(props.id))}" id="topbar-pfp" alt="" width="30" height="30"></a>
      </div>
    </div>"""


# --- Media displays ----------------------------------------------------------

@dataclass(frozen=True)
class ImgProps:
    url: str


def img(props: ImgProps) -> str:
    return f'<img src="{escape(props.url)}" id="img">'


def audio(url: str, mime: str) -> str:
    return (
        '<audio controls autoplay id="audio">\n'
        f'  <source src="{escape(url)}" type="{escape(mime)}">\n'
        "Your browser does not support the audio element.\n"
        "</audio>"
    )


def video(url: str) -> str:
    return (
        '<video id="player" controls>\n'
        f'  <source src="{escape(url)}">\n'
        "Your browser does not support the video tag.\n"
        "</video>"
    )


def download(url: str, filename: str) -> str:
    return (
        f'<a href="{escape(url)}" download="{escape(filename)}" '
        f'id="download" class="buttonlike">Download {escape(filename)}</a>'
    )


def code_block(content: str, language: str) -> str:
    """Escaped source in a block the client-side highlighter picks up."""
    return (
        '<pre id="code" class="line-numbers">'
        f'<code class="language-{escape(language)}">{escape(content)}</code></pre>'
    )


def file_info(mime: str, size: int) -> str:
    """Caption under a preview: MIME string and human-readable size."""
    return str(escape(f"{mime} {format_size(size)}"))


# --- Breadcrumb path ---------------------------------------------------------

@dataclass(frozen=True)
class PathProps:
    id: int
    path: str


def fs_href(account_id: int, path: str) -> str:
    path = path.strip("/")
    if not path:
        return f"/fs/{account_id}"
    return f"/fs/{account_id}/{quote(path)}"


def path_display(props: PathProps) -> str:
    """Breadcrumb with one link per ancestor directory of the path."""
    crumbs = [f'<a href="{fs_href(props.id, "")}" class="path-segment">{props.id}</a>']
    walked: list[str] = []
    for segment in props.path.strip("/").split("/"):
        if not segment:
            continue
        walked.append(segment)
        href = fs_href(props.id, "/".join(walked))
        crumbs.append(
            f'<a href="{escape(href)}" class="path-segment">{escape(segment)}</a>'
        )
    return '<div id="path">' + '<span class="path-sep">/</span>'.join(crumbs) + "</div>"


# --- Directory listing -------------------------------------------------------

@dataclass(frozen=True)
class FsItemsProps:
    nonce: str
    id: int
    items: tuple[DirEntry, ...]
    path: str


def _fs_item(account_id: int, parent: str, entry: DirEntry) -> str:
    href = fs_href(account_id, f"{parent.strip('/')}/{entry.name}")
    kind = "file" if entry.is_file else "dir"
    classes = f"fs-item fs-{kind}"
    if entry.visibility == ItemVisibility.PRIVATE:
        classes += " fs-private"
    size = format_size(entry.size) if entry.is_file and entry.size is not None else ""
    return (
        f'<a href="{escape(href)}" class="{classes}">'
        f'<span class="fs-name">{escape(entry.name)}</span>'
        f'<span class="fs-size">{escape(size)}</span>'
        f'<time class="fs-modified" datetime="{entry.last_modified.isoformat()}"></time>'
        "</a>"
    )


def _script_json(data: dict) -> str:
    return json.dumps(data).replace("<", "\\u003c").replace(">", "\\u003e")


def fs_items(props: FsItemsProps) -> str:
    """Directory entries plus the nonce-bound inline script that wires them up."""
    rows = "\n".join(_fs_item(props.id, props.path, entry) for entry in props.items)
    if not rows:
        rows = '<p id="fs-empty">This folder is empty.</p>'
    data = _script_json({
        "id": props.id,
        "path": props.path,
        "items": [
            {"name": e.name, "is_file": e.is_file, "visibility": e.visibility.value}
            for e in props.items
        ],
    })
    return (
        f'<div id="fs-items">\n{rows}\n</div>\n'
        f'<script nonce="{escape(props.nonce)}">'
        f'document.addEventListener("DOMContentLoaded", () => fsItems({data}));'
        "</script>"
    )
