"""Page Assembly — pure builders for the full listing and file-preview documents.

Invariants:
    - All functions are pure (no IO, no async, no DB)
    - Listing pages carry a nonce-scoped CSP; file pages carry the static CSP
      because they contain no inline script
    - Fragments are inserted as already-serialized markup; only the title is
      escaped here
"""

from markupsafe import escape

FILE_PAGE_CSP = "default-src 'self'; script-src 'self'"


def listing_csp(nonce: str) -> str:
    return f"default-src 'self'; script-src 'self' 'nonce-{nonce}'"


_COMMON_HEAD = """\
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <link rel="stylesheet" href="/static/css/main.css" />
    <link rel="stylesheet" href="/static/css/topbar.css" />
    <link rel="stylesheet" href="/static/css/path.css" />
    <link rel="stylesheet" href="/static/css/dark/main.css" />
    <link rel="shortcut icon" href="/static/images/favicon-dark.svg" type="image/x-icon" />"""


def listing_page(account_id: int, path: str, chrome: str, items_display: str) -> str:
    """Directory page: top bar and entry list, titled "<id>/<path>"."""
    title = escape(f"{account_id}/{path}")
    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
{_COMMON_HEAD}
    <link rel="stylesheet" href="/static/css/fs.css" />
    <title>{title}</title>
  </head>
  <body>
  {chrome}
  {items_display}
  <script src="/static/scripts/fs.js" defer></script>
  </body>
</html>"""


def file_page(chrome: str, head: str, path_display: str, display: str, info: str) -> str:
    """Single-file page: preview, breadcrumb and an escaped caption (info)."""
    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
{_COMMON_HEAD}
    {head}
    <script src="/static/scripts/file.js" defer></script>
    <title>Usercontent - GoodMorning Tex</title>
  </head>
  <body>
    {chrome}
    {path_display}
    <div id="display">
      {display}
      <br />
      <code id="info">{info}</code>
    </div>
  </body>
</html>"""
