"""Directory listing — GET /fs/{id} and GET /fs/{id}/{dir} through the full app.

Invariants:
    - Every listing has a fresh nonce, and the CSP header nonce equals the script nonce
    - Owners see private entries; visitors do not; nobody sees dot-entries
    - Anonymous and unentitled requesters get the logged-out chrome
    - Directories are listed first, then files by name
"""

import re

from app.core.domain_types import ItemVisibility

ALICE = {"Cookie": "token=tok-alice"}
BOB = {"Cookie": "token=tok-bob"}
CAROL = {"Cookie": "token=tok-carol"}

_HEADER_NONCE = re.compile(r"script-src 'self' 'nonce-([^']+)'")
_SCRIPT_NONCE = re.compile(r'<script nonce="([^"]+)">')


def _entry_names(body: str) -> list[str]:
    return re.findall(r'<span class="fs-name">([^<]*)</span>', body)


async def test_listing_csp_nonce_matches_script_nonce(client, accounts, sandbox):
    res = await client.get("/fs/1", headers=ALICE)
    assert res.status_code == 200
    header_nonce = _HEADER_NONCE.search(res.headers["content-security-policy"]).group(1)
    script_nonce = _SCRIPT_NONCE.search(res.text).group(1)
    assert header_nonce == script_nonce
    assert res.headers["content-security-policy"].startswith("default-src 'self'; ")


async def test_two_listings_get_different_nonces(client, accounts, sandbox):
    first = await client.get("/fs/1", headers=ALICE)
    second = await client.get("/fs/1", headers=ALICE)
    nonce_a = _HEADER_NONCE.search(first.headers["content-security-policy"]).group(1)
    nonce_b = _HEADER_NONCE.search(second.headers["content-security-policy"]).group(1)
    assert nonce_a != nonce_b


async def test_owner_sees_private_entries(client, accounts, sandbox, flag):
    await flag("tex/secret.txt", ItemVisibility.PRIVATE)
    res = await client.get("/fs/1", headers=ALICE)
    assert "secret.txt" in _entry_names(res.text)
    assert "fs-private" in res.text


async def test_visitor_does_not_see_private_entries(client, accounts, sandbox, flag):
    await flag("tex/secret.txt", ItemVisibility.PRIVATE)
    await flag("tex/private-dir", ItemVisibility.PRIVATE)
    res = await client.get("/fs/1", headers=BOB)
    names = _entry_names(res.text)
    assert "secret.txt" not in names
    assert "private-dir" not in names
    assert "photo.png" in names


async def test_dot_entries_hidden_from_everyone(client, accounts, sandbox):
    for headers in (ALICE, BOB, {}):
        res = await client.get("/fs/1", headers=headers)
        assert ".hidden" not in _entry_names(res.text)


async def test_directories_listed_first_then_by_name(client, accounts, sandbox):
    res = await client.get("/fs/1", headers=ALICE)
    names = _entry_names(res.text)
    assert names[:2] == ["notes", "private-dir"]
    assert names[2:] == sorted(names[2:], key=str.casefold)


async def test_root_and_trailing_slash_are_equivalent(client, accounts, sandbox):
    root = await client.get("/fs/1", headers=ALICE)
    slash = await client.get("/fs/1/", headers=ALICE)
    assert _entry_names(root.text) == _entry_names(slash.text)


async def test_subdirectory_listing_links_into_path(client, accounts, sandbox):
    res = await client.get("/fs/1/notes", headers=BOB)
    assert res.status_code == 200
    assert _entry_names(res.text) == ["draft.tex"]
    assert 'href="/fs/1/notes/draft.tex"' in res.text
    assert "<title>1/notes</title>" in res.text


async def test_owner_gets_logged_in_chrome(client, accounts, sandbox):
    res = await client.get("/fs/1", headers=ALICE)
    assert "/api/tex/generic/v1/pfp/id/1" in res.text
    assert 'id="signin"' not in res.text


async def test_anonymous_gets_logged_out_chrome(client, accounts, sandbox):
    res = await client.get("/fs/1")
    assert res.status_code == 200
    assert 'id="signin"' in res.text
    assert "topbar-pfp" not in res.text


async def test_unentitled_owner_keeps_identity_but_not_chrome(
    client, accounts, storage_root, flag,
):
    root = storage_root / "3" / "tex"
    root.mkdir(parents=True)
    (root / "mine.txt").write_text("carol")
    await flag("tex/mine.txt", ItemVisibility.PRIVATE, account_id=3)

    res = await client.get("/fs/3", headers=CAROL)
    assert 'id="signin"' in res.text
    assert "mine.txt" in _entry_names(res.text)


async def test_empty_directory_renders_placeholder(client, accounts, sandbox):
    res = await client.get("/fs/2", headers=BOB)
    assert res.status_code == 200
    assert 'id="fs-empty"' in res.text


async def test_private_directory_looks_missing_to_visitor(client, accounts, sandbox, flag):
    await flag("tex/private-dir", ItemVisibility.PRIVATE)
    private = await client.get("/fs/1/private-dir", headers=BOB)
    missing = await client.get("/fs/1/no-such-dir", headers=BOB)
    assert private.status_code == missing.status_code == 404
    assert private.content == missing.content
    assert "fs-empty" not in private.text


async def test_private_directory_listed_for_owner(client, accounts, sandbox, flag):
    await flag("tex/private-dir", ItemVisibility.PRIVATE)
    res = await client.get("/fs/1/private-dir", headers=ALICE)
    assert res.status_code == 200
    assert _entry_names(res.text) == ["inner.txt"]


async def test_dot_segments_inside_sandbox_list_the_target(client, accounts, sandbox):
    res = await client.get("/fs/1/ghost/%2E%2E/notes", headers=ALICE)
    assert res.status_code == 200
    assert _entry_names(res.text) == ["draft.tex"]
    assert "<title>1/notes</title>" in res.text
