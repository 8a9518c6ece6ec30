"""Service test fixtures — async DB, sandbox tree on disk, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_settings dependencies overridden to the test DB and a tmp storage root
    - Account 1 (alice) owns the sandbox; account 2 (bob) is an entitled visitor;
      account 3 (carol) has no tex entitlement

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - The sandbox is real files under tmp_path so the pipeline exercises LocalStorage
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.config import Settings, get_settings
from app.db.base import Base
from app.core.domain_types import ItemVisibility
from app.infrastructure.database import get_db
from app.models.account import Account
from app.models.visibility_flag import VisibilityFlag
from app.main import app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\n%%EOF\n"
TEX_SOURCE = '\\section{<Intro> & "quotes"}\n'


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def storage_root(tmp_path):
    return tmp_path / "users"


@pytest.fixture
def settings(storage_root):
    return Settings(storage_root=storage_root, default_visibility="public")


@pytest.fixture
async def client(test_session_factory, settings):
    """FastAPI test client with DB and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def accounts(test_db):
    """alice (owner of the sandbox), bob (visitor), carol (no tex entitlement)."""
    rows = [
        Account(id=1, username="alice", token="tok-alice", services=["tex"]),
        Account(id=2, username="bob", token="tok-bob", services=["tex", "blue"]),
        Account(id=3, username="carol", token="tok-carol", services=["blue"]),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return {row.username: row for row in rows}


@pytest.fixture
def sandbox(storage_root):
    """alice's tex tree on disk."""
    root = storage_root / "1" / "tex"
    (root / "notes").mkdir(parents=True)
    (root / "private-dir").mkdir()
    (root / "notes" / "draft.tex").write_text(TEX_SOURCE)
    (root / "private-dir" / "inner.txt").write_text("inner")
    (root / "photo.png").write_bytes(PNG_BYTES)
    (root / "song.opus").write_bytes(b"OggS" + b"\x00" * 16)
    (root / "paper.pdf").write_bytes(PDF_BYTES)
    (root / "secret.txt").write_text("top secret")
    (root / "secret.pdf").write_bytes(PDF_BYTES)
    (root / "main.rs").write_text("fn main() { println!(\"<hi>\"); }\n")
    (root / "readme.txt").write_text("plain text\n")
    (root / "page.html").write_text("<h1>Rendered</h1>")
    (root / "blob.qqq").write_bytes(b"\x00\x01\x02")
    (root / ".hidden").write_text("dot")
    (storage_root / "2" / "tex").mkdir(parents=True)
    return root


@pytest.fixture
async def flag(test_db, accounts):
    """Insert a visibility flag: await flag("tex/secret.txt", ItemVisibility.PRIVATE)."""
    async def _flag(path: str, visibility: ItemVisibility, account_id: int = 1):
        test_db.add(VisibilityFlag(
            account_id=account_id, path=path, visibility=visibility.value,
        ))
        await test_db.commit()
    return _flag
