"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or the default storage root
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("STORAGE_ROOT", "/nonexistent/usercontent-test-root")
os.environ.setdefault("LOG_FORMAT", "text")
