"""Root conftest: shared test configuration."""

import os

# Ensure tests never pick up a real account or database
os.environ.setdefault("FEVER_API_KEY", "apisecretkey")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
