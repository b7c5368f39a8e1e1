"""Root conftest - shared test configuration."""

import os

# Tests never touch a real PostgreSQL instance
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
