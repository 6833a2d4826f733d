"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database, SMTP server or webhook
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("SMTP_HOST", "smtp.invalid")
os.environ.setdefault("STATIC_DIR", "__no_frontend_bundle__")
os.environ.setdefault("PUBLIC_BASE_URL", "http://forum.test")
