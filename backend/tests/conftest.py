"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally use real API keys or the default database
os.environ.setdefault("MIXIT_ANTHROPIC_API_KEY", "sk-ant-test-fake-key")
os.environ.setdefault("MIXIT_DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("MIXIT_LOG_FORMAT", "text")
