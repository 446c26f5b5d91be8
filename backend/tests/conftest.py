"""
Shared pytest fixtures for backend tests.
Uses a temp-file SQLite database for isolation.
"""
import pytest
import sqlite3
import sys
import os
from types import SimpleNamespace

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
import database
import gateway


@pytest.fixture
def test_db(monkeypatch, tmp_path):
    """
    Create an isolated test database for each test.
    Uses a temp file (not :memory:) because database.py opens new connections per operation.
    """
    db_path = str(tmp_path / "test.db")
    monkeypatch.setattr(database, "DATABASE_PATH", db_path)
    monkeypatch.setattr(database, "init_db", lambda: None)

    # Create tables directly (skip alembic for tests)
    conn = sqlite3.connect(db_path)
    conn.executescript("""
        CREATE TABLE collections (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL DEFAULT '[]',
            updated_at TEXT NOT NULL
        );
    """)
    conn.commit()
    conn.close()

    yield db_path


@pytest.fixture
def app_client(test_db, monkeypatch):
    """
    Create a test client for the FastAPI app.
    The app loads its session from the test database on startup.
    """
    from fastapi.testclient import TestClient
    import main

    # Skip alembic in tests - tables already created by test_db fixture
    monkeypatch.setattr(database, "init_db", lambda: None)

    with TestClient(main.app) as client:
        yield client


class FakeMessages:
    """Stands in for AsyncAnthropic().messages, recording each create() call."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


@pytest.fixture
def fake_model(monkeypatch):
    """Replace the Anthropic client with a fake and configure an API key."""
    messages = FakeMessages(text="Hello from the model")
    monkeypatch.setattr(gateway, "client", SimpleNamespace(messages=messages))
    monkeypatch.setattr(config, "ANTHROPIC_API_KEY", "test-key")
    return messages
