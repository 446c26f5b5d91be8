import sqlite3
import json
import logging
from datetime import datetime
from typing import Sequence, TypeVar
from contextlib import contextmanager

from pydantic import BaseModel, TypeAdapter, ValidationError

import config

logger = logging.getLogger(__name__)

DATABASE_PATH = config.DATABASE_PATH

# One row per collection; keys kept from the browser local-storage layout
MESSAGES_KEY = "ai-assistant-messages"
TEXTS_KEY = "ai-assistant-texts"
TASKS_KEY = "ai-assistant-tasks"
HABITS_KEY = "ai-assistant-habits"

RecordT = TypeVar("RecordT", bound=BaseModel)


@contextmanager
def get_db():
    """Context manager for database connections."""
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()

def init_db():
    """Initialize database by running Alembic migrations."""
    import subprocess
    import os

    # Run alembic upgrade from the backend directory
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    subprocess.run(
        ["alembic", "upgrade", "head"],
        cwd=backend_dir,
        check=True,
        env={**os.environ, "DATABASE_PATH": os.path.abspath(DATABASE_PATH)},
    )


def _adapter(record_type: type[RecordT]) -> TypeAdapter:
    return TypeAdapter(tuple[record_type, ...])


def load(key: str, record_type: type[RecordT]) -> tuple[RecordT, ...]:
    """
    Load the collection stored under key.
    A key that was never written loads as an empty tuple. So does a stored
    document that no longer matches record_type: there is no migration path,
    the next save overwrites it.
    """
    try:
        with get_db() as conn:
            row = conn.execute(
                "SELECT value FROM collections WHERE key = ?", (key,)
            ).fetchone()
    except sqlite3.Error as e:
        logger.error("Failed to load %s collection: %s", key, e)
        return ()
    if not row:
        return ()
    try:
        return _adapter(record_type).validate_json(row["value"])
    except ValidationError as e:
        logger.error("Discarding unreadable %s collection: %s", key, e)
        return ()


def save(key: str, collection: Sequence[BaseModel]) -> bool:
    """
    Persist the whole collection under key, replacing what was there.
    Returns False instead of raising when the write fails; callers keep their
    in-memory copy either way.
    """
    try:
        value = json.dumps([record.model_dump(mode="json") for record in collection])
        with get_db() as conn:
            conn.execute(
                """INSERT INTO collections (key, value, updated_at) VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at""",
                (key, value, datetime.now().isoformat())
            )
            conn.commit()
    except (sqlite3.Error, ValueError, TypeError) as e:
        logger.warning("Failed to save %s collection (%d records): %s", key, len(collection), e)
        return False
    return True
