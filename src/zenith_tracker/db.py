"""SQLite-backed storage for the application snapshot."""
import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from zenith_tracker.config import get_db_path
from zenith_tracker.models import AppState

logger = logging.getLogger(__name__)

STORAGE_KEY = "zenith_app_data_v1"

SCHEMA = """
CREATE TABLE IF NOT EXISTS app_state (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    saved_at TEXT
);
"""


class StateLoadError(Exception):
    """The stored snapshot exists but cannot be decoded."""


def get_connection(db_path: str) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str) -> None:
    """Initialize the database, creating the snapshot table if it doesn't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


def load_state(db_path: str, key: str = STORAGE_KEY) -> AppState:
    """Load the stored snapshot, or an empty state on first run."""
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM app_state WHERE key = ?", (key,)).fetchone()
    conn.close()
    if row is None:
        logger.info("No saved state under %s, starting fresh", key)
        return AppState()
    try:
        data = json.loads(row["value"])
    except json.JSONDecodeError as e:
        raise StateLoadError(f"Saved state under {key!r} is not valid JSON: {e}") from e
    return AppState.from_dict(data)


def save_state(db_path: str, state: AppState, key: str = STORAGE_KEY) -> None:
    """Replace the stored snapshot wholesale."""
    value = json.dumps(state.to_dict())
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO app_state (key, value, saved_at) VALUES (?, ?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, saved_at=excluded.saved_at",
        (key, value, datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    logger.debug("Saved state under %s (%d bytes)", key, len(value))


def get_saved_at(db_path: str, key: str = STORAGE_KEY) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT saved_at FROM app_state WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["saved_at"] if row else None


class StateStore:
    """Owns the load/save lifecycle of the snapshot for one database file."""

    def __init__(self, db_path: str | None = None, key: str = STORAGE_KEY):
        self.db_path = db_path or get_db_path()
        self.key = key
        init_db(self.db_path)

    def load(self) -> AppState:
        return load_state(self.db_path, self.key)

    def save(self, state: AppState) -> AppState:
        save_state(self.db_path, state, self.key)
        return state
