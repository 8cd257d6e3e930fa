"""SQLite storage for clipboard history records."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from clipkeep.capture.types import ContentKind, ContentRecord, ProducerAttribution
from clipkeep.core.errors import DuplicateContentError, StorageError
from clipkeep.core.secure_io import secure_create_file, secure_mkdir

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS clipboard_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    content_type TEXT NOT NULL,
    content TEXT NOT NULL,
    content_hash TEXT NOT NULL,
    preview TEXT,
    created_at REAL NOT NULL,
    source_app TEXT,
    source_bundle_id TEXT,
    UNIQUE(content_hash)
);

CREATE INDEX IF NOT EXISTS idx_history_type ON clipboard_history(content_type);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


class HistoryStorage:
    """SQLite-backed StorageSink.

    The UNIQUE constraint on content_hash is the only dedup mechanism: a
    second insert with the same fingerprint is rejected, never overwritten.
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize storage.

        Args:
            db_path: Path to SQLite database file (created owner-only).

        Raises:
            StorageError: If the database cannot be opened or initialized.
        """
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        try:
            self._ensure_db()
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Failed to open history database {db_path}: {e}") from e

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _ensure_db(self) -> None:
        """Create database and tables if they don't exist."""
        secure_mkdir(self._db_path.parent)
        secure_create_file(self._db_path)

        self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(SCHEMA_SQL)

        cur = self._conn.execute(
            "SELECT value FROM metadata WHERE key = 'schema_version'"
        )
        if cur.fetchone() is None:
            self._conn.execute(
                "INSERT INTO metadata (key, value) VALUES (?, ?)",
                ("schema_version", str(SCHEMA_VERSION)),
            )
            self._conn.commit()

    def _row_to_record(self, row: sqlite3.Row) -> ContentRecord:
        producer = None
        if row["source_app"] is not None or row["source_bundle_id"] is not None:
            producer = ProducerAttribution(
                name=row["source_app"], bundle_id=row["source_bundle_id"]
            )
        return ContentRecord(
            kind=ContentKind(row["content_type"]),
            content=row["content"],
            fingerprint=row["content_hash"],
            preview=row["preview"] or "",
            timestamp=row["created_at"],
            producer=producer,
        )

    def insert(self, record: ContentRecord) -> int:
        """Insert a record. Returns its id.

        Raises:
            DuplicateContentError: If the fingerprint is already stored.
            StorageError: For any other database failure.
        """
        assert self._conn is not None
        producer = record.producer or ProducerAttribution()
        try:
            cur = self._conn.execute(
                """INSERT INTO clipboard_history
                   (content_type, content, content_hash, preview, created_at,
                    source_app, source_bundle_id)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    record.kind.value,
                    record.content,
                    record.fingerprint,
                    record.preview,
                    record.timestamp,
                    producer.name,
                    producer.bundle_id,
                ),
            )
            self._conn.commit()
        except sqlite3.IntegrityError as e:
            self._conn.rollback()
            if "UNIQUE constraint failed" in str(e):
                raise DuplicateContentError(record.fingerprint) from e
            raise StorageError(f"Failed to save {record.kind.value} record: {e}") from e
        except sqlite3.Error as e:
            self._conn.rollback()
            raise StorageError(f"Failed to save {record.kind.value} record: {e}") from e

        record_id = cur.lastrowid
        assert record_id is not None
        return record_id

    def get(self, record_id: int) -> ContentRecord | None:
        """Get record by id, or None if not found."""
        assert self._conn is not None
        cur = self._conn.execute(
            "SELECT * FROM clipboard_history WHERE id = ?", (record_id,)
        )
        row = cur.fetchone()
        return self._row_to_record(row) if row else None

    def get_by_fingerprint(self, fingerprint: str) -> ContentRecord | None:
        """Get record by content fingerprint, or None if not found."""
        assert self._conn is not None
        cur = self._conn.execute(
            "SELECT * FROM clipboard_history WHERE content_hash = ?", (fingerprint,)
        )
        row = cur.fetchone()
        return self._row_to_record(row) if row else None

    def list_recent(
        self,
        limit: int = 50,
        offset: int = 0,
        content_type: ContentKind | None = None,
    ) -> list[ContentRecord]:
        """List records newest first, optionally filtered by format."""
        assert self._conn is not None
        if content_type is not None:
            cur = self._conn.execute(
                """SELECT * FROM clipboard_history WHERE content_type = ?
                   ORDER BY id DESC LIMIT ? OFFSET ?""",
                (content_type.value, limit, offset),
            )
        else:
            cur = self._conn.execute(
                "SELECT * FROM clipboard_history ORDER BY id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            )
        return [self._row_to_record(row) for row in cur.fetchall()]

    def count(self) -> int:
        """Total number of stored records."""
        assert self._conn is not None
        cur = self._conn.execute("SELECT COUNT(*) FROM clipboard_history")
        return cur.fetchone()[0]

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
