"""SQLite document store.

One ``documents`` table holds every collection: a row per
(namespace, collection, doc_id) with the camelCase record as JSON text.
Good enough for a single-office install; Firestore is the shared option.
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from charity_console.exceptions import DocumentStoreError
from charity_console.repositories.interfaces import DocumentStore, Record

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    namespace  TEXT NOT NULL,
    collection TEXT NOT NULL,
    doc_id     TEXT NOT NULL,
    data       TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (namespace, collection, doc_id)
);
CREATE INDEX IF NOT EXISTS idx_documents_collection
    ON documents(namespace, collection);
"""

UPSERT = """
INSERT INTO documents (namespace, collection, doc_id, data, updated_at)
VALUES (?, ?, ?, ?, ?)
ON CONFLICT(namespace, collection, doc_id)
DO UPDATE SET data = excluded.data, updated_at = excluded.updated_at
"""


class SQLiteDatabase:
    """Lazily opened connection to the console's SQLite file."""

    def __init__(
        self, path: str | Path = ":memory:", check_same_thread: bool = True
    ) -> None:
        self._path = str(path)
        self._check_same_thread = check_same_thread
        self._connection: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            conn = sqlite3.connect(self._path, check_same_thread=self._check_same_thread)
            conn.row_factory = sqlite3.Row
            self._connection = conn
        return self._connection

    def initialize(self) -> None:
        """Create the table if this is a fresh file."""
        with self.get_connection() as conn:
            conn.executescript(SCHEMA)

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None


class SQLiteDocumentStore(DocumentStore):
    def __init__(self, database: SQLiteDatabase) -> None:
        self._db = database

    def _execute(
        self, operation: str, collection: str, sql: str, params: Sequence[object]
    ) -> list[sqlite3.Row]:
        try:
            with self._db.get_connection() as conn:
                return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise DocumentStoreError(operation, collection, str(e)) from e

    def list(self, namespace: str, collection: str) -> list[Record]:
        rows = self._execute(
            "list",
            collection,
            "SELECT data FROM documents WHERE namespace = ? AND collection = ? "
            "ORDER BY rowid",
            (namespace, collection),
        )
        return [json.loads(row["data"]) for row in rows]

    def get(self, namespace: str, collection: str, doc_id: str) -> Record | None:
        rows = self._execute(
            "get",
            collection,
            "SELECT data FROM documents "
            "WHERE namespace = ? AND collection = ? AND doc_id = ?",
            (namespace, collection, doc_id),
        )
        return json.loads(rows[0]["data"]) if rows else None

    def put(self, namespace: str, collection: str, doc_id: str, record: Record) -> None:
        payload = json.dumps(record, ensure_ascii=False)
        stamp = datetime.now(UTC).isoformat()
        self._execute(
            "put", collection, UPSERT, (namespace, collection, doc_id, payload, stamp)
        )

    def delete(self, namespace: str, collection: str, doc_id: str) -> None:
        self._execute(
            "delete",
            collection,
            "DELETE FROM documents WHERE namespace = ? AND collection = ? AND doc_id = ?",
            (namespace, collection, doc_id),
        )

    def close(self) -> None:
        self._db.close()
