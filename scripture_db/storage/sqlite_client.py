# ==============================================
# SQLiteClient
# ==============================================
#
# PURPOSE:
#   Manages one SQLite store (one file on disk): opening it,
#   installing the schema for a document kind, batched upserts,
#   and the post-load optimization pass.
#
# CLASS: SQLiteClient
# -------------------
#   Stateful — holds the connection to one store.
#
#   Constructor:
#   ------------
#   - __init__(path)
#       Store the file path. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() -> None
#       Create the parent directory if needed and open the file
#       in autocommit mode; transactions are explicit.
#
#   - disconnect() -> None
#       Close connection cleanly.
#
#   - transaction() -> context manager
#       Scoped unit of work: BEGIN … COMMIT, ROLLBACK on failure.
#
#   - ensure_schema(kind: DocumentKind) -> TableSpec
#       Idempotently install table, indexes, FTS index, triggers.
#
#   - upsert_batch(kind, rows) -> int
#       Insert-or-update rows keyed by the natural key, all in one
#       transaction. Return count written.
#
#   - optimize(kind) -> None
#       Merge FTS segments, VACUUM, ANALYZE.
#
#   - execute(query, params) / fetch_all(query, params) / count(kind)
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with SQLiteClient(...) as store:` usage.
#
# ==============================================

import logging
import sqlite3
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Sequence, Union
from contextlib import contextmanager

from scripture_db.documents.models import DocumentKind
from scripture_db.storage.schema import METADATA_COLUMNS, TableSpec, ensure_schema, table_spec
from scripture_db.storage.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


def upsert_statement(spec: TableSpec) -> str:
    """
    INSERT … ON CONFLICT DO UPDATE for a table.

    Keeps the row id on conflict so the update trigger (not a
    delete + insert) refreshes the FTS index.
    """
    columns = spec.insert_columns
    placeholders = ", ".join("?" for _ in columns)
    updates = ", ".join(
        f"{name} = excluded.{name}" for name in ("text",) + METADATA_COLUMNS
    )
    return (
        f"INSERT INTO {spec.table} ({', '.join(columns)}) "
        f"VALUES ({placeholders}) "
        f"ON CONFLICT({', '.join(spec.key_names)}) DO UPDATE SET "
        f"{updates}, updated_at = CURRENT_TIMESTAMP"
    )


class SQLiteClient:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.connection: Optional[sqlite3.Connection] = None

    @property
    def name(self) -> str:
        return self.path.name

    def connect(self) -> None:
        # Open the store file, creating it (and its directory) if needed
        if self.connection is not None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.connection = sqlite3.connect(str(self.path), isolation_level=None)
        self.connection.row_factory = sqlite3.Row

    def disconnect(self) -> None:
        if self.connection:
            self.connection.close()
            self.connection = None

    def _require_connection(self) -> sqlite3.Connection:
        if self.connection is None:
            raise RuntimeError(f"Not connected to SQLite store {self.path}")
        return self.connection

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        with unit_of_work(self._require_connection()) as connection:
            yield connection

    def ensure_schema(self, kind: DocumentKind) -> TableSpec:
        return ensure_schema(self._require_connection(), kind)

    def upsert_batch(self, kind: DocumentKind, rows: Sequence[Sequence[Any]]) -> int:
        """
        Upsert rows atomically.

        Args:
            kind: Document kind, selects the table.
            rows: One tuple per record: natural key values followed by text.
                  Metadata columns are written as NULL.

        Returns:
            Number of rows written (0 for an empty batch).

        Raises:
            sqlite3.Error: The whole batch has been rolled back.
        """
        if not rows:
            return 0
        spec = table_spec(kind)
        padding = (None,) * len(METADATA_COLUMNS)
        query = upsert_statement(spec)
        with self.transaction() as connection:
            connection.executemany(query, (tuple(row) + padding for row in rows))
        return len(rows)

    def optimize(self, kind: DocumentKind) -> None:
        """Compact the store after bulk load. Must run outside a transaction."""
        connection = self._require_connection()
        spec = table_spec(kind)
        connection.execute(f"INSERT INTO {spec.fts_table}({spec.fts_table}) VALUES ('optimize')")
        connection.execute("VACUUM")
        connection.execute("ANALYZE")
        logger.debug("Optimized %s", self.path)

    def count(self, kind: DocumentKind) -> int:
        spec = table_spec(kind)
        row = self._require_connection().execute(f"SELECT COUNT(*) FROM {spec.table}").fetchone()
        return int(row[0])

    def execute(self, query: str, params: Optional[Iterable[Any]] = None) -> None:
        # Execute a raw SQL statement (autocommit)
        connection = self._require_connection()
        if params is not None:
            connection.execute(query, tuple(params))
        else:
            connection.execute(query)

    def fetch_all(self, query: str, params: Optional[Iterable[Any]] = None) -> list[dict]:
        # Execute SELECT and return rows as dicts
        connection = self._require_connection()
        if params is not None:
            cursor = connection.execute(query, tuple(params))
        else:
            cursor = connection.execute(query)
        return [dict(row) for row in cursor.fetchall()]

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
