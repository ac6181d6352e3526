# ==============================================
# STORAGE: SQLite stores with FTS5
# ==============================================
#
# This package handles all database operations:
# opening stores, installing schemas, and upserting records.
#
# Modules:
# --------
# - schema.py         → Table layouts, FTS5 shadow index, sync triggers
# - unit_of_work.py   → Scoped transaction helper
# - sqlite_client.py  → One SQLite store: connect, upsert, optimize
# - importer.py       → Walks a typed document into batched upserts
#
# ==============================================

from .schema import PARAGRAPH_TABLE, VERSE_TABLE, TableSpec, ensure_schema, table_spec
from .sqlite_client import SQLiteClient
from .importer import CorpusImporter, ImportResult
from .unit_of_work import unit_of_work

__all__ = [
    "CorpusImporter",
    "ImportResult",
    "PARAGRAPH_TABLE",
    "SQLiteClient",
    "TableSpec",
    "VERSE_TABLE",
    "ensure_schema",
    "table_spec",
    "unit_of_work",
]
