# ==============================================
# Schema Builder
# ==============================================
#
# PURPOSE:
#   Define the relational layout of a store for one document kind
#   and install it idempotently:
#     - record table (surrogate id, natural key, text, metadata,
#       timestamps, UNIQUE over the natural key)
#     - lookup indexes
#     - FTS5 external-content shadow index
#     - AFTER INSERT / DELETE / UPDATE triggers keeping the shadow
#       index in lockstep with the record table
#
# TABLE SPECS:
# ------------
#   VERSE      → verses(translation, book, chapter, verse, text, ...)
#   PARAGRAPH  → paragraphs(section_id, paragraph_index, text, ...)
#
# FUNCTIONS:
# ----------
# - table_spec(kind) -> TableSpec
# - schema_statements(spec) -> list[str]
# - ensure_schema(connection, kind) -> TableSpec
#
# ==============================================

import sqlite3
from dataclasses import dataclass

from scripture_db.documents.models import DocumentKind
from scripture_db.storage.unit_of_work import unit_of_work

METADATA_COLUMNS = ("identities", "locations", "cross_references")


@dataclass(frozen=True)
class TableSpec:
    """Column layout of one record table."""
    table: str
    key_columns: tuple[tuple[str, str], ...]  # (name, SQL type), natural key order
    indexes: tuple[tuple[str, tuple[str, ...]], ...]

    @property
    def key_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.key_columns)

    @property
    def fts_table(self) -> str:
        return f"{self.table}_fts"

    @property
    def indexed_columns(self) -> tuple[str, ...]:
        # Every key and text-bearing column is mirrored into the FTS index
        return self.key_names + ("text",) + METADATA_COLUMNS

    @property
    def insert_columns(self) -> tuple[str, ...]:
        return self.key_names + ("text",) + METADATA_COLUMNS


VERSE_TABLE = TableSpec(
    table="verses",
    key_columns=(
        ("translation", "TEXT"),
        ("book", "TEXT"),
        ("chapter", "INTEGER"),
        ("verse", "INTEGER"),
    ),
    indexes=(
        ("idx_verses_book_chapter", ("book", "chapter")),
        ("idx_verses_translation", ("translation",)),
    ),
)

PARAGRAPH_TABLE = TableSpec(
    table="paragraphs",
    key_columns=(
        ("section_id", "TEXT"),
        ("paragraph_index", "INTEGER"),
    ),
    indexes=(
        ("idx_paragraphs_section", ("section_id",)),
    ),
)

_TABLE_SPECS = {
    DocumentKind.VERSE: VERSE_TABLE,
    DocumentKind.PARAGRAPH: PARAGRAPH_TABLE,
}


def table_spec(kind: DocumentKind) -> TableSpec:
    try:
        return _TABLE_SPECS[kind]
    except KeyError:
        raise ValueError(f"No table layout for document kind: {kind}") from None


def _create_table(spec: TableSpec) -> str:
    columns = ["id INTEGER PRIMARY KEY AUTOINCREMENT"]
    columns += [f"{name} {sql_type} NOT NULL" for name, sql_type in spec.key_columns]
    columns.append("text TEXT NOT NULL")
    columns += [f"{name} TEXT" for name in METADATA_COLUMNS]
    columns.append("created_at DATETIME DEFAULT CURRENT_TIMESTAMP")
    columns.append("updated_at DATETIME DEFAULT CURRENT_TIMESTAMP")
    columns.append(f"UNIQUE({', '.join(spec.key_names)})")
    body = ",\n    ".join(columns)
    return f"CREATE TABLE IF NOT EXISTS {spec.table} (\n    {body}\n)"


def _create_fts_table(spec: TableSpec) -> str:
    columns = ",\n    ".join(spec.indexed_columns)
    return (
        f"CREATE VIRTUAL TABLE IF NOT EXISTS {spec.fts_table} USING fts5(\n"
        f"    {columns},\n"
        f"    content='{spec.table}',\n"
        f"    content_rowid='id'\n"
        f")"
    )


def _fts_row(spec: TableSpec, alias: str) -> tuple[str, str]:
    """Column list and value list for writing alias (new/old) into the FTS table."""
    columns = ", ".join(("rowid",) + spec.indexed_columns)
    values = ", ".join([f"{alias}.id"] + [f"{alias}.{name}" for name in spec.indexed_columns])
    return columns, values


def _create_triggers(spec: TableSpec) -> list[str]:
    new_columns, new_values = _fts_row(spec, "new")
    old_columns, old_values = _fts_row(spec, "old")
    fts = spec.fts_table

    add_new = f"INSERT INTO {fts}({new_columns}) VALUES ({new_values});"
    remove_old = f"INSERT INTO {fts}({fts}, {old_columns}) VALUES ('delete', {old_values});"

    return [
        f"CREATE TRIGGER IF NOT EXISTS {fts}_insert AFTER INSERT ON {spec.table} BEGIN\n"
        f"    {add_new}\n"
        f"END",
        f"CREATE TRIGGER IF NOT EXISTS {fts}_delete AFTER DELETE ON {spec.table} BEGIN\n"
        f"    {remove_old}\n"
        f"END",
        f"CREATE TRIGGER IF NOT EXISTS {fts}_update AFTER UPDATE ON {spec.table} BEGIN\n"
        f"    {remove_old}\n"
        f"    {add_new}\n"
        f"END",
    ]


def schema_statements(spec: TableSpec) -> list[str]:
    """All DDL for a store, in creation order."""
    statements = [_create_table(spec)]
    statements += [
        f"CREATE INDEX IF NOT EXISTS {name} ON {spec.table}({', '.join(columns)})"
        for name, columns in spec.indexes
    ]
    statements.append(_create_fts_table(spec))
    statements += _create_triggers(spec)
    return statements


def ensure_schema(connection: sqlite3.Connection, kind: DocumentKind) -> TableSpec:
    """
    Create the table, indexes, FTS index and triggers for kind if absent.

    Runs in a single transaction, so a store never has a record table
    without its shadow index and triggers. Safe to call repeatedly.

    Args:
        connection: Open connection in autocommit mode (isolation_level=None).
        kind: Document kind the store holds.

    Returns:
        The TableSpec that was installed.
    """
    spec = table_spec(kind)
    with unit_of_work(connection):
        for statement in schema_statements(spec):
            connection.execute(statement)
    return spec
