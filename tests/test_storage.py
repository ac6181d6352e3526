# ==============================================
# Tests for Storage: schema + SQLite client
# ==============================================

import sqlite3

import pytest

from scripture_db.documents.models import DocumentKind
from scripture_db.storage.schema import VERSE_TABLE, ensure_schema, schema_statements
from scripture_db.storage.sqlite_client import SQLiteClient


def object_names(store, object_type):
    rows = store.fetch_all(
        "SELECT name FROM sqlite_master WHERE type = ? ORDER BY name", (object_type,)
    )
    return {row["name"] for row in rows}


def fts_rowids(store, table, query):
    rows = store.fetch_all(
        f"SELECT rowid FROM {table}_fts WHERE {table}_fts MATCH ? ORDER BY rowid", (query,)
    )
    return [row["rowid"] for row in rows]


class TestSchemaBuilder:
    def test_verse_schema_objects(self, verse_store):
        assert {"verses", "verses_fts"} <= object_names(verse_store, "table")
        assert {"idx_verses_book_chapter", "idx_verses_translation"} <= object_names(verse_store, "index")
        assert object_names(verse_store, "trigger") == {
            "verses_fts_insert", "verses_fts_delete", "verses_fts_update",
        }

    def test_paragraph_schema_objects(self, paragraph_store):
        assert {"paragraphs", "paragraphs_fts"} <= object_names(paragraph_store, "table")
        assert "idx_paragraphs_section" in object_names(paragraph_store, "index")
        assert object_names(paragraph_store, "trigger") == {
            "paragraphs_fts_insert", "paragraphs_fts_delete", "paragraphs_fts_update",
        }

    def test_verse_columns(self, verse_store):
        columns = [row["name"] for row in verse_store.fetch_all("PRAGMA table_info(verses)")]
        assert columns == [
            "id", "translation", "book", "chapter", "verse", "text",
            "identities", "locations", "cross_references", "created_at", "updated_at",
        ]

    def test_paragraph_columns(self, paragraph_store):
        columns = [row["name"] for row in paragraph_store.fetch_all("PRAGMA table_info(paragraphs)")]
        assert columns == [
            "id", "section_id", "paragraph_index", "text",
            "identities", "locations", "cross_references", "created_at", "updated_at",
        ]

    def test_ensure_schema_is_idempotent(self, verse_store):
        verse_store.upsert_batch(DocumentKind.VERSE, [("CPDV", "Genesis", 1, 1, "In the beginning")])
        verse_store.ensure_schema(DocumentKind.VERSE)
        ensure_schema(verse_store.connection, DocumentKind.VERSE)
        assert verse_store.count(DocumentKind.VERSE) == 1
        assert len(object_names(verse_store, "trigger")) == 3

    def test_statements_cover_every_object(self):
        statements = schema_statements(VERSE_TABLE)
        assert len(statements) == 1 + 2 + 1 + 3
        assert all("IF NOT EXISTS" in statement for statement in statements)

    def test_natural_key_is_unique(self, verse_store):
        verse_store.upsert_batch(DocumentKind.VERSE, [("CPDV", "Genesis", 1, 1, "first")])
        with pytest.raises(sqlite3.IntegrityError):
            verse_store.execute(
                "INSERT INTO verses (translation, book, chapter, verse, text) VALUES (?, ?, ?, ?, ?)",
                ("CPDV", "Genesis", 1, 1, "duplicate"),
            )


class TestShadowIndex:
    def test_insert_is_indexed(self, verse_store):
        verse_store.upsert_batch(DocumentKind.VERSE, [
            ("CPDV", "Genesis", 1, 1, "In the beginning God created heaven"),
            ("CPDV", "Genesis", 1, 2, "And the earth was void and empty"),
        ])
        assert fts_rowids(verse_store, "verses", "void") == [2]

    def test_update_is_mirrored(self, verse_store):
        verse_store.upsert_batch(DocumentKind.VERSE, [("CPDV", "Genesis", 1, 1, "darkness")])
        verse_store.execute("UPDATE verses SET text = ? WHERE verse = 1", ("light",))
        assert fts_rowids(verse_store, "verses", "darkness") == []
        assert fts_rowids(verse_store, "verses", "light") == [1]

    def test_delete_is_mirrored(self, paragraph_store):
        paragraph_store.upsert_batch(DocumentKind.PARAGRAPH, [("part-1", 0, "Faith seeks understanding")])
        paragraph_store.execute("DELETE FROM paragraphs")
        assert fts_rowids(paragraph_store, "paragraphs", "faith") == []

    def test_integrity_check_passes_after_upserts(self, verse_store):
        rows = [("CPDV", "Genesis", 1, 1, "first text")]
        verse_store.upsert_batch(DocumentKind.VERSE, rows)
        verse_store.upsert_batch(DocumentKind.VERSE, [("CPDV", "Genesis", 1, 1, "second text")])
        verse_store.execute("INSERT INTO verses_fts(verses_fts) VALUES ('integrity-check')")
        assert fts_rowids(verse_store, "verses", "first") == []
        assert fts_rowids(verse_store, "verses", "second") == [1]


class TestSQLiteClient:
    def test_requires_connection(self, tmp_path):
        client = SQLiteClient(tmp_path / "closed.db")
        with pytest.raises(RuntimeError):
            client.ensure_schema(DocumentKind.VERSE)

    def test_connect_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "out" / "store.db"
        with SQLiteClient(path) as client:
            client.ensure_schema(DocumentKind.VERSE)
        assert path.exists()

    def test_upsert_replaces_text_and_keeps_id(self, verse_store):
        verse_store.upsert_batch(DocumentKind.VERSE, [("DRB", "John", 1, 1, "old")])
        verse_store.upsert_batch(DocumentKind.VERSE, [("DRB", "John", 1, 1, "new")])
        rows = verse_store.fetch_all("SELECT id, text, identities, locations, cross_references FROM verses")
        assert rows == [{
            "id": 1, "text": "new", "identities": None, "locations": None, "cross_references": None,
        }]

    def test_empty_batch(self, verse_store):
        assert verse_store.upsert_batch(DocumentKind.VERSE, []) == 0

    def test_failed_batch_is_rolled_back(self, verse_store):
        verse_store.upsert_batch(DocumentKind.VERSE, [("CPDV", "Ruth", 1, 1, "kept")])
        with pytest.raises(sqlite3.IntegrityError):
            verse_store.upsert_batch(DocumentKind.VERSE, [
                ("CPDV", "Ruth", 1, 2, "valid row in a failing batch"),
                ("CPDV", "Ruth", 1, 3, None),
            ])
        texts = [row["text"] for row in verse_store.fetch_all("SELECT text FROM verses")]
        assert texts == ["kept"]
        assert fts_rowids(verse_store, "verses", "failing") == []

    def test_transaction_rolls_back_on_error(self, verse_store):
        with pytest.raises(ValueError):
            with verse_store.transaction() as connection:
                connection.execute(
                    "INSERT INTO verses (translation, book, chapter, verse, text) VALUES ('X', 'Joel', 1, 1, 't')"
                )
                raise ValueError("abort")
        assert verse_store.count(DocumentKind.VERSE) == 0

    def test_original_error_kept_when_sqlite_already_rolled_back(self, verse_store):
        with pytest.raises(ValueError, match="disk full"):
            with verse_store.transaction() as connection:
                connection.execute(
                    "INSERT INTO verses (translation, book, chapter, verse, text) VALUES ('X', 'Joel', 1, 1, 't')"
                )
                connection.execute("ROLLBACK")
                raise ValueError("disk full")
        assert not verse_store.connection.in_transaction
        assert verse_store.count(DocumentKind.VERSE) == 0

    def test_optimize_keeps_data_searchable(self, verse_store):
        verse_store.upsert_batch(DocumentKind.VERSE, [("CPDV", "Psalms", 23, 1, "The Lord is my shepherd")])
        verse_store.optimize(DocumentKind.VERSE)
        assert fts_rowids(verse_store, "verses", "shepherd") == [1]
        assert verse_store.fetch_all("SELECT * FROM sqlite_stat1")
