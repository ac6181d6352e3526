# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - bible_data        → small raw Bible translation (OT, NT, an
#                       extra-canonical book, charset, bad keys)
# - catechism_data    → small raw catechism with an empty paragraph
# - verse_store       → connected SQLiteClient with the verse schema
# - paragraph_store   → connected SQLiteClient with the paragraph schema
# - source_dir        → tmp directory with CPDV.json, DRB.json, ccc.json
# - clean_env         → configuration env vars removed, singleton reset
#
# ==============================================

import json

import pytest

from scripture_db.config import reset_config
from scripture_db.documents.models import DocumentKind
from scripture_db.storage.sqlite_client import SQLiteClient


@pytest.fixture
def bible_data() -> dict:
    """A raw Bible translation as found on disk."""
    return {
        "charset": "UTF-8",
        "Genesis": {
            "1": {
                "1": "In the beginning God created heaven, and earth.",
                "2": "  And the earth was void and empty.  ",
                "1a": "not a verse",
            },
            "2": {
                "1": "So the heavens and the earth were finished.",
            },
            "abc": {
                "1": "not a chapter",
            },
        },
        "Tobit": {
            "1": {
                "1": "Tobias of the tribe and city of Nephthali.",
            },
        },
        "Matthew": {
            "1": {
                "1": "The book of the generation of Jesus Christ.",
                "2": "Abraham begot Isaac.",
            },
        },
        "Prayer of Manasses": {
            "1": {
                "1": "O Lord almighty, God of our fathers.",
            },
        },
    }


@pytest.fixture
def catechism_data() -> dict:
    """A raw catechism with one section holding an empty paragraph."""
    return {
        "page_nodes": {
            "part-1": {
                "paragraphs": [
                    {"elements": [
                        {"type": "text", "text": "God, infinitely perfect "},
                        {"type": "ref", "number": "1"},
                    ]},
                    {"elements": []},
                    {"elements": [{"type": "text", "text": "Man is capable of God."}]},
                    {"elements": [{"type": "text", "text": "The desire for God is written."}]},
                ],
            },
            "part-2": {
                "paragraphs": [
                    {"elements": [
                        {"type": "text", "text": "In "},
                        {"type": "ref", "number": "3"},
                        {"type": "text", "text": " the beginning"},
                    ]},
                ],
            },
            "no-paragraphs": {"title": "Prologue"},
        },
    }


@pytest.fixture
def verse_store(tmp_path):
    with SQLiteClient(tmp_path / "verses.db") as store:
        store.ensure_schema(DocumentKind.VERSE)
        yield store


@pytest.fixture
def paragraph_store(tmp_path):
    with SQLiteClient(tmp_path / "paragraphs.db") as store:
        store.ensure_schema(DocumentKind.PARAGRAPH)
        yield store


@pytest.fixture
def source_dir(tmp_path, bible_data, catechism_data):
    directory = tmp_path / "sources"
    directory.mkdir()
    (directory / "CPDV.json").write_text(json.dumps(bible_data), encoding="utf-8")
    drb = {
        "Genesis": {"1": {"1": "In the beginning God created heaven and earth."}},
        "John": {"1": {"1": "In the beginning was the Word."}},
    }
    (directory / "DRB.json").write_text(json.dumps(drb), encoding="utf-8")
    (directory / "ccc.json").write_text(json.dumps(catechism_data), encoding="utf-8")
    (directory / "package.json").write_text(json.dumps({"Genesis": "decoy"}), encoding="utf-8")
    return directory


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration variables so defaults apply."""
    for name in ("SOURCE_DIR", "CATECHISM_FILE", "EXCLUDED_FILES",
                 "OUTPUT_DIR", "BATCH_SIZE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield monkeypatch
    reset_config()
