# ==============================================
# scripture-db
# ==============================================
#
# Converts Bible translation and Catechism JSON files into SQLite
# databases with FTS5 full-text search.
#
# Package Structure:
#
# scripture_db/
# ├── documents/     # Typed documents + rich-text extraction
# ├── targets/       # Testament filters + target store table
# ├── storage/       # SQLite schema, client, batched importer
# ├── discovery/     # Find JSON corpora on disk
# ├── config.py      # Configuration management
# ├── errors.py      # Conversion error kinds
# ├── converter.py   # Fan-out orchestrator
# └── cli.py         # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
