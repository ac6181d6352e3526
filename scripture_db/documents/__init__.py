# ==============================================
# DOCUMENTS: typed corpus documents
# ==============================================
#
# This package turns raw JSON corpora into typed documents
# BEFORE they enter the storage pipeline.
#
# Modules:
# --------
# - models.py          → DocumentKind, VerseDocument, ParagraphDocument, Source
# - parser.py          → Walk raw JSON into the typed tree
# - text_extractor.py  → Flatten rich-text paragraph nodes into strings
#
# ==============================================

from .models import (
    Book,
    Chapter,
    Document,
    DocumentKind,
    ParagraphDocument,
    ParagraphNode,
    Section,
    Source,
    Verse,
    VerseDocument,
)
from .parser import DocumentParser, parse_number
from .text_extractor import extract_text

__all__ = [
    "Book",
    "Chapter",
    "Document",
    "DocumentKind",
    "DocumentParser",
    "ParagraphDocument",
    "ParagraphNode",
    "Section",
    "Source",
    "Verse",
    "VerseDocument",
    "extract_text",
    "parse_number",
]
