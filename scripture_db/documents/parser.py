# ==============================================
# DocumentParser
# ==============================================
#
# PURPOSE:
#   Walk a raw JSON payload and build the typed document tree
#   (VerseDocument or ParagraphDocument) the importer consumes.
#
# RULES:
# ------
#   Verse documents:
#     - top level must be a mapping of book name → chapters
#     - the reserved "charset" key is ignored
#     - chapter / verse keys must be positive integers written
#       only with digits, no larger than MAX_NUMBER
#       ("abc", "1a", "0" are skipped)
#     - a chapters / verses container that is not a mapping is skipped
#
#   Paragraph documents:
#     - top level must be a mapping; sections live under "page_nodes"
#       (missing "page_nodes" means no sections)
#     - sections without a "paragraphs" list are skipped
#     - paragraph indices keep their original list position
#
#   A top level of the wrong shape raises SourceUnreadable.
#
# ==============================================

import re
from typing import Any, Optional

from scripture_db.documents.models import (
    Book,
    Chapter,
    Document,
    DocumentKind,
    ParagraphDocument,
    ParagraphNode,
    Section,
    Verse,
    VerseDocument,
)
from scripture_db.errors import SourceUnreadable

RESERVED_KEYS = frozenset({"charset"})
PAGE_NODES_KEY = "page_nodes"

_NUMBER_PATTERN = re.compile(r"[0-9]+")

# Largest value an SQLite INTEGER column can hold
MAX_NUMBER = 2**63 - 1


def parse_number(key: Any) -> Optional[int]:
    """Return the positive integer spelled by key, or None if out of range."""
    if not isinstance(key, str) or not _NUMBER_PATTERN.fullmatch(key):
        return None
    number = int(key)
    return number if 0 < number <= MAX_NUMBER else None


class DocumentParser:
    def parse(self, kind: DocumentKind, data: Any, source: str = "<memory>") -> Document:
        """
        Build the typed document for kind.

        Args:
            kind: Expected document shape.
            data: Raw JSON payload.
            source: Name used in error messages.

        Returns:
            VerseDocument or ParagraphDocument.

        Raises:
            SourceUnreadable: If the payload does not have the shape of kind.
        """
        if kind is DocumentKind.VERSE:
            return self.parse_verse_document(data, source)
        if kind is DocumentKind.PARAGRAPH:
            return self.parse_paragraph_document(data, source)
        raise ValueError(f"Unsupported document kind: {kind}")

    def parse_verse_document(self, data: Any, source: str = "<memory>") -> VerseDocument:
        if not isinstance(data, dict):
            raise SourceUnreadable(source, f"expected a mapping of books, got {type(data).__name__}")

        books = []
        for book_name, chapters in data.items():
            if book_name in RESERVED_KEYS:
                continue
            if not isinstance(chapters, dict):
                continue
            books.append(Book(name=book_name, chapters=self._parse_chapters(chapters)))
        return VerseDocument(books=tuple(books))

    def _parse_chapters(self, chapters: dict) -> tuple[Chapter, ...]:
        parsed = []
        for chapter_key, verses in chapters.items():
            chapter_number = parse_number(chapter_key)
            if chapter_number is None or not isinstance(verses, dict):
                continue
            parsed.append(Chapter(number=chapter_number, verses=self._parse_verses(verses)))
        return tuple(parsed)

    def _parse_verses(self, verses: dict) -> tuple[Verse, ...]:
        parsed = []
        for verse_key, value in verses.items():
            verse_number = parse_number(verse_key)
            if verse_number is None:
                continue
            parsed.append(Verse(number=verse_number, value=value))
        return tuple(parsed)

    def parse_paragraph_document(self, data: Any, source: str = "<memory>") -> ParagraphDocument:
        if not isinstance(data, dict):
            raise SourceUnreadable(source, f"expected a mapping, got {type(data).__name__}")

        page_nodes = data.get(PAGE_NODES_KEY) or {}
        if not isinstance(page_nodes, dict):
            raise SourceUnreadable(source, f"'{PAGE_NODES_KEY}' must be a mapping of sections")

        sections = []
        for section_id, section_data in page_nodes.items():
            if not isinstance(section_data, dict):
                continue
            paragraphs = section_data.get("paragraphs")
            if not isinstance(paragraphs, list):
                continue
            sections.append(Section(
                section_id=str(section_id),
                paragraphs=tuple(
                    ParagraphNode(index=index, node=node)
                    for index, node in enumerate(paragraphs)
                ),
            ))
        return ParagraphDocument(sections=tuple(sections))
