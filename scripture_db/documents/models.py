# ==============================================
# Document Models (Data Classes)
# ==============================================
#
# PURPOSE:
#   Typed tree that a raw JSON corpus is parsed into before import.
#   The importer dispatches on DocumentKind instead of probing
#   fields of arbitrary JSON objects.
#
# ENUMS:
# ------
# - DocumentKind(Enum): VERSE, PARAGRAPH
#
# CLASSES:
# --------
# - Verse / Chapter / Book / VerseDocument
#     book name → chapter number → verse number → raw text value
#
# - ParagraphNode / Section / ParagraphDocument
#     section id → ordered paragraph nodes (raw rich-text mapping)
#
# - Source
#     A discovered corpus: identity label + kind + raw JSON payload.
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union


class DocumentKind(Enum):
    """
    Shape of a corpus document.

    - VERSE: book → chapter → verse → text (Bible translations)
    - PARAGRAPH: section → paragraphs of rich-text elements (catechism)
    """
    VERSE = "verse"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Verse:
    number: int
    value: Any  # Raw JSON value; coerced to text by the importer


@dataclass(frozen=True)
class Chapter:
    number: int
    verses: tuple[Verse, ...] = ()


@dataclass(frozen=True)
class Book:
    name: str
    chapters: tuple[Chapter, ...] = ()


@dataclass(frozen=True)
class VerseDocument:
    books: tuple[Book, ...] = ()
    kind: DocumentKind = field(default=DocumentKind.VERSE, init=False)


@dataclass(frozen=True)
class ParagraphNode:
    index: int  # Position in the section's original paragraph list
    node: Any  # Raw {"elements": [...]} mapping, flattened by extract_text()


@dataclass(frozen=True)
class Section:
    section_id: str
    paragraphs: tuple[ParagraphNode, ...] = ()


@dataclass(frozen=True)
class ParagraphDocument:
    sections: tuple[Section, ...] = ()
    kind: DocumentKind = field(default=DocumentKind.PARAGRAPH, init=False)


Document = Union[VerseDocument, ParagraphDocument]


@dataclass(frozen=True)
class Source:
    """
    A corpus discovered on disk (or built in memory).

    Attributes:
        identity: Lower-case label used to match targets (e.g. "cpdv").
        kind: Shape of the document.
        data: Parsed JSON payload, not yet walked.
        path: File the payload came from, if any.
    """
    identity: str
    kind: DocumentKind
    data: Any
    path: Optional[Path] = None

    @property
    def label(self) -> str:
        # Written to the translation column, e.g. "CPDV"
        return self.identity.upper()
