# ==============================================
# CorpusImporter
# ==============================================
#
# PURPOSE:
#   Takes a typed document, walks it into flat records, applies an
#   optional partition filter and upserts the records into one store
#   in fixed-size batches.
#
# CLASS: CorpusImporter
# ---------------------
#   Stateless apart from the batch size.
#
#   Methods:
#   --------
#   - import_records(
#         client: SQLiteClient,
#         document: VerseDocument | ParagraphDocument,
#         source_label: str,
#         partition_filter: PartitionFilter | None = None
#     ) -> ImportResult
#       1. Walk the document (dispatch on document.kind)
#       2. Skip partitions the filter rejects
#       3. Upsert records batch by batch; each batch is atomic
#       Returns an ImportResult with counts and errors.
#
# DATA CLASS: ImportResult
# ------------------------
#   - partitions_read: int   → books / sections walked
#   - items_read: int        → verses / paragraphs walked
#   - items_written: int     → rows committed
#   - items_skipped: int     → empty, non-scalar or non-UTF-8 items dropped
#   - errors: list[str]      → one entry per failed batch
#
# ==============================================

import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from scripture_db.documents.models import (
    Document,
    DocumentKind,
    ParagraphDocument,
    VerseDocument,
)
from scripture_db.documents.text_extractor import extract_text
from scripture_db.storage.sqlite_client import SQLiteClient
from scripture_db.targets.filters import PartitionFilter, accepts

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000


@dataclass
class ImportResult:
    partitions_read: int = 0
    items_read: int = 0
    items_written: int = 0
    items_skipped: int = 0
    errors: list[str] = field(default_factory=list)

    def merge(self, other: "ImportResult") -> "ImportResult":
        """Add other's counts into this result and return self."""
        self.partitions_read += other.partitions_read
        self.items_read += other.items_read
        self.items_written += other.items_written
        self.items_skipped += other.items_skipped
        self.errors.extend(other.errors)
        return self


def coerce_text(value: Any) -> Optional[str]:
    """
    Verse text as a trimmed string, or None when the value is not a scalar.

    Nested structures and null are rejected rather than stringified.
    """
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value).strip()


def is_encodable(row: tuple) -> bool:
    """True when every string in row can be stored as UTF-8 (no lone surrogates)."""
    try:
        for value in row:
            if isinstance(value, str):
                value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class CorpusImporter:
    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size

    def import_records(
        self,
        client: SQLiteClient,
        document: Document,
        source_label: str,
        partition_filter: Optional[PartitionFilter] = None,
    ) -> ImportResult:
        result = ImportResult()
        if document.kind is DocumentKind.VERSE:
            rows = self._verse_rows(document, source_label, partition_filter, result)
            noun = ("books", "verses")
        elif document.kind is DocumentKind.PARAGRAPH:
            rows = self._paragraph_rows(document, partition_filter, result)
            noun = ("sections", "paragraphs")
        else:
            raise ValueError(f"Unsupported document kind: {document.kind}")

        self._write_batches(client, document.kind, rows, result)

        logger.info(
            "  Processed %d %s, %d %s (%d written, %d skipped)",
            result.partitions_read, noun[0], result.items_read, noun[1],
            result.items_written, result.items_skipped,
        )
        return result

    def _verse_rows(
        self,
        document: VerseDocument,
        translation: str,
        partition_filter: Optional[PartitionFilter],
        result: ImportResult,
    ) -> Iterator[tuple]:
        for book in document.books:
            if not accepts(partition_filter, book.name):
                continue
            result.partitions_read += 1
            for chapter in book.chapters:
                for verse in chapter.verses:
                    result.items_read += 1
                    text = coerce_text(verse.value)
                    if text is None:
                        result.items_skipped += 1
                        logger.debug(
                            "Skipping %s %s %d:%d, text is not a scalar",
                            translation, book.name, chapter.number, verse.number,
                        )
                        continue
                    row = (translation, book.name, chapter.number, verse.number, text)
                    if not is_encodable(row):
                        result.items_skipped += 1
                        logger.debug(
                            "Skipping %s %r %d:%d, not valid UTF-8",
                            translation, book.name, chapter.number, verse.number,
                        )
                        continue
                    yield row

    def _paragraph_rows(
        self,
        document: ParagraphDocument,
        partition_filter: Optional[PartitionFilter],
        result: ImportResult,
    ) -> Iterator[tuple]:
        for section in document.sections:
            if not accepts(partition_filter, section.section_id):
                continue
            result.partitions_read += 1
            for paragraph in section.paragraphs:
                result.items_read += 1
                text = extract_text(paragraph.node)
                if not text:
                    result.items_skipped += 1
                    continue
                row = (section.section_id, paragraph.index, text)
                if not is_encodable(row):
                    result.items_skipped += 1
                    logger.debug("Skipping paragraph %r[%d], not valid UTF-8", section.section_id, paragraph.index)
                    continue
                yield row

    def _write_batches(
        self,
        client: SQLiteClient,
        kind: DocumentKind,
        rows: Iterator[tuple],
        result: ImportResult,
    ) -> None:
        batch: list[tuple] = []
        batch_number = 0
        for row in rows:
            batch.append(row)
            if len(batch) >= self.batch_size:
                batch_number += 1
                self._write_batch(client, kind, batch, batch_number, result)
                batch = []
        if batch:
            batch_number += 1
            self._write_batch(client, kind, batch, batch_number, result)

    def _write_batch(
        self,
        client: SQLiteClient,
        kind: DocumentKind,
        batch: list[tuple],
        batch_number: int,
        result: ImportResult,
    ) -> None:
        # A failed batch is rolled back as a whole; other batches are unaffected
        try:
            result.items_written += client.upsert_batch(kind, batch)
        except sqlite3.Error as e:
            message = f"Batch {batch_number} ({len(batch)} records) into {client.name} failed: {e}"
            logger.error("  ✗ %s", message)
            result.errors.append(message)
