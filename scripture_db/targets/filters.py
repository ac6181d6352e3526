# ==============================================
# Partition Filters
# ==============================================
#
# PURPOSE:
#   Decide whether a partition (a book of a Bible translation)
#   belongs in a given target store.
#
# CONSTANTS:
# ----------
# - OLD_TESTAMENT_BOOKS  → canonical + deuterocanonical book names
# - NEW_TESTAMENT_BOOKS
#
# CLASSES:
# --------
# - PartitionFilter (dataclass)
#     name: str                        → Shown in progress output
#     predicate: Callable[[str], bool] → True if the partition is kept
#
# A filter of None means unconditional inclusion.
#
# ==============================================

from dataclasses import dataclass
from typing import Callable, Optional

OLD_TESTAMENT_BOOKS = frozenset({
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    "Joshua", "Judges", "Ruth",
    "1 Samuel", "2 Samuel", "1 Kings", "2 Kings",
    "1 Chronicles", "2 Chronicles", "Ezra", "Nehemiah",
    "Tobit", "Judith", "Esther",
    "Job", "Psalms", "Proverbs", "Ecclesiastes", "Song of Solomon",
    "Wisdom", "Sirach",
    "Isaiah", "Jeremiah", "Lamentations", "Baruch", "Ezekiel", "Daniel",
    "Hosea", "Joel", "Amos", "Obadiah", "Jonah", "Micah",
    "Nahum", "Habakkuk", "Zephaniah", "Haggai", "Zechariah", "Malachi",
    "1 Maccabees", "2 Maccabees",
})

NEW_TESTAMENT_BOOKS = frozenset({
    "Matthew", "Mark", "Luke", "John",
    "Acts",
    "Romans", "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians",
    "Philippians", "Colossians", "1 Thessalonians", "2 Thessalonians",
    "1 Timothy", "2 Timothy", "Titus", "Philemon", "Hebrews",
    "James", "1 Peter", "2 Peter", "1 John", "2 John", "3 John", "Jude",
    "Revelation",
})

COMPLETE = "Complete"


def is_old_testament(book_name: str) -> bool:
    return book_name in OLD_TESTAMENT_BOOKS


def is_new_testament(book_name: str) -> bool:
    return book_name in NEW_TESTAMENT_BOOKS


@dataclass(frozen=True)
class PartitionFilter:
    """Named predicate over a partition key."""
    name: str
    predicate: Callable[[str], bool]

    def accepts(self, partition_key: str) -> bool:
        return bool(self.predicate(partition_key))


OLD_TESTAMENT = PartitionFilter("Old Testament", is_old_testament)
NEW_TESTAMENT = PartitionFilter("New Testament", is_new_testament)


def accepts(partition_filter: Optional[PartitionFilter], partition_key: str) -> bool:
    """Apply an optional filter; no filter keeps every partition."""
    return partition_filter is None or partition_filter.accepts(partition_key)


def describe(partition_filter: Optional[PartitionFilter]) -> str:
    return partition_filter.name if partition_filter is not None else COMPLETE
