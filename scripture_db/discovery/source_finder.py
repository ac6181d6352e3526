# ==============================================
# SourceFinder
# ==============================================
#
# PURPOSE:
#   Find the JSON corpora to convert in a source directory.
#
#   Bible translations are recognised by probing for well-known
#   book names at the top level; the identity label comes from the
#   file name ("CPDV.json" → "cpdv"). The catechism is a single,
#   optional file (default "ccc.json").
#
# CLASS: SourceFinder
# -------------------
#   - find_bible_sources() -> list[Source]
#   - find_catechism_source() -> Source
#       Raises OptionalCorpusMissing / SourceUnreadable.
#   - discover_sources() -> list[Source]
#       Raises NoSourcesFound when no translation is found.
#
# FUNCTION:
# ---------
# - load_json_document(path) -> Any
#       Raises SourceUnreadable.
#
# ==============================================

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Union

from scripture_db.config import DEFAULT_EXCLUDED_FILES, SourceConfig
from scripture_db.documents.models import DocumentKind, Source
from scripture_db.errors import NoSourcesFound, OptionalCorpusMissing, SourceUnreadable
from scripture_db.targets.mappings import CATECHISM_IDENTITY

logger = logging.getLogger(__name__)

PROBE_KEYS = ("Genesis", "1 Samuel", "Matthew")


def load_json_document(path: Union[str, Path]) -> Any:
    """Read and parse a JSON file, tolerating a UTF-8 byte order mark."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SourceUnreadable(path, str(e)) from e


def looks_like_bible(data: Any) -> bool:
    return isinstance(data, dict) and any(key in data for key in PROBE_KEYS)


class SourceFinder:
    def __init__(
        self,
        source_dir: Union[str, Path] = ".",
        catechism_file: Union[str, Path] = "ccc.json",
        excluded_files: Iterable[str] = DEFAULT_EXCLUDED_FILES,
    ):
        self.source_dir = Path(source_dir)
        catechism_path = Path(catechism_file)
        self.catechism_path = (
            catechism_path if catechism_path.is_absolute() else self.source_dir / catechism_path
        )
        self.excluded_files = frozenset(excluded_files)

    @classmethod
    def from_config(cls, config: SourceConfig) -> "SourceFinder":
        return cls(
            source_dir=config.source_dir,
            catechism_file=config.catechism_file,
            excluded_files=config.excluded_files,
        )

    def _candidate_files(self) -> list[Path]:
        if not self.source_dir.is_dir():
            return []
        skip = self.excluded_files | {self.catechism_path.name}
        return sorted(
            path for path in self.source_dir.iterdir()
            if path.is_file() and path.suffix.lower() == ".json" and path.name not in skip
        )

    def find_bible_sources(self) -> list[Source]:
        """
        Load every JSON file in the source directory that looks like a Bible.

        Unreadable files are reported and skipped.
        """
        sources = []
        for path in self._candidate_files():
            try:
                data = load_json_document(path)
            except SourceUnreadable as e:
                logger.warning("⚠ Skipping %s: %s", path.name, e.reason)
                continue
            if not looks_like_bible(data):
                logger.debug("Ignoring %s, no known book names at top level", path.name)
                continue
            sources.append(Source(
                identity=path.stem.lower(),
                kind=DocumentKind.VERSE,
                data=data,
                path=path,
            ))
        return sources

    def find_catechism_source(self) -> Source:
        if not self.catechism_path.is_file():
            raise OptionalCorpusMissing("catechism", self.catechism_path)
        return Source(
            identity=CATECHISM_IDENTITY,
            kind=DocumentKind.PARAGRAPH,
            data=load_json_document(self.catechism_path),
            path=self.catechism_path,
        )

    def discover_sources(self) -> list[Source]:
        """
        All sources to convert: Bible translations first, then the catechism.

        Raises:
            NoSourcesFound: If no Bible translation is found.
        """
        bibles = self.find_bible_sources()
        if not bibles:
            raise NoSourcesFound(self.source_dir)

        logger.info(
            "Found %d Bible translation(s): %s",
            len(bibles), ", ".join(source.label for source in bibles),
        )

        sources = list(bibles)
        try:
            sources.append(self.find_catechism_source())
        except (OptionalCorpusMissing, SourceUnreadable) as e:
            logger.warning("⚠ %s, skipping Catechism database", e)
        return sources
