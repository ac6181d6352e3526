# ==============================================
# CorpusConverter — Fan-out Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the pipeline together. It takes
#   the discovered sources and the fixed target table and populates
#   every target store exactly once per matching source.
#
# HOW IT CONNECTS THE PIECES:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                    CorpusConverter                       │
#   │                                                          │
#   │  targets ──► SQLiteClient.connect() + ensure_schema()    │
#   │              (every store, before any write)             │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  sources ──► DocumentParser.parse()                      │
#   │                 │ typed document                         │
#   │                 ▼                                        │
#   │  for each matching target:                               │
#   │     CorpusImporter.import_records(filter)                │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  SQLiteClient.optimize() once per store, then close      │
#   └──────────────────────────────────────────────────────────┘
#
# CLASS: CorpusConverter
# ----------------------
#   - __init__(output_dir, importer=None, parser=None)
#   - run(sources, targets=DEFAULT_TARGETS) -> RunSummary
#
# FAILURE POLICY:
# ---------------
#   - no sources at all          → NoSourcesFound, nothing is created
#   - optional target, no source → warning, target not created
#   - unreadable source          → warning, source skipped
#   - source matching no target  → info, source skipped
#   - source failing mid-import  → error recorded, rest of source skipped
#   - failed batch               → error recorded, import continues
#
# ==============================================

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from scripture_db.config import AppConfig, get_config
from scripture_db.documents.models import Source
from scripture_db.documents.parser import DocumentParser
from scripture_db.errors import NoSourcesFound, OptionalCorpusMissing, SourceUnreadable
from scripture_db.storage.importer import CorpusImporter, ImportResult
from scripture_db.storage.sqlite_client import SQLiteClient
from scripture_db.targets.mappings import DEFAULT_TARGETS, TargetMapping

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    stores: dict[str, Path] = field(default_factory=dict)
    results: dict[str, ImportResult] = field(default_factory=dict)
    skipped_sources: list[str] = field(default_factory=list)
    skipped_targets: list[str] = field(default_factory=list)

    @property
    def items_written(self) -> int:
        return sum(result.items_written for result in self.results.values())

    @property
    def errors(self) -> list[str]:
        return [error for result in self.results.values() for error in result.errors]


class CorpusConverter:
    """
    Converts JSON corpora into SQLite stores with FTS5 search.

    Each store is opened once, has its schema installed before any
    write, receives every matching source, and is optimized once at
    the end of the run.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        importer: Optional[CorpusImporter] = None,
        parser: Optional[DocumentParser] = None,
    ):
        self.output_dir = Path(output_dir)
        self._importer = importer or CorpusImporter()
        self._parser = parser or DocumentParser()

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "CorpusConverter":
        config = config or get_config()
        return cls(
            output_dir=config.output.output_dir,
            importer=CorpusImporter(batch_size=config.output.batch_size),
        )

    def run(
        self,
        sources: Sequence[Source],
        targets: Sequence[TargetMapping] = DEFAULT_TARGETS,
    ) -> RunSummary:
        """
        Populate every target from every matching source.

        Args:
            sources: Discovered corpora (identity, kind, raw JSON).
            targets: Fixed target table for this run.

        Returns:
            RunSummary with per-store import results.

        Raises:
            NoSourcesFound: If sources is empty. No store is created.
        """
        if not sources:
            raise NoSourcesFound()

        summary = RunSummary()
        active_targets = self._select_targets(sources, targets, summary)
        clients: dict[str, SQLiteClient] = {}

        try:
            # Every store gets its schema before any record is written
            logger.info("\nCreating databases (%d databases)...", len(active_targets))
            for target in active_targets:
                client = SQLiteClient(self.output_dir / target.store_name)
                client.connect()
                clients[target.store_name] = client
                client.ensure_schema(target.kind)
                summary.stores[target.store_name] = client.path
                summary.results[target.store_name] = ImportResult()
                logger.info("Created %s", target.store_name)

            for source in sources:
                self._import_source(source, active_targets, clients, summary)

            # Only after every write: optimization is costly and runs once per store
            logger.info("\nOptimizing databases...")
            for target in active_targets:
                clients[target.store_name].optimize(target.kind)
        finally:
            for client in clients.values():
                client.disconnect()

        logger.info("\n✓ Conversion complete! %d records written", summary.items_written)
        return summary

    def _select_targets(
        self,
        sources: Sequence[Source],
        targets: Sequence[TargetMapping],
        summary: RunSummary,
    ) -> list[TargetMapping]:
        # Optional targets are dropped when no source can feed them
        selected = []
        for target in targets:
            if target.optional and not any(target.accepts(source) for source in sources):
                missing = OptionalCorpusMissing(target.identity)
                logger.warning("⚠ %s, skipping %s", missing, target.store_name)
                summary.skipped_targets.append(target.store_name)
                continue
            selected.append(target)
        return selected

    def _import_source(
        self,
        source: Source,
        targets: Sequence[TargetMapping],
        clients: dict[str, SQLiteClient],
        summary: RunSummary,
    ) -> None:
        name = str(source.path) if source.path else source.identity
        logger.info("\nImporting %s...", source.label)

        try:
            document = self._parser.parse(source.kind, source.data, name)
        except SourceUnreadable as e:
            logger.warning("⚠ %s, skipping", e)
            summary.skipped_sources.append(source.identity)
            return

        matching = [target for target in targets if target.accepts(source)]
        if not matching:
            logger.info("  No target store for %s, skipping", source.label)
            summary.skipped_sources.append(source.identity)
            return

        for target in matching:
            logger.info("  → %s (%s)", target.store_name, target.description)
            try:
                result = self._importer.import_records(
                    clients[target.store_name],
                    document,
                    source.label,
                    target.partition_filter,
                )
            except Exception as e:
                message = f"Import of {source.label} into {target.store_name} failed: {e}"
                logger.error("  ✗ %s, skipping source", message)
                summary.results[target.store_name].errors.append(message)
                summary.skipped_sources.append(source.identity)
                return
            summary.results[target.store_name].merge(result)
