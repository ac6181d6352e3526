# ==============================================
# Target Mappings (Data Classes)
# ==============================================
#
# PURPOSE:
#   The fixed table of target stores a run populates. Each entry
#   names a store, the kind of document it holds, which source
#   identity feeds it and which partition filter applies.
#
# CLASSES:
# --------
# - TargetMapping (frozen dataclass)
#     store_name: str                → File name under the output directory
#     kind: DocumentKind             → VERSE or PARAGRAPH
#     identity: str                  → Source identity, or ANY_IDENTITY
#     partition_filter: PartitionFilter | None
#     optional: bool                 → Skip (not fail) when no source feeds it
#
# CONSTANTS:
# ----------
# - DEFAULT_TARGETS: tuple[TargetMapping, ...]
#     6 translation stores (full + per-testament) for CPDV and DRB,
#     the combined bibles.db and the catechism store.
#
# ==============================================

from dataclasses import dataclass
from typing import Iterable, Optional

from scripture_db.documents.models import DocumentKind, Source
from scripture_db.targets.filters import (
    NEW_TESTAMENT,
    OLD_TESTAMENT,
    PartitionFilter,
    describe,
)

ANY_IDENTITY = "*"
CATECHISM_IDENTITY = "ccc"


@dataclass(frozen=True)
class TargetMapping:
    store_name: str
    kind: DocumentKind
    identity: str
    partition_filter: Optional[PartitionFilter] = None
    optional: bool = False

    def accepts(self, source: Source) -> bool:
        """True if this target should be populated from source."""
        if source.kind is not self.kind:
            return False
        return self.identity == ANY_IDENTITY or self.identity == source.identity

    @property
    def description(self) -> str:
        return describe(self.partition_filter)


def translation_targets(identity: str) -> tuple[TargetMapping, ...]:
    """Old Testament, New Testament and complete stores for one translation."""
    return (
        TargetMapping(f"bible_{identity}_old_testament.db", DocumentKind.VERSE, identity, OLD_TESTAMENT),
        TargetMapping(f"bible_{identity}_new_testament.db", DocumentKind.VERSE, identity, NEW_TESTAMENT),
        TargetMapping(f"bible_{identity}.db", DocumentKind.VERSE, identity),
    )


def build_targets(
    translations: Iterable[str],
    combined_store: Optional[str] = "bibles.db",
    catechism_store: Optional[str] = "catechism.db",
) -> tuple[TargetMapping, ...]:
    """
    Build an immutable target table.

    Args:
        translations: Source identities that get their own stores.
        combined_store: Store accepting every translation (None to omit).
        catechism_store: Optional paragraph store (None to omit).
    """
    targets = [target for identity in translations for target in translation_targets(identity)]
    if combined_store:
        targets.append(TargetMapping(combined_store, DocumentKind.VERSE, ANY_IDENTITY))
    if catechism_store:
        targets.append(TargetMapping(
            catechism_store, DocumentKind.PARAGRAPH, CATECHISM_IDENTITY, optional=True
        ))
    return tuple(targets)


DEFAULT_TARGETS = build_targets(("cpdv", "drb"))
