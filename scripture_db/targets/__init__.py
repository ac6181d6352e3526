# ==============================================
# TARGETS: where each source goes
# ==============================================
#
# Modules:
# --------
# - filters.py   → Testament book sets and PartitionFilter
# - mappings.py  → TargetMapping and the default target table
#
# ==============================================

from .filters import (
    NEW_TESTAMENT,
    NEW_TESTAMENT_BOOKS,
    OLD_TESTAMENT,
    OLD_TESTAMENT_BOOKS,
    PartitionFilter,
    is_new_testament,
    is_old_testament,
)
from .mappings import (
    ANY_IDENTITY,
    CATECHISM_IDENTITY,
    DEFAULT_TARGETS,
    TargetMapping,
    build_targets,
    translation_targets,
)

__all__ = [
    "ANY_IDENTITY",
    "CATECHISM_IDENTITY",
    "DEFAULT_TARGETS",
    "NEW_TESTAMENT",
    "NEW_TESTAMENT_BOOKS",
    "OLD_TESTAMENT",
    "OLD_TESTAMENT_BOOKS",
    "PartitionFilter",
    "TargetMapping",
    "build_targets",
    "is_new_testament",
    "is_old_testament",
    "translation_targets",
]
