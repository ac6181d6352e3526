# ==============================================
# Conversion Errors
# ==============================================
#
# PURPOSE:
#   Error kinds raised while discovering and converting corpora.
#   Only NoSourcesFound stops a run; the others are reported and
#   the affected source or corpus is skipped.
#
# CLASSES:
# --------
# - ConversionError          → base class
# - SourceUnreadable         → malformed / unparseable source document
# - NoSourcesFound           → nothing to convert (fatal)
# - OptionalCorpusMissing    → secondary corpus absent (non-fatal)
#
# ==============================================

from pathlib import Path
from typing import Optional, Union


class ConversionError(Exception):
    """Base class for all conversion errors."""


class SourceUnreadable(ConversionError):
    """A source document could not be read or does not have the expected shape."""

    def __init__(self, source: Union[str, Path], reason: str):
        self.source = str(source)
        self.reason = reason
        super().__init__(f"Cannot read source '{self.source}': {reason}")


class NoSourcesFound(ConversionError):
    """No source document was discovered, so there is nothing to convert."""

    def __init__(self, source_dir: Optional[Union[str, Path]] = None):
        self.source_dir = str(source_dir) if source_dir is not None else None
        where = f" in {self.source_dir}" if self.source_dir else ""
        super().__init__(f"No Bible JSON files found{where}")


class OptionalCorpusMissing(ConversionError):
    """An optional corpus (e.g. the catechism) is not present."""

    def __init__(self, corpus: str, path: Optional[Union[str, Path]] = None):
        self.corpus = corpus
        self.path = str(path) if path is not None else None
        where = f" at {self.path}" if self.path else ""
        super().__init__(f"Optional corpus '{corpus}' not found{where}")
