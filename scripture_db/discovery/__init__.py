from .source_finder import PROBE_KEYS, SourceFinder, load_json_document, looks_like_bible

__all__ = ["PROBE_KEYS", "SourceFinder", "load_json_document", "looks_like_bible"]
