"""Infrastructure adapters implementing domain ports."""

from reachcheck.infrastructure.adapters.cached_parser import CachedSourceParser, ParseCache
from reachcheck.infrastructure.adapters.tree_sitter_parser import TreeSitterImportParser

__all__ = [
    "CachedSourceParser",
    "ParseCache",
    "TreeSitterImportParser",
]
