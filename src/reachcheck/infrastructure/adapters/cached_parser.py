"""Cached source parser adapter.

Decorator pattern: wraps TreeSitterImportParser with content-hash based
caching. The cache is an explicit object owned by the caller; there is no
module-level cache.
"""

from __future__ import annotations

import hashlib
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from reachcheck.infrastructure.adapters.tree_sitter_parser import (
    PARSER_VERSION,
    TreeSitterImportParser,
    read_source,
)

if TYPE_CHECKING:
    from pathlib import Path

    from reachcheck.domain.model.parsed_file import ParsedFile

DEFAULT_MAX_ENTRIES = 10_000


def content_hash(content: str) -> str:
    """SHA-256 hex digest of file content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Cache counters snapshot."""

    hits: int
    misses: int
    size: int

    @property
    def hit_rate(self) -> float:
        """Hits / lookups (0.0 before any lookup)."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


@dataclass(frozen=True, slots=True)
class _Entry:
    digest: str
    parser_version: str
    parsed: ParsedFile


class ParseCache:
    """In-memory LRU cache of parsed files keyed by path, content hash and parser version.

    Thread-safe: every operation holds one lock.

    Lifecycle: construct with options, lookup/store during analysis,
    invalidate by path or directory prefix, close() on teardown.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        """Initialize cache.

        Args:
            max_entries: Entries kept before least-recently-used eviction

        Raises:
            ValueError: If max_entries < 1
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")

        self._max_entries = max_entries
        self._entries: OrderedDict[Path, _Entry] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._closed = False

    def lookup(
        self,
        path: Path,
        digest: str,
        parser_version: str = PARSER_VERSION,
    ) -> ParsedFile | None:
        """Cached parse of path if its content hash and parser version still match.

        Args:
            path: Source file
            digest: Current content hash
            parser_version: Version of the parser asking; other versions miss

        Returns:
            Cached ParsedFile, or None on miss
        """
        with self._lock:
            entry = self._entries.get(path)
            if (
                entry is None
                or entry.digest != digest
                or entry.parser_version != parser_version
            ):
                self._misses += 1
                return None
            self._entries.move_to_end(path)
            self._hits += 1
            return entry.parsed

    def store(
        self,
        path: Path,
        digest: str,
        parsed: ParsedFile,
        parser_version: str = PARSER_VERSION,
    ) -> None:
        """Cache a parse result, evicting the least recently used entry if full.

        A closed cache ignores the call; the caller still has its result.

        Raises:
            ValueError: If parser_version is empty
        """
        if not parser_version:
            raise ValueError("parser_version must be non-empty string")
        with self._lock:
            if self._closed:
                logger.debug(f"Parse cache closed; not storing {path}")
                return
            self._entries[path] = _Entry(digest, parser_version, parsed)
            self._entries.move_to_end(path)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Parse cache evicted {evicted}")

    def invalidate(self, path: Path) -> bool:
        """Drop one entry. Returns True if it existed."""
        with self._lock:
            return self._entries.pop(path, None) is not None

    def invalidate_prefix(self, directory: Path) -> int:
        """Drop every entry under a directory.

        Returns:
            Number of entries dropped
        """
        with self._lock:
            doomed = [p for p in self._entries if p == directory or p.is_relative_to(directory)]
            for path in doomed:
                del self._entries[path]
            return len(doomed)

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def close(self) -> None:
        """Release entries; further store() calls are ignored."""
        with self._lock:
            self._entries.clear()
            self._closed = True

    @property
    def stats(self) -> CacheStats:
        """Current hit/miss counters and size."""
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class CachedSourceParser:
    """Parser with content-hash based caching.

    Decorator pattern: wraps TreeSitterImportParser. Reads each file once,
    hashes the content and parses only on a cache miss.

    Attributes:
        _inner: Wrapped parser implementation
        _cache: Shared ParseCache
    """

    def __init__(self, inner: TreeSitterImportParser, cache: ParseCache) -> None:
        if inner is None:
            raise TypeError("inner parser must not be None")
        if cache is None:
            raise TypeError("cache must not be None")

        self._inner = inner
        self._cache = cache

    @property
    def cache(self) -> ParseCache:
        return self._cache

    def parse_file(self, path: Path) -> ParsedFile:
        """Parse with cache lookup.

        Cache hit: return cached ParsedFile if content hash matches.
        Cache miss: parse with inner parser, cache result.

        Raises:
            ParsingError: If file cannot be read or parsed
        """
        content = read_source(path)
        digest = content_hash(content)

        cached = self._cache.lookup(path, digest, self._inner.version)
        if cached is not None:
            logger.debug(f"Parse cache hit: {path}")
            return cached

        parsed = self._inner.parse_source(content, path)
        self._cache.store(path, digest, parsed, self._inner.version)
        return parsed
