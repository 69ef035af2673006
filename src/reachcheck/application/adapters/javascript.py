"""JavaScript/TypeScript ecosystem adapter.

Pipeline per analyze() call:
    discover -> parse (optionally in a thread pool) -> resolve re-exports
    -> detect workspace -> match -> classify
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Final

from loguru import logger

from reachcheck.application.discovery.files import discover_source_files, load_ignore_rules
from reachcheck.application.discovery.workspace import detect_workspace
from reachcheck.application.services.classifier import ClassificationEngine
from reachcheck.application.services.matcher import ComponentMatcher, ImportIndex
from reachcheck.domain.exceptions.parsing import ParsingError
from reachcheck.domain.model.configuration import AnalysisConfig
from reachcheck.domain.model.parsed_file import ParsedFile, ParseFailure
from reachcheck.domain.model.reexport import ReexportResult
from reachcheck.domain.ports.adapter import EcosystemAdapterPort
from reachcheck.infrastructure.adapters.cached_parser import CachedSourceParser, ParseCache
from reachcheck.infrastructure.adapters.tree_sitter_parser import TreeSitterImportParser
from reachcheck.infrastructure.analyzers.reexport_resolver import ReexportResolver
from reachcheck.infrastructure.analyzers.syntax import GRAMMAR_BY_EXTENSION

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from reachcheck.domain.model.component import Component
    from reachcheck.domain.model.import_record import ImportRecord
    from reachcheck.domain.model.result import ComponentResult

# Any of these at the root marks a JavaScript/TypeScript project
PROJECT_MARKERS: Final = ("package.json", "tsconfig.json", "jsconfig.json")


class JavaScriptAdapter(EcosystemAdapterPort):
    """Reachability analysis for npm packages used from JS/TS sources."""

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        cache: ParseCache | None = None,
    ) -> None:
        """Initialize adapter.

        Args:
            config: Analysis options (defaults when None)
            cache: Shared parse cache (no caching when None)
        """
        self._config = config if config is not None else AnalysisConfig()
        inner = TreeSitterImportParser()
        self._parser: TreeSitterImportParser | CachedSourceParser = (
            CachedSourceParser(inner, cache) if cache is not None else inner
        )
        self._matcher = ComponentMatcher()
        self._classifier = ClassificationEngine()
        self._failures: tuple[ParseFailure, ...] = ()

    @property
    def ecosystem(self) -> str:
        return "javascript"

    @property
    def aliases(self) -> tuple[str, ...]:
        return ("typescript", "npm")

    @property
    def file_extensions(self) -> tuple[str, ...]:
        return tuple(GRAMMAR_BY_EXTENSION)

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    @property
    def failures(self) -> tuple[ParseFailure, ...]:
        return self._failures

    def can_handle(self, root: Path) -> bool:
        """Root holds package.json, tsconfig.json or jsconfig.json."""
        return any((root / marker).is_file() for marker in PROJECT_MARKERS)

    def analyze(self, root: Path, components: Sequence[Component]) -> tuple[ComponentResult, ...]:
        """Produce one result per component, in input order.

        Unreadable or unparsable files are skipped and exposed via failures.

        Args:
            root: Source root directory
            components: Declared components

        Returns:
            Results, same length and order as components
        """
        index = self.build_index(root)
        return tuple(
            self._classifier.classify(
                self._matcher.match(component, index),
                has_sources=index.has_sources,
            )
            for component in components
        )

    def build_index(self, root: Path) -> ImportIndex:
        """Discover, parse and resolve every source file under root."""
        root = root.resolve()
        rules = load_ignore_rules(root, self._config.ignore_patterns, self._config.use_ignore_file)
        paths = discover_source_files(root, self.file_extensions, rules)
        logger.debug(f"Discovered {len(paths)} source files under {root}")

        parsed, failures = self._parse_all(paths)
        self._failures = failures
        for failure in failures:
            logger.warning(f"Skipping {failure.path}: {failure.reason}")

        reexports = self._resolve_reexports(parsed)
        workspace = detect_workspace(root) if self._config.detect_workspaces else None
        return ImportIndex(files=parsed, reexports=reexports, workspace=workspace)

    def _parse_all(
        self,
        paths: tuple[Path, ...],
    ) -> tuple[tuple[ParsedFile, ...], tuple[ParseFailure, ...]]:
        """Parse every file; failures are recorded, never raised."""
        if self._config.workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self._config.workers) as pool:
                outcomes = list(pool.map(self._parse_one, paths))
        else:
            outcomes = [self._parse_one(path) for path in paths]

        parsed = [o for o in outcomes if isinstance(o, ParsedFile)]
        failures = [o for o in outcomes if isinstance(o, ParseFailure)]
        return (
            tuple(sorted(parsed, key=lambda p: p.path)),
            tuple(sorted(failures, key=lambda f: f.path)),
        )

    def _parse_one(self, path: Path) -> ParsedFile | ParseFailure:
        try:
            parsed = self._parser.parse_file(path)
        except ParsingError as e:
            return ParseFailure(path=path, reason=e.reason)
        logger.debug(f"Parsed {path}: {len(parsed.records)} imports")
        return parsed

    def _resolve_reexports(self, parsed: tuple[ParsedFile, ...]) -> ReexportResult:
        by_path = {p.path: p for p in parsed}

        def load_records(path: Path) -> tuple[ImportRecord, ...] | None:
            known = by_path.get(path)
            if known is not None:
                return known.records
            # Intermediate file outside the scan snapshot (e.g. ignored directory)
            try:
                return self._parser.parse_file(path).records
            except ParsingError as e:
                logger.debug(f"Cannot follow re-exports through {path}: {e.reason}")
                return None

        resolver = ReexportResolver(load_records, self._config.max_reexport_depth)
        result = ReexportResult.empty()
        for file in parsed:
            if file.has_relative_imports:
                result = result.merge(resolver.resolve(file.path, file.records))
        return result
