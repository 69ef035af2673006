"""Analyzer service: validates input, selects an adapter, runs it.

Hard errors only at this boundary: a missing source root or an
unsupported ecosystem. Everything below degrades per file or per component.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from reachcheck.application.adapters.javascript import JavaScriptAdapter
from reachcheck.application.registry import AdapterRegistry
from reachcheck.domain.exceptions.analysis import SourceRootNotFoundError, UnsupportedEcosystemError
from reachcheck.domain.model.configuration import AnalysisConfig
from reachcheck.domain.model.report import AnalysisReport, AnalysisSummary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reachcheck.domain.model.component import Component
    from reachcheck.domain.model.result import ComponentResult
    from reachcheck.domain.ports.adapter import EcosystemAdapterPort
    from reachcheck.infrastructure.adapters.cached_parser import ParseCache


def default_registry(
    config: AnalysisConfig | None = None,
    cache: ParseCache | None = None,
) -> AdapterRegistry:
    """Registry with every built-in adapter."""
    registry = AdapterRegistry()
    registry.register(JavaScriptAdapter(config, cache))
    return registry


class ReachabilityAnalyzer:
    """Entry point for one or more analysis runs.

    Methods:
        select_adapter(): Explicit or auto-detected ecosystem adapter
        analyze(): One ComponentResult per component, in input order
        report(): analyze() plus summary and run metadata
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        registry: AdapterRegistry | None = None,
        cache: ParseCache | None = None,
    ) -> None:
        self._config = config if config is not None else AnalysisConfig()
        self._registry = registry if registry is not None else default_registry(self._config, cache)

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    def select_adapter(self, source_root: Path) -> EcosystemAdapterPort:
        """Adapter for source_root.

        Raises:
            UnsupportedEcosystemError: Unknown configured ecosystem, no adapter
                recognises the root, or the configured adapter cannot handle it
        """
        if self._config.ecosystem is not None:
            adapter = self._registry.get(self._config.ecosystem)
            if not adapter.can_handle(source_root):
                raise UnsupportedEcosystemError(
                    self._config.ecosystem,
                    f"adapter {adapter.ecosystem} cannot handle {source_root}",
                )
            return adapter

        adapter = self._registry.detect(source_root)
        if adapter is None:
            raise UnsupportedEcosystemError(
                None,
                f"no registered adapter recognises {source_root} "
                f"(tried: {', '.join(self._registry.ecosystems) or 'none'})",
            )
        return adapter

    def analyze(
        self,
        source_root: Path | str,
        components: Sequence[Component],
    ) -> tuple[ComponentResult, ...]:
        """Classify every component against the sources under source_root.

        Args:
            source_root: Project directory
            components: Declared components

        Returns:
            One result per component, in input order

        Raises:
            SourceRootNotFoundError: source_root is missing or not a directory
            UnsupportedEcosystemError: No adapter for the source root
        """
        return self._run(source_root, components)[1]

    def report(
        self,
        source_root: Path | str,
        components: Sequence[Component],
    ) -> AnalysisReport:
        """Run analysis and wrap results with summary and metadata.

        Raises:
            SourceRootNotFoundError: source_root is missing or not a directory
            UnsupportedEcosystemError: No adapter for the source root
        """
        from reachcheck import __version__

        root = _validate_root(source_root)
        adapter, results = self._run(root, components)
        return AnalysisReport(
            version=__version__,
            timestamp=datetime.now(UTC).isoformat(),
            source_root=root,
            ecosystem=adapter.ecosystem,
            summary=AnalysisSummary.from_results(results),
            results=results,
            failures=adapter.failures,
        )

    def _run(
        self,
        source_root: Path | str,
        components: Sequence[Component],
    ) -> tuple[EcosystemAdapterPort, tuple[ComponentResult, ...]]:
        root = _validate_root(source_root)
        adapter = self.select_adapter(root)

        started = time.perf_counter()
        results = adapter.analyze(root, components)
        if len(results) != len(components):
            # Adapters must be one-to-one with their input
            raise RuntimeError(
                f"adapter {adapter.ecosystem} returned {len(results)} results "
                f"for {len(components)} components"
            )

        summary = AnalysisSummary.from_results(results)
        logger.info(
            f"Analyzed {summary.total} components with {adapter.ecosystem} adapter "
            f"in {time.perf_counter() - started:.2f}s: {summary.reachable} reachable, "
            f"{summary.imported} imported, {summary.indirect} indirect, "
            f"{summary.not_reachable} not reachable, {summary.unknown} unknown"
        )
        return adapter, results


def analyze(
    source_root: Path | str,
    components: Sequence[Component],
    config: AnalysisConfig | None = None,
) -> tuple[ComponentResult, ...]:
    """Classify components with a one-off ReachabilityAnalyzer.

    Raises:
        SourceRootNotFoundError: source_root is missing or not a directory
        UnsupportedEcosystemError: No adapter for the source root
    """
    return ReachabilityAnalyzer(config).analyze(source_root, components)


def _validate_root(source_root: Path | str) -> Path:
    root = Path(source_root)
    if not root.is_dir():
        raise SourceRootNotFoundError(root)
    return root
