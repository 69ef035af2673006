"""Analysis configuration.

User-provided options for one analysis run. Immutable; validated on
construction.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_REEXPORT_DEPTH = 5


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Analysis options DTO.

    Attributes:
        max_reexport_depth: Max re-exporting files followed per chain
        ignore_patterns: Extra gitignore-style patterns excluded from the scan
        use_ignore_file: Honour .reachcheckignore (or .gitignore) at the source root
        workers: Parser threads. 1 = sequential
        ecosystem: Adapter to use. None = auto-detect
        detect_workspaces: Short-circuit components naming same-workspace packages
    """

    max_reexport_depth: int = DEFAULT_MAX_REEXPORT_DEPTH
    ignore_patterns: tuple[str, ...] = ()
    use_ignore_file: bool = True
    workers: int = 1
    ecosystem: str | None = None
    detect_workspaces: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.max_reexport_depth, int) or isinstance(self.max_reexport_depth, bool):
            raise TypeError("max_reexport_depth must be int")
        if self.max_reexport_depth < 1:
            raise ValueError(f"max_reexport_depth must be >= 1, got {self.max_reexport_depth}")

        if not isinstance(self.workers, int) or isinstance(self.workers, bool):
            raise TypeError("workers must be int")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

        if isinstance(self.ignore_patterns, str):
            raise TypeError("ignore_patterns must be a tuple of patterns, not str")
        if any(not p for p in self.ignore_patterns):
            raise ValueError("ignore patterns must be non-empty strings")

        if self.ecosystem is not None and not self.ecosystem:
            raise ValueError("ecosystem must be non-empty string or None")
