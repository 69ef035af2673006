"""Analysis report aggregate."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from reachcheck.domain.model.enums import ReachabilityStatus
from reachcheck.domain.model.parsed_file import ParseFailure
from reachcheck.domain.model.result import ComponentResult


@dataclass(frozen=True, slots=True)
class AnalysisSummary:
    """Counts over a result list."""

    total: int
    reachable: int
    imported: int
    not_reachable: int
    indirect: int
    unknown: int
    vulnerable_reachable: int
    warnings_count: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        by_status = self.reachable + self.imported + self.not_reachable + self.indirect + self.unknown
        if by_status != self.total:
            raise ValueError(f"status counts ({by_status}) must sum to total ({self.total})")

    @classmethod
    def from_results(cls, results: tuple[ComponentResult, ...]) -> AnalysisSummary:
        """Count statuses, vulnerable-and-reachable components and warnings."""

        def count(status: ReachabilityStatus) -> int:
            return sum(1 for r in results if r.status is status)

        return cls(
            total=len(results),
            reachable=count(ReachabilityStatus.REACHABLE),
            imported=count(ReachabilityStatus.IMPORTED),
            not_reachable=count(ReachabilityStatus.NOT_REACHABLE),
            indirect=count(ReachabilityStatus.INDIRECT),
            unknown=count(ReachabilityStatus.UNKNOWN),
            vulnerable_reachable=sum(1 for r in results if r.is_vulnerable_reachable),
            warnings_count=sum(len(r.warnings) for r in results),
        )


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """Complete output of one analysis run.

    Attributes:
        version: reachcheck version that produced the report
        timestamp: ISO-8601 UTC time the run finished
        source_root: Analyzed directory
        ecosystem: Adapter that ran
        summary: Status counts
        results: One result per input component, in input order
        failures: Files skipped because they could not be read or parsed
    """

    version: str
    timestamp: str
    source_root: Path
    ecosystem: str
    summary: AnalysisSummary
    results: tuple[ComponentResult, ...]
    failures: tuple[ParseFailure, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.summary.total != len(self.results):
            raise ValueError("summary total must equal number of results")
