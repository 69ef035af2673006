"""Per-component analysis output."""

from __future__ import annotations

from dataclasses import dataclass

from reachcheck.domain.model.component import Component
from reachcheck.domain.model.enums import Confidence, ModuleSystem, ReachabilityStatus, WarningCode
from reachcheck.domain.model.location import Location
from reachcheck.domain.model.warning import AnalysisWarning


@dataclass(frozen=True, slots=True)
class UsageInfo:
    """How a component is used.

    Attributes:
        import_style: Primary module system (esm > commonjs > dynamic)
        locations: Every matching import location
        used_members: Exports known to be used
        imported_as: Local binding name when a single whole-module binding exists
    """

    import_style: ModuleSystem
    locations: tuple[Location, ...]
    used_members: tuple[str, ...] = ()
    imported_as: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.import_style, ModuleSystem):
            raise TypeError(f"import_style must be ModuleSystem, got {type(self.import_style).__name__}")
        if any(not isinstance(loc, Location) for loc in self.locations):
            raise TypeError("locations must contain Location objects")


@dataclass(frozen=True, slots=True)
class ComponentResult:
    """Verdict for one declared component.

    Attributes:
        component: The analyzed component
        status: Reachability verdict
        confidence: How directly the evidence supports the verdict
        usage: Matching imports (None when never imported)
        notes: Human-readable reasoning
        warnings: Analysis limitations and notable facts
    """

    component: Component
    status: ReachabilityStatus
    confidence: Confidence
    usage: UsageInfo | None = None
    notes: tuple[str, ...] = ()
    warnings: tuple[AnalysisWarning, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.component is None:
            raise TypeError("component must not be None")
        if not isinstance(self.status, ReachabilityStatus):
            raise TypeError(f"status must be ReachabilityStatus, got {type(self.status).__name__}")
        if not isinstance(self.confidence, Confidence):
            raise TypeError(f"confidence must be Confidence, got {type(self.confidence).__name__}")
        if self.status in (ReachabilityStatus.REACHABLE, ReachabilityStatus.IMPORTED) and self.usage is None:
            raise ValueError(f"{self.status.value} result requires usage")

    @property
    def warning_codes(self) -> frozenset[WarningCode]:
        """Distinct warning codes attached to this result."""
        return frozenset(w.code for w in self.warnings)

    def warnings_with(self, code: WarningCode) -> tuple[AnalysisWarning, ...]:
        """Warnings with the given code, in attachment order."""
        return tuple(w for w in self.warnings if w.code is code)

    @property
    def is_vulnerable_reachable(self) -> bool:
        """Reachable and carrying at least one known vulnerability."""
        return self.status is ReachabilityStatus.REACHABLE and self.component.is_vulnerable
