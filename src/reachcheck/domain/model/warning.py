"""Analysis warning value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from reachcheck.domain.model.enums import WarningCode, WarningSeverity

if TYPE_CHECKING:
    from reachcheck.domain.model.location import Location


@dataclass(frozen=True, slots=True)
class AnalysisWarning:
    """Limitation or notable fact attached to a verdict.

    Attributes:
        code: Stable warning code
        message: Human-readable explanation
        severity: INFO or WARNING
        location: Where the warning originates (None for component-wide warnings)
    """

    code: WarningCode
    message: str
    severity: WarningSeverity = WarningSeverity.WARNING
    location: Location | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.code, WarningCode):
            raise TypeError(f"code must be WarningCode, got {type(self.code).__name__}")
        if not isinstance(self.severity, WarningSeverity):
            raise TypeError(f"severity must be WarningSeverity, got {type(self.severity).__name__}")
        if not self.message:
            raise ValueError("message must be non-empty string")
