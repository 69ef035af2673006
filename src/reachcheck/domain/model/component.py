"""Declared dependency entities (analysis input)."""

from __future__ import annotations

from dataclasses import dataclass

from reachcheck.domain.model.enums import VulnerabilitySeverity


@dataclass(frozen=True, slots=True)
class Vulnerability:
    """Known vulnerability of a component.

    Attributes:
        id: Advisory identifier (CVE-2024-1234, GHSA-xxxx)
        severity: Advisory severity (None when not provided)
        affected_functions: Exported functions known to be vulnerable
        affected_versions: Version range expression
        fixed_version: First fixed version
        description: Advisory summary
    """

    id: str
    severity: VulnerabilitySeverity | None = None
    affected_functions: tuple[str, ...] = ()
    affected_versions: str | None = None
    fixed_version: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.id:
            raise ValueError("vulnerability id must not be empty")
        if self.severity is not None and not isinstance(self.severity, VulnerabilitySeverity):
            raise TypeError(
                f"severity must be VulnerabilitySeverity or None, got {type(self.severity).__name__}"
            )
        if isinstance(self.affected_functions, str):
            raise TypeError("affected_functions must be a tuple of names, not str")
        if any(not f for f in self.affected_functions):
            raise ValueError("affected function names must be non-empty")


@dataclass(frozen=True, slots=True)
class Component:
    """Third-party dependency declared by the analyzed project.

    Attributes:
        name: Package name ('lodash', '@scope/pkg', 'lodash/merge')
        version: Declared version
        purl: Package URL
        ecosystem: Package ecosystem (npm, pypi, ...)
        license: Declared license
        vulnerabilities: Known vulnerabilities
    """

    name: str
    version: str
    purl: str | None = None
    ecosystem: str | None = None
    license: str | None = None
    vulnerabilities: tuple[Vulnerability, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("component name must not be empty")
        if self.version is None:
            raise TypeError("version must not be None")
        if any(not isinstance(v, Vulnerability) for v in self.vulnerabilities):
            raise TypeError("vulnerabilities must contain Vulnerability objects")

    @property
    def affected_functions(self) -> frozenset[str]:
        """Union of affected functions across all vulnerabilities."""
        return frozenset(f for v in self.vulnerabilities for f in v.affected_functions)

    @property
    def is_vulnerable(self) -> bool:
        """Component has at least one known vulnerability."""
        return len(self.vulnerabilities) > 0

    def __str__(self) -> str:
        """Format as name@version."""
        return f"{self.name}@{self.version}"
