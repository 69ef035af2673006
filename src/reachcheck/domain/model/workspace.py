"""Monorepo workspace value object."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from reachcheck.domain.model.enums import WorkspaceKind


@dataclass(frozen=True, slots=True)
class WorkspaceInfo:
    """Packages belonging to the same monorepo as the analyzed source.

    Attributes:
        root: Workspace root directory
        kind: Workspace manager
        packages: Member package names
        package_dirs: Package name -> directory
    """

    root: Path
    kind: WorkspaceKind
    packages: frozenset[str]
    package_dirs: Mapping[str, Path] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.root is None:
            raise TypeError("root must not be None")
        if not self.packages:
            raise ValueError("workspace must contain at least one package")
        unknown = set(self.package_dirs) - self.packages
        if unknown:
            raise ValueError(f"package_dirs references unknown packages: {sorted(unknown)}")
        if not isinstance(self.package_dirs, MappingProxyType):
            object.__setattr__(self, "package_dirs", MappingProxyType(dict(self.package_dirs)))

    def is_internal(self, name: str) -> bool:
        """Name is a member package of this workspace."""
        return name in self.packages
