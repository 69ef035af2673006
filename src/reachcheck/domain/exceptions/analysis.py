"""Orchestrator-boundary exceptions.

These are the only hard errors of an analysis run: without a usable
source root or a matching ecosystem adapter no partial result is meaningful.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reachcheck.domain.exceptions.base import ReachCheckError

if TYPE_CHECKING:
    from pathlib import Path


class AnalysisError(ReachCheckError):
    """Analysis could not be started."""


class UnsupportedEcosystemError(AnalysisError):
    """No adapter is available for the requested or detected ecosystem.

    Attributes:
        ecosystem: Requested ecosystem name (None when auto-detection failed)
        reason: Why the ecosystem is unsupported
    """

    def __init__(self, ecosystem: str | None, reason: str) -> None:
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.ecosystem = ecosystem
        self.reason = reason
        label = ecosystem if ecosystem is not None else "<auto>"
        super().__init__(f"Unsupported ecosystem {label}: {reason}")


class SourceRootNotFoundError(AnalysisError):
    """Source root does not exist or is not a directory.

    Attributes:
        path: Offending source root
    """

    def __init__(self, path: Path) -> None:
        if path is None:
            raise TypeError("path must not be None")

        self.path = path
        super().__init__(f"Source root not found or not a directory: {path}")
