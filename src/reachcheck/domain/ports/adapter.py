"""Ecosystem adapter port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reachcheck.domain.model.component import Component
    from reachcheck.domain.model.parsed_file import ParseFailure
    from reachcheck.domain.model.result import ComponentResult


class EcosystemAdapterPort(ABC):
    """Port for per-ecosystem reachability analysis.

    Infrastructure layer provides one implementation per ecosystem;
    the registry selects between them.
    """

    @property
    @abstractmethod
    def ecosystem(self) -> str:
        """Canonical ecosystem name (registry key)."""
        ...

    @property
    def aliases(self) -> tuple[str, ...]:
        """Additional registry names served by this adapter."""
        return ()

    @property
    @abstractmethod
    def file_extensions(self) -> tuple[str, ...]:
        """Source file extensions scanned, with leading dot."""
        ...

    @abstractmethod
    def can_handle(self, root: Path) -> bool:
        """Check if this adapter recognises the source root."""
        ...

    @abstractmethod
    def analyze(self, root: Path, components: Sequence[Component]) -> tuple[ComponentResult, ...]:
        """Produce one result per component, in input order.

        Args:
            root: Source root directory
            components: Declared components

        Returns:
            Results, same length and order as components
        """
        ...

    @property
    def failures(self) -> tuple[ParseFailure, ...]:
        """Files skipped during the most recent analyze() call."""
        return ()
