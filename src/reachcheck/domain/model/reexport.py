"""Re-export chain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reachcheck.domain.model.location import Location


@dataclass(frozen=True, slots=True)
class ReexportChain:
    """Path from an importing file through re-exporting files to a module.

    Attributes:
        original_module: External module the chain terminates in. For a
            truncated chain: the last relative specifier that was not followed.
        chain: Files traversed, starting with the importing file
        exported_names: Names carried through the chain (empty = everything)
        depth: Number of re-exporting files traversed (len(chain) - 1)
        truncated: Resolution stopped at the depth limit before reaching a module
        beyond: Truncated chains only: external modules re-exported past the limit
        location: Import that starts the chain (None when unknown)
    """

    original_module: str
    chain: tuple[Path, ...]
    exported_names: tuple[str, ...] = ()
    depth: int = 0
    truncated: bool = False
    beyond: tuple[str, ...] = ()
    location: Location | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.original_module:
            raise ValueError("original_module must not be empty")
        if not self.chain:
            raise ValueError("chain must contain at least the importing file")
        if self.depth != len(self.chain) - 1:
            raise ValueError(f"depth ({self.depth}) must equal len(chain) - 1 ({len(self.chain) - 1})")
        if not isinstance(self.truncated, bool):
            raise TypeError("truncated must be bool")
        if self.beyond and not self.truncated:
            raise ValueError("only truncated chains have modules beyond the depth limit")

    @property
    def entry(self) -> Path:
        """Importing file the chain starts from."""
        return self.chain[0]

    @property
    def terminal(self) -> Path:
        """Last file traversed (the one naming original_module)."""
        return self.chain[-1]

    @property
    def is_barrel(self) -> bool:
        """Chain passes through more than one intermediate file."""
        return self.depth > 1

    def describe(self) -> str:
        """Format as 'a.js -> b.js -> module'."""
        return " -> ".join([*(str(p) for p in self.chain), self.original_module])


@dataclass(frozen=True, slots=True)
class ReexportResult:
    """Output of re-export resolution for one or more files.

    Attributes:
        chains: original_module -> every complete chain reaching it
        partial: Chains truncated at the depth limit
    """

    chains: Mapping[str, frozenset[ReexportChain]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    partial: tuple[ReexportChain, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for module, chains in self.chains.items():
            if any(c.original_module != module for c in chains):
                raise ValueError(f"chain keyed under {module!r} names another module")
            if any(c.truncated for c in chains):
                raise ValueError("truncated chains belong in partial")
        if any(not c.truncated for c in self.partial):
            raise ValueError("partial must contain only truncated chains")
        if not isinstance(self.chains, MappingProxyType):
            object.__setattr__(self, "chains", MappingProxyType(dict(self.chains)))

    @property
    def is_empty(self) -> bool:
        """No chains, complete or partial."""
        return not self.chains and not self.partial

    def merge(self, other: ReexportResult) -> ReexportResult:
        """Combine two results; chains to the same module are unioned."""
        merged: dict[str, frozenset[ReexportChain]] = dict(self.chains)
        for module, chains in other.chains.items():
            merged[module] = merged.get(module, frozenset()) | chains

        partial = self.partial + tuple(c for c in other.partial if c not in self.partial)
        return ReexportResult(chains=merged, partial=partial)

    @classmethod
    def empty(cls) -> ReexportResult:
        """Create result without chains."""
        return cls()
