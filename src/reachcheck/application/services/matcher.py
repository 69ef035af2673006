"""Component matcher.

Maps a declared component onto the import records and re-export chains
that name it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reachcheck.domain.model.component import Component
    from reachcheck.domain.model.import_record import ImportRecord
    from reachcheck.domain.model.parsed_file import ParsedFile
    from reachcheck.domain.model.reexport import ReexportChain, ReexportResult
    from reachcheck.domain.ports.workspace import WorkspaceResolverPort


def module_matches(module: str, name: str) -> bool:
    """Check an import specifier against a component name.

    Exact equality, or subpath equality in either direction:
    'lodash/merge' matches component 'lodash', and 'lodash' matches a
    component declared at subpath level as 'lodash/merge'.
    """
    if module == name:
        return True
    return module.startswith(f"{name}/") or name.startswith(f"{module}/")


def chain_key_matches(key: str, name: str) -> bool:
    """Check a re-export chain key against a component name.

    Exact or prefix match in either direction, on path-segment boundaries.
    """
    return module_matches(key, name)


@dataclass(frozen=True, slots=True)
class MatchedImport:
    """Import record naming a component, with the file that owns it."""

    record: ImportRecord
    file: ParsedFile


@dataclass(frozen=True, slots=True)
class ImportIndex:
    """Aggregated per-file extraction results for one source root.

    Attributes:
        files: Parsed files, sorted by path
        reexports: Merged re-export resolution of every file with relative imports
        workspace: Same-workspace package resolver (None = not in a workspace)
    """

    files: tuple[ParsedFile, ...]
    reexports: ReexportResult
    workspace: WorkspaceResolverPort | None = None

    @property
    def has_sources(self) -> bool:
        """At least one source file was discovered and parsed."""
        return len(self.files) > 0

    @property
    def partial_chains(self) -> tuple[ReexportChain, ...]:
        return self.reexports.partial


@dataclass(frozen=True, slots=True)
class ComponentMatch:
    """Everything in the index naming one component.

    Attributes:
        component: The declared component
        direct: Import records (not re-exports) naming the component
        reexports: Re-export declarations naming the component
        chains: Complete re-export chains terminating in the component
        truncated: Chains cut at the depth limit with the component beyond them
        internal: Component is a same-workspace package
    """

    component: Component
    direct: tuple[MatchedImport, ...] = ()
    reexports: tuple[MatchedImport, ...] = ()
    chains: tuple[ReexportChain, ...] = ()
    truncated: tuple[ReexportChain, ...] = ()
    internal: bool = False

    @property
    def is_empty(self) -> bool:
        """Nothing names the component."""
        return not self.direct and not self.reexports and not self.chains

    @property
    def runtime_reexports(self) -> tuple[MatchedImport, ...]:
        """Re-export declarations that carry values (not `export type`)."""
        return tuple(m for m in self.reexports if not m.record.is_type_only)


class ComponentMatcher:
    """Finds the subset of an ImportIndex naming a component.

    Stateless; safe to share between threads.
    """

    def match(self, component: Component, index: ImportIndex) -> ComponentMatch:
        """Match one component.

        A component whose name is a same-workspace package short-circuits:
        the result is marked internal and no records are collected.

        Args:
            component: Declared component
            index: Aggregated extraction results

        Returns:
            ComponentMatch (records in file order, chains sorted by depth)
        """
        name = component.name
        if index.workspace is not None and index.workspace.is_internal(name):
            return ComponentMatch(component=component, internal=True)

        direct: list[MatchedImport] = []
        reexports: list[MatchedImport] = []
        for parsed in index.files:
            for record in parsed.records:
                if not module_matches(record.module, name):
                    continue
                matched = MatchedImport(record=record, file=parsed)
                if record.is_reexport:
                    reexports.append(matched)
                else:
                    direct.append(matched)

        chains = _matching_chains(index.reexports, name)

        return ComponentMatch(
            component=component,
            direct=tuple(direct),
            reexports=tuple(reexports),
            chains=chains,
            truncated=tuple(
                chain
                for chain in index.partial_chains
                if any(module_matches(module, name) for module in chain.beyond)
            ),
        )

    def match_all(
        self,
        components: Sequence[Component],
        index: ImportIndex,
    ) -> tuple[ComponentMatch, ...]:
        """Match every component, in input order."""
        return tuple(self.match(component, index) for component in components)


def _matching_chains(reexports: ReexportResult, name: str) -> tuple[ReexportChain, ...]:
    found = {
        chain
        for key, chains in reexports.chains.items()
        if chain_key_matches(key, name)
        for chain in chains
    }
    return tuple(sorted(found, key=lambda c: (c.depth, c.describe(), c.exported_names)))
