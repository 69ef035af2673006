"""Re-export (barrel file) chain resolver.

Follows relative imports through files that re-export other modules
(export { a } from './x', export * from './x') until an external module
name is reached.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from loguru import logger

from reachcheck.domain.model.configuration import DEFAULT_MAX_REEXPORT_DEPTH
from reachcheck.domain.model.enums import ImportStyle
from reachcheck.domain.model.reexport import ReexportChain, ReexportResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from reachcheck.domain.model.import_record import ImportRecord
    from reachcheck.domain.model.location import Location

# Probed in order for extension-less specifiers; '' accepts the specifier as written
RESOLUTION_EXTENSIONS: Final = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", "")

# Records of one file; None when the file cannot be read or parsed
RecordLoader = Callable[[Path], "tuple[ImportRecord, ...] | None"]


def resolve_import_path(specifier: str, from_file: Path) -> Path | None:
    """Resolve a relative specifier to an existing file.

    Tries specifier + extension, then specifier/index + extension.

    Args:
        specifier: Relative module specifier ('./utils', '../lib/index.js')
        from_file: File containing the import

    Returns:
        Resolved file path, or None if nothing exists
    """
    base = from_file.parent
    for ext in RESOLUTION_EXTENSIONS:
        for candidate in (base / f"{specifier}{ext}", base / specifier / f"index{ext}"):
            if candidate.is_file():
                return candidate.resolve()
    return None


@dataclass(frozen=True, slots=True)
class _Step:
    """BFS frontier entry: a file to inspect and how it was reached."""

    path: Path
    targets: tuple[str, ...] | None
    chain: tuple[Path, ...]


class ReexportResolver:
    """Resolves relative imports of a file to the external modules they re-export.

    Breadth-first; every chain carries its own visited-file set (the chain
    itself), so a cycle ends that chain silently without affecting others.
    """

    def __init__(
        self,
        load_records: RecordLoader,
        max_depth: int = DEFAULT_MAX_REEXPORT_DEPTH,
    ) -> None:
        """Initialize resolver.

        Args:
            load_records: Returns the import records of a file (None if unreadable)
            max_depth: Max re-exporting files followed per chain

        Raises:
            ValueError: If max_depth < 1
        """
        if load_records is None:
            raise TypeError("load_records must not be None")
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")

        self._load_records = load_records
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        """Max re-exporting files followed per chain."""
        return self._max_depth

    def resolve(self, path: Path, records: Iterable[ImportRecord]) -> ReexportResult:
        """Resolve every relative import of one file.

        Args:
            path: The importing file
            records: Its import records

        Returns:
            Complete chains keyed by external module, and truncated chains
        """
        chains: dict[str, set[ReexportChain]] = {}
        partial: list[ReexportChain] = []

        for record in records:
            if not record.is_relative or record.is_type_only:
                continue

            start = resolve_import_path(record.module, path)
            if start is None:
                logger.debug(f"Unresolved relative import {record.module!r} in {path}")
                continue

            targets = _requested_names(record)
            found, truncated = self._trace(
                _Step(path=start, targets=targets, chain=(path,)),
                record.location,
            )

            for chain in found:
                chains.setdefault(chain.original_module, set()).add(chain)

            for chain in truncated:
                partial.append(chain)
                logger.debug(f"Re-export chain truncated: {chain.describe()}")

        return ReexportResult(
            chains={module: frozenset(found) for module, found in chains.items()},
            partial=tuple(dict.fromkeys(partial)),
        )

    def _trace(
        self,
        start: _Step,
        location: Location,
    ) -> tuple[list[ReexportChain], list[ReexportChain]]:
        """BFS from one resolved import target.

        Returns:
            (complete chains, truncated chains)
        """
        complete: list[ReexportChain] = []
        truncated: list[ReexportChain] = []
        queue: deque[_Step] = deque([start])

        while queue:
            step = queue.popleft()
            if step.path in step.chain:
                logger.debug(f"Re-export cycle at {step.path} via {' -> '.join(map(str, step.chain))}")
                continue

            records = self._load_records(step.path)
            if records is None:
                continue

            chain = (*step.chain, step.path)
            depth = len(chain) - 1

            for record in records:
                if not record.is_reexport or record.is_type_only:
                    continue

                carries, carried = _carried_names(record, step.targets)
                if not carries:
                    continue

                if not record.is_relative:
                    complete.append(
                        ReexportChain(
                            original_module=record.module,
                            chain=chain,
                            exported_names=carried or (),
                            depth=depth,
                            location=location,
                        )
                    )
                    continue

                following = resolve_import_path(record.module, step.path)

                if depth >= self._max_depth:
                    truncated.append(
                        ReexportChain(
                            original_module=record.module,
                            chain=chain,
                            exported_names=carried or (),
                            depth=depth,
                            truncated=True,
                            beyond=self._modules_beyond(following, carried),
                            location=location,
                        )
                    )
                    continue

                if following is not None:
                    queue.append(_Step(path=following, targets=carried, chain=chain))

        return complete, truncated

    def _modules_beyond(
        self,
        start: Path | None,
        targets: tuple[str, ...] | None,
    ) -> tuple[str, ...]:
        """External modules re-exported from start onward, ignoring the depth limit.

        Each file is inspected once, so the walk ends on cycles and wide graphs.
        """
        found: dict[str, None] = {}
        seen: set[Path] = set()
        queue: deque[tuple[Path | None, tuple[str, ...] | None]] = deque([(start, targets)])

        while queue:
            path, names = queue.popleft()
            if path is None or path in seen:
                continue
            seen.add(path)

            records = self._load_records(path)
            if records is None:
                continue

            for record in records:
                if not record.is_reexport or record.is_type_only:
                    continue
                carries, carried = _carried_names(record, names)
                if not carries:
                    continue
                if record.is_relative:
                    queue.append((resolve_import_path(record.module, path), carried))
                else:
                    found.setdefault(record.module)

        return tuple(found)


def _requested_names(record: ImportRecord) -> tuple[str, ...] | None:
    """Names the importing record asks for; None = the whole module."""
    return record.named_bindings or None


def _carried_names(
    record: ImportRecord,
    targets: tuple[str, ...] | None,
) -> tuple[bool, tuple[str, ...] | None]:
    """Map requested names through one re-export declaration.

    Args:
        record: Re-export record in an intermediate file
        targets: Names requested from that file (None = everything)

    Returns:
        (carries any target, names requested from the re-exported module;
        None = everything)
    """
    if record.style is ImportStyle.NAMED:
        # export { a as b } from 'm': callers see b, the module provides a
        carried = tuple(
            name
            for name in record.named_bindings
            if targets is None or record.local_for(name) in targets
        )
        return bool(carried), carried

    if record.local_name is not None:
        # export * as ns from 'm'
        return targets is None or record.local_name in targets, None

    # export * from 'm' passes every requested name through
    return True, targets
