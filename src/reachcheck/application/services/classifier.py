"""Classification engine.

Combines matched imports, re-export chains, call-graph evidence and
vulnerability data into one verdict per component.

Precedence (first applicable rule wins):
1. No source files at all           -> UNKNOWN
2. Same-workspace package           -> NOT_REACHABLE ("internal package")
3. Only type-only matches, no chain -> NOT_REACHABLE (erased before runtime)
4. Only side-effect imports, no chain -> REACHABLE, HIGH
5. No direct match, chain present   -> INDIRECT
6. Nothing matches                  -> NOT_REACHABLE
7. Direct matches:
   a. vulnerable function used                  -> REACHABLE, HIGH
   b. vulnerable functions, whole-module import -> REACHABLE, MEDIUM
   c. vulnerable functions, named imports only  -> IMPORTED, MEDIUM
   d. no vulnerable functions known             -> REACHABLE, HIGH
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from reachcheck.domain.model.enums import (
    BindingState,
    Confidence,
    ModuleSystem,
    ReachabilityStatus,
    WarningCode,
    WarningSeverity,
)
from reachcheck.domain.model.result import ComponentResult, UsageInfo
from reachcheck.domain.model.warning import AnalysisWarning

if TYPE_CHECKING:
    from pathlib import Path

    from reachcheck.application.services.matcher import ComponentMatch, MatchedImport
    from reachcheck.domain.model.component import Component
    from reachcheck.domain.model.reexport import ReexportChain

# Primary module system preference
_SYSTEM_PRIORITY = (ModuleSystem.ESM, ModuleSystem.COMMONJS, ModuleSystem.DYNAMIC)


class ClassificationEngine:
    """Pure, I/O-free verdict computation.

    Never raises for a single component: an unexpected failure degrades
    to NOT_REACHABLE with LOW confidence and an explanatory note.
    """

    def classify(self, match: ComponentMatch, has_sources: bool) -> ComponentResult:
        """Classify one component.

        Args:
            match: Records and chains naming the component
            has_sources: At least one source file was analyzed

        Returns:
            ComponentResult for match.component
        """
        try:
            return self._classify(match, has_sources)
        except Exception as e:  # noqa: BLE001
            logger.opt(exception=e).warning(f"Classification failed for {match.component}")
            return ComponentResult(
                component=match.component,
                status=ReachabilityStatus.NOT_REACHABLE,
                confidence=Confidence.LOW,
                notes=(f"Analysis failed: {type(e).__name__}: {e}",),
            )

    def _classify(self, match: ComponentMatch, has_sources: bool) -> ComponentResult:
        component = match.component

        # 1
        if not has_sources:
            return ComponentResult(
                component=component,
                status=ReachabilityStatus.UNKNOWN,
                confidence=Confidence.LOW,
                notes=("No source files found",),
            )

        # 2
        if match.internal:
            return ComponentResult(
                component=component,
                status=ReachabilityStatus.NOT_REACHABLE,
                confidence=Confidence.HIGH,
                notes=(f"{component.name} is an internal package of this workspace",),
            )

        runtime = tuple(m for m in match.direct if not m.record.is_type_only)
        has_chain = bool(match.chains) or bool(match.runtime_reexports)
        warnings = _common_warnings(match)

        # 3
        if (match.direct or match.reexports) and not runtime and not has_chain:
            return ComponentResult(
                component=component,
                status=ReachabilityStatus.NOT_REACHABLE,
                confidence=Confidence.HIGH,
                usage=_usage(match.direct or match.reexports),
                notes=("Only type-only imports found; erased before runtime",),
                warnings=warnings,
            )

        # 4
        if runtime and not has_chain and all(m.record.is_side_effect_only for m in runtime):
            return ComponentResult(
                component=component,
                status=ReachabilityStatus.REACHABLE,
                confidence=Confidence.HIGH,
                usage=_usage(runtime),
                notes=(
                    f"Side-effect import in {len(runtime)} location(s); "
                    "module top-level code runs on load",
                ),
                warnings=warnings,
            )

        # 5
        if not runtime and has_chain:
            return self._indirect(match, warnings)

        # 6
        if not runtime:
            return _not_imported(component, match.truncated)

        # 7
        return self._direct(match, runtime, warnings)

    def _indirect(
        self,
        match: ComponentMatch,
        warnings: tuple[AnalysisWarning, ...],
    ) -> ComponentResult:
        component = match.component
        notes: list[str] = [
            f"Re-exported, not imported directly: {m.record.module} in {m.file.path}"
            for m in match.runtime_reexports
        ]
        notes.extend(
            f"Reachable through re-export chain (depth {chain.depth}): {chain.describe()}"
            for chain in match.chains
        )

        exposed = _exposed_names(match)
        vulnerable = component.affected_functions
        if vulnerable and exposed is not None and vulnerable & exposed:
            exposed_vulnerable = ", ".join(sorted(vulnerable & exposed))
            notes.append(f"Vulnerable function(s) re-exported: {exposed_vulnerable}")

        chain_warnings = [
            AnalysisWarning(
                code=WarningCode.INDIRECT_USAGE,
                message=(
                    f"{component.name} is only used through re-exports; "
                    "the call site is not observed under its own name"
                ),
                severity=WarningSeverity.INFO,
            )
        ]
        chain_warnings.extend(_barrel_warnings(match.chains))

        usage = _usage(match.runtime_reexports) if match.runtime_reexports else None
        return ComponentResult(
            component=component,
            status=ReachabilityStatus.INDIRECT,
            confidence=Confidence.MEDIUM,
            usage=usage,
            notes=tuple(notes),
            warnings=(*warnings, *chain_warnings),
        )

    def _direct(
        self,
        match: ComponentMatch,
        runtime: tuple[MatchedImport, ...],
        warnings: tuple[AnalysisWarning, ...],
    ) -> ComponentResult:
        component = match.component
        used = _used_members(runtime)
        usage = _usage(runtime, used)
        vulnerable = component.affected_functions

        extra_notes = tuple(
            f"Also reachable through re-export chain (depth {chain.depth}): {chain.describe()}"
            for chain in match.chains
        )
        warnings = (*warnings, *_barrel_warnings(match.chains))

        if not vulnerable:
            # 7d
            return ComponentResult(
                component=component,
                status=ReachabilityStatus.REACHABLE,
                confidence=Confidence.HIGH,
                usage=usage,
                notes=(f"Imported in {len(usage.locations)} location(s)", *extra_notes),
                warnings=warnings,
            )

        hit = [name for name in used if name in vulnerable]
        if hit:
            # 7a
            return ComponentResult(
                component=component,
                status=ReachabilityStatus.REACHABLE,
                confidence=Confidence.HIGH,
                usage=usage,
                notes=(f"Vulnerable function(s) used: {', '.join(hit)}", *extra_notes),
                warnings=warnings,
            )

        listed = ", ".join(sorted(vulnerable))
        whole_module = [m for m in runtime if m.record.is_whole_module]
        if whole_module:
            # 7b
            namespace_warnings = tuple(
                AnalysisWarning(
                    code=WarningCode.NAMESPACE_IMPORT,
                    message="Namespace/default import - cannot determine which functions are used at runtime",
                    location=m.record.location,
                )
                for m in whole_module
            )
            return ComponentResult(
                component=component,
                status=ReachabilityStatus.REACHABLE,
                confidence=Confidence.MEDIUM,
                usage=usage,
                notes=(
                    f"Whole-module import detected - vulnerable function(s) ({listed}) may be accessible",
                    *extra_notes,
                ),
                warnings=(*warnings, *namespace_warnings),
            )

        # 7c
        return ComponentResult(
            component=component,
            status=ReachabilityStatus.IMPORTED,
            confidence=Confidence.MEDIUM,
            usage=usage,
            notes=(
                f"Imported, but vulnerable function(s) ({listed}) are not among the used members",
                *extra_notes,
            ),
            warnings=warnings,
        )


def _not_imported(
    component: Component,
    truncated: tuple[ReexportChain, ...],
) -> ComponentResult:
    """Rule 6; a truncated chain leading to the component makes the verdict conservative."""
    if not truncated:
        return ComponentResult(
            component=component,
            status=ReachabilityStatus.NOT_REACHABLE,
            confidence=Confidence.HIGH,
            notes=("Not imported in any source file",),
        )

    return ComponentResult(
        component=component,
        status=ReachabilityStatus.NOT_REACHABLE,
        confidence=Confidence.LOW,
        notes=(
            "Not imported in any source file",
            f"{len(truncated)} re-export chain(s) reach {component.name} "
            "only beyond the depth limit",
        ),
        warnings=_depth_warnings(component, truncated),
    )


def _common_warnings(match: ComponentMatch) -> tuple[AnalysisWarning, ...]:
    """Warnings attached regardless of the verdict branch."""
    warnings: list[AnalysisWarning] = []

    type_only_reexports = tuple(m for m in match.reexports if m.record.is_type_only)
    for m in (*match.direct, *type_only_reexports):
        record = m.record
        if record.is_type_only:
            warnings.append(
                AnalysisWarning(
                    code=WarningCode.TYPE_ONLY_IMPORT,
                    message="Type-only import - erased before runtime",
                    severity=WarningSeverity.INFO,
                    location=record.location,
                )
            )
            continue

        if record.module_system is ModuleSystem.DYNAMIC:
            warnings.append(
                AnalysisWarning(
                    code=WarningCode.DYNAMIC_IMPORT,
                    message="Dynamic import detected - runtime behavior may differ from static analysis",
                    location=record.location,
                )
            )
        if record.is_conditional:
            warnings.append(
                AnalysisWarning(
                    code=WarningCode.CONDITIONAL_IMPORT,
                    message="Import inside conditional control flow - may not execute at runtime",
                    location=record.location,
                )
            )
        if record.is_side_effect_only:
            warnings.append(
                AnalysisWarning(
                    code=WarningCode.SIDE_EFFECT_IMPORT,
                    message="Side-effect import - module top-level code runs on load",
                    severity=WarningSeverity.INFO,
                    location=record.location,
                )
            )

        unused = [
            name
            for name in record.named_bindings
            if not record.is_inline
            and m.file.binding_usage.state_of(record.local_for(name)) is BindingState.UNUSED
        ]
        if unused:
            warnings.append(
                AnalysisWarning(
                    code=WarningCode.UNUSED_IMPORT,
                    message=f"Imported but never used: {', '.join(unused)}",
                    severity=WarningSeverity.INFO,
                    location=record.location,
                )
            )

    # Dynamic code in any file containing a match
    seen: set[Path] = set()
    for m in (*match.direct, *match.reexports):
        if m.file.path in seen:
            continue
        seen.add(m.file.path)
        for dynamic in m.file.call_graph.dynamic_code_warnings:
            warnings.append(
                AnalysisWarning(
                    code=WarningCode.DYNAMIC_CODE,
                    message=f"Dynamic code execution ({dynamic.kind.value}): {dynamic.context}",
                    location=dynamic.location,
                )
            )

    warnings.extend(_depth_warnings(match.component, match.truncated))
    return tuple(warnings)


def _barrel_warnings(chains: tuple[ReexportChain, ...]) -> tuple[AnalysisWarning, ...]:
    return tuple(
        AnalysisWarning(
            code=WarningCode.BARREL_FILE,
            message=f"Re-exported through barrel file {chain.terminal}: {chain.describe()}",
            severity=WarningSeverity.INFO,
            location=chain.location,
        )
        for chain in chains
        if chain.is_barrel
    )


def _depth_warnings(
    component: Component,
    truncated: tuple[ReexportChain, ...],
) -> tuple[AnalysisWarning, ...]:
    return tuple(
        AnalysisWarning(
            code=WarningCode.MAX_DEPTH_REACHED,
            message=(
                f"Re-export resolution stopped at depth {chain.depth} before reaching "
                f"{component.name}: {chain.describe()}"
            ),
            location=chain.location,
        )
        for chain in truncated
    )


def _used_members(matched: tuple[MatchedImport, ...]) -> tuple[str, ...]:
    """Named bindings, alias originals, and members touched on whole-module bindings."""
    used: dict[str, None] = {}
    for m in matched:
        record = m.record
        for name in record.named_bindings:
            used.setdefault(name)
        if record.local_name is not None:
            for member in sorted(m.file.members_of(record.local_name)):
                used.setdefault(member)
            for call in m.file.call_graph.calls:
                if call.receiver == record.local_name:
                    used.setdefault(call.callee)
    return tuple(used)


def _usage(
    matched: tuple[MatchedImport, ...],
    used_members: tuple[str, ...] = (),
) -> UsageInfo:
    systems = {m.record.module_system for m in matched}
    primary = next(s for s in _SYSTEM_PRIORITY if s in systems)

    local_names = {m.record.local_name for m in matched if m.record.local_name is not None}
    imported_as = next(iter(local_names)) if len(local_names) == 1 else None

    return UsageInfo(
        import_style=primary,
        locations=tuple(m.record.location for m in matched),
        used_members=used_members,
        imported_as=imported_as,
    )


def _exposed_names(match: ComponentMatch) -> frozenset[str] | None:
    """Names carried by the chains; None when any chain carries everything."""
    names: set[str] = set()
    for chain in match.chains:
        if not chain.exported_names:
            return None
        names.update(chain.exported_names)
    for m in match.runtime_reexports:
        if not m.record.named_bindings:
            return None
        names.update(m.record.named_bindings)
    return frozenset(names)
