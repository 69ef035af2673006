"""Per-file parse results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from reachcheck.domain.model.call_graph import BindingUsage, CallGraphResult
from reachcheck.domain.model.import_record import ImportRecord


@dataclass(frozen=True, slots=True)
class ParsedFile:
    """Everything extracted from one source file.

    Owns its ImportRecords: every record's location points at this file.

    Attributes:
        path: Source file
        records: Import records in source order
        call_graph: Call/reference evidence
        binding_usage: Called / referenced-only / unused state of each local binding
        member_accesses: Whole-module local binding -> members accessed on it
        has_syntax_errors: Parser recovered from errors in this file
    """

    path: Path
    records: tuple[ImportRecord, ...] = ()
    call_graph: CallGraphResult = field(default_factory=CallGraphResult.empty)
    binding_usage: BindingUsage = field(default_factory=BindingUsage)
    member_accesses: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    has_syntax_errors: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.path is None:
            raise TypeError("path must not be None")
        for record in self.records:
            if record.location.file != self.path:
                raise ValueError(
                    f"record for {record.module!r} located in {record.location.file}, not {self.path}"
                )
        if not isinstance(self.member_accesses, MappingProxyType):
            object.__setattr__(self, "member_accesses", MappingProxyType(dict(self.member_accesses)))

    @property
    def has_relative_imports(self) -> bool:
        """File references other local files (re-export resolution candidate)."""
        return any(r.is_relative for r in self.records)

    def members_of(self, local_name: str) -> frozenset[str]:
        """Members accessed on a whole-module binding."""
        return self.member_accesses.get(local_name, frozenset())


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """File that could not be read or parsed; skipped without partial records.

    Attributes:
        path: Skipped file
        reason: Why it was skipped
    """

    path: Path
    reason: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.path is None:
            raise TypeError("path must not be None")
        if not self.reason:
            raise ValueError("reason must be non-empty string")
