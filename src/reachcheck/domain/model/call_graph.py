"""Per-file call graph entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from reachcheck.domain.model.enums import BindingState, DynamicCodeKind

if TYPE_CHECKING:
    from reachcheck.domain.model.location import Location


@dataclass(frozen=True, slots=True)
class CallInfo:
    """One invocation site.

    Attributes:
        callee: Invoked name ('merge' for merge() and _.merge())
        location: Call site
        receiver: Object the callee is accessed on ('_' for _.merge())
        is_constructor: new X()
        is_method_call: obj.method() or obj['method']()
    """

    callee: str
    location: Location
    receiver: str | None = None
    is_constructor: bool = False
    is_method_call: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.callee:
            raise ValueError("callee must not be empty")
        if self.location is None:
            raise TypeError("location must not be None")
        if self.is_method_call and self.receiver is not None and not self.receiver:
            raise ValueError("receiver must be non-empty string or None")

    @property
    def qualified_name(self) -> str:
        """receiver.callee for method calls, callee otherwise."""
        if self.receiver is not None:
            return f"{self.receiver}.{self.callee}"
        return self.callee


@dataclass(frozen=True, slots=True)
class DynamicCodeWarning:
    """Runtime code execution construct; static analysis may be unsound here.

    Attributes:
        kind: Construct type tag
        location: Where it occurs
        context: Short explanation
    """

    kind: DynamicCodeKind
    location: Location
    context: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.kind, DynamicCodeKind):
            raise TypeError(f"kind must be DynamicCodeKind, got {type(self.kind).__name__}")
        if self.location is None:
            raise TypeError("location must not be None")


@dataclass(frozen=True, slots=True)
class CallGraphResult:
    """Call/reference evidence for one file.

    Attributes:
        calls: Every invocation site, in source order
        called_identifiers: Invoked names, plain ('merge') and qualified ('_.merge')
        referenced_identifiers: Identifiers used as values anywhere (declarations excluded)
        dynamic_code_warnings: Runtime code execution constructs
    """

    calls: tuple[CallInfo, ...] = ()
    called_identifiers: frozenset[str] = frozenset()
    referenced_identifiers: frozenset[str] = frozenset()
    dynamic_code_warnings: tuple[DynamicCodeWarning, ...] = ()

    @property
    def referenced_only_identifiers(self) -> frozenset[str]:
        """Identifiers used as values but never invoked (e.g. passed as callbacks)."""
        return self.referenced_identifiers - self.called_identifiers

    def is_called(self, name: str, receiver: str | None = None) -> bool:
        """Check direct call of name, or receiver.name when receiver is given."""
        if receiver is not None:
            return f"{receiver}.{name}" in self.called_identifiers
        return name in self.called_identifiers

    @classmethod
    def empty(cls) -> CallGraphResult:
        """Create result for a file without calls."""
        return cls()


@dataclass(frozen=True, slots=True)
class BindingUsage:
    """Classification of imported local bindings in one file.

    Attributes:
        states: Local binding name -> CALLED / REFERENCED_ONLY / UNUSED
    """

    states: Mapping[str, BindingState] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if any(not isinstance(s, BindingState) for s in self.states.values()):
            raise TypeError("states values must be BindingState")
        if not isinstance(self.states, MappingProxyType):
            object.__setattr__(self, "states", MappingProxyType(dict(self.states)))

    def _with_state(self, state: BindingState) -> frozenset[str]:
        return frozenset(name for name, s in self.states.items() if s is state)

    @property
    def called(self) -> frozenset[str]:
        """Bindings appearing as an invocation callee."""
        return self._with_state(BindingState.CALLED)

    @property
    def referenced_only(self) -> frozenset[str]:
        """Bindings used as values but never invoked."""
        return self._with_state(BindingState.REFERENCED_ONLY)

    @property
    def unused(self) -> frozenset[str]:
        """Bindings never appearing outside their import."""
        return self._with_state(BindingState.UNUSED)

    def state_of(self, name: str) -> BindingState:
        """State of one binding; unknown names are UNUSED."""
        return self.states.get(name, BindingState.UNUSED)
