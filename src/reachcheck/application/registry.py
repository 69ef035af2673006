"""Ecosystem adapter registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reachcheck.domain.exceptions.analysis import UnsupportedEcosystemError

if TYPE_CHECKING:
    from pathlib import Path

    from reachcheck.domain.ports.adapter import EcosystemAdapterPort


class AdapterRegistry:
    """Ecosystem name -> adapter, in registration order.

    An adapter is reachable under its canonical name and each of its aliases.
    Lookups are case-insensitive.
    """

    def __init__(self) -> None:
        self._adapters: list[EcosystemAdapterPort] = []
        self._by_name: dict[str, EcosystemAdapterPort] = {}

    def register(self, adapter: EcosystemAdapterPort) -> None:
        """Add an adapter.

        Raises:
            ValueError: If the adapter's name or an alias is already registered
        """
        names = [adapter.ecosystem.lower(), *(alias.lower() for alias in adapter.aliases)]
        taken = [name for name in names if name in self._by_name]
        if taken:
            raise ValueError(f"ecosystem name(s) already registered: {taken}")

        self._adapters.append(adapter)
        for name in names:
            self._by_name[name] = adapter

    def get(self, ecosystem: str) -> EcosystemAdapterPort:
        """Adapter registered under a name or alias.

        Raises:
            UnsupportedEcosystemError: If no adapter serves the name
        """
        adapter = self._by_name.get(ecosystem.lower())
        if adapter is None:
            known = ", ".join(sorted(self._by_name)) or "none"
            raise UnsupportedEcosystemError(ecosystem, f"no adapter registered (known: {known})")
        return adapter

    def detect(self, root: Path) -> EcosystemAdapterPort | None:
        """First adapter, in registration order, that recognises root."""
        for adapter in self._adapters:
            if adapter.can_handle(root):
                return adapter
        return None

    @property
    def ecosystems(self) -> tuple[str, ...]:
        """Canonical names, in registration order."""
        return tuple(adapter.ecosystem for adapter in self._adapters)

    def __contains__(self, ecosystem: object) -> bool:
        return isinstance(ecosystem, str) and ecosystem.lower() in self._by_name

    def __len__(self) -> int:
        return len(self._adapters)
