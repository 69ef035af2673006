"""Workspace resolver port (interface)."""

from typing import Protocol


class WorkspaceResolverPort(Protocol):
    """Decides whether a component name is a same-workspace package.

    WorkspaceInfo satisfies this protocol; so does any object exposing
    is_internal().
    """

    def is_internal(self, name: str) -> bool:
        """Check if name belongs to the analyzed workspace."""
        ...
