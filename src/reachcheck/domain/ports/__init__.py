"""Domain ports (interfaces)."""

from reachcheck.domain.ports.adapter import EcosystemAdapterPort
from reachcheck.domain.ports.import_parser import ImportParserPort
from reachcheck.domain.ports.workspace import WorkspaceResolverPort

__all__ = [
    "EcosystemAdapterPort",
    "ImportParserPort",
    "WorkspaceResolverPort",
]
