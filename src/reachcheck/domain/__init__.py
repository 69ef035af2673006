"""reachcheck domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, abc, dataclasses, enum, pathlib, types, collections.abc
"""

from reachcheck.domain.exceptions import (
    AnalysisError,
    ConfigurationError,
    ParsingError,
    ReachCheckError,
    SourceRootNotFoundError,
    UnsupportedEcosystemError,
)
from reachcheck.domain.model import (
    AnalysisConfig,
    AnalysisReport,
    AnalysisWarning,
    Component,
    ComponentResult,
    Confidence,
    ImportRecord,
    ImportStyle,
    Location,
    ReachabilityStatus,
    ReexportChain,
    UsageInfo,
    Vulnerability,
    WarningCode,
    WarningSeverity,
)
from reachcheck.domain.ports import (
    EcosystemAdapterPort,
    ImportParserPort,
    WorkspaceResolverPort,
)

__all__ = [
    # Exceptions
    "ReachCheckError",
    "ParsingError",
    "ConfigurationError",
    "AnalysisError",
    "UnsupportedEcosystemError",
    "SourceRootNotFoundError",
    # Enums
    "ImportStyle",
    "ReachabilityStatus",
    "Confidence",
    "WarningCode",
    "WarningSeverity",
    # Value objects
    "Location",
    "AnalysisWarning",
    "AnalysisConfig",
    # Entities
    "Component",
    "Vulnerability",
    "ImportRecord",
    "ReexportChain",
    "UsageInfo",
    "ComponentResult",
    "AnalysisReport",
    # Ports
    "ImportParserPort",
    "EcosystemAdapterPort",
    "WorkspaceResolverPort",
]
