"""Domain model entities."""

from reachcheck.domain.model.call_graph import (
    BindingUsage,
    CallGraphResult,
    CallInfo,
    DynamicCodeWarning,
)
from reachcheck.domain.model.component import Component, Vulnerability
from reachcheck.domain.model.configuration import DEFAULT_MAX_REEXPORT_DEPTH, AnalysisConfig
from reachcheck.domain.model.enums import (
    BindingState,
    Confidence,
    DynamicCodeKind,
    ImportStyle,
    ModuleSystem,
    ReachabilityStatus,
    VulnerabilitySeverity,
    WarningCode,
    WarningSeverity,
    WorkspaceKind,
)
from reachcheck.domain.model.import_record import ImportRecord
from reachcheck.domain.model.location import Location
from reachcheck.domain.model.parsed_file import ParsedFile, ParseFailure
from reachcheck.domain.model.reexport import ReexportChain, ReexportResult
from reachcheck.domain.model.report import AnalysisReport, AnalysisSummary
from reachcheck.domain.model.result import ComponentResult, UsageInfo
from reachcheck.domain.model.warning import AnalysisWarning
from reachcheck.domain.model.workspace import WorkspaceInfo

__all__ = [
    # Enums
    "BindingState",
    "Confidence",
    "DynamicCodeKind",
    "ImportStyle",
    "ModuleSystem",
    "ReachabilityStatus",
    "VulnerabilitySeverity",
    "WarningCode",
    "WarningSeverity",
    "WorkspaceKind",
    # Value objects
    "Location",
    "AnalysisWarning",
    "AnalysisConfig",
    "DEFAULT_MAX_REEXPORT_DEPTH",
    # Input
    "Component",
    "Vulnerability",
    # Extraction
    "ImportRecord",
    "CallInfo",
    "CallGraphResult",
    "DynamicCodeWarning",
    "BindingUsage",
    "ParsedFile",
    "ParseFailure",
    "ReexportChain",
    "ReexportResult",
    "WorkspaceInfo",
    # Output
    "UsageInfo",
    "ComponentResult",
    "AnalysisSummary",
    "AnalysisReport",
]
