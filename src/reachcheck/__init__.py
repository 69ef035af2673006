"""reachcheck - reachability analysis of third-party dependencies in JavaScript/TypeScript code."""

__version__ = "0.1.0"

from loguru import logger

from reachcheck.application.analyzer import ReachabilityAnalyzer, analyze
from reachcheck.application.discovery import load_config
from reachcheck.domain.model import (
    AnalysisConfig,
    AnalysisReport,
    Component,
    ComponentResult,
    Confidence,
    ReachabilityStatus,
    Vulnerability,
    WarningCode,
)
from reachcheck.infrastructure.adapters.cached_parser import ParseCache
from reachcheck.infrastructure.logging import configure_logging

# Library: silent until the application calls configure_logging()
logger.disable("reachcheck")

__all__ = [
    "AnalysisConfig",
    "AnalysisReport",
    "Component",
    "ComponentResult",
    "Confidence",
    "ParseCache",
    "ReachabilityAnalyzer",
    "ReachabilityStatus",
    "Vulnerability",
    "WarningCode",
    "__version__",
    "analyze",
    "configure_logging",
    "load_config",
]
