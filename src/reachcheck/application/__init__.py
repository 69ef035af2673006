"""Application layer for reachability analysis.

- discovery: Source files, ignore rules, workspaces, configuration
- adapters: Per-ecosystem analysis pipelines
- services: Component matching and verdict classification
- analyzer: Main facade (ReachabilityAnalyzer)
"""

from reachcheck.application.adapters import JavaScriptAdapter
from reachcheck.application.analyzer import ReachabilityAnalyzer, analyze, default_registry
from reachcheck.application.discovery import (
    detect_workspace,
    discover_source_files,
    load_config,
    load_ignore_rules,
)
from reachcheck.application.registry import AdapterRegistry
from reachcheck.application.services import ClassificationEngine, ComponentMatcher

__all__ = [
    # Discovery
    "detect_workspace",
    "discover_source_files",
    "load_config",
    "load_ignore_rules",
    # Adapters
    "AdapterRegistry",
    "JavaScriptAdapter",
    "default_registry",
    # Services
    "ClassificationEngine",
    "ComponentMatcher",
    "ReachabilityAnalyzer",
    "analyze",
]
