"""Discovery of source files, workspaces and configuration."""

from reachcheck.application.discovery.config import load_config
from reachcheck.application.discovery.files import (
    IgnoreRules,
    discover_source_files,
    load_ignore_rules,
)
from reachcheck.application.discovery.workspace import detect_workspace

__all__ = [
    "IgnoreRules",
    "detect_workspace",
    "discover_source_files",
    "load_config",
    "load_ignore_rules",
]
