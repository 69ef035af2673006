"""Tree-sitter analyzers for JavaScript/TypeScript code."""

from reachcheck.infrastructure.analyzers.call_graph_analyzer import CallGraphAnalyzer
from reachcheck.infrastructure.analyzers.context import AnalysisContext, ContextType
from reachcheck.infrastructure.analyzers.import_analyzer import ImportAnalyzer
from reachcheck.infrastructure.analyzers.reexport_resolver import (
    ReexportResolver,
    resolve_import_path,
)
from reachcheck.infrastructure.analyzers.syntax import TreeVisitor, parse_tree

__all__ = [
    "AnalysisContext",
    "CallGraphAnalyzer",
    "ContextType",
    "ImportAnalyzer",
    "ReexportResolver",
    "TreeVisitor",
    "parse_tree",
    "resolve_import_path",
]
