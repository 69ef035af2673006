"""Tree-sitter source parser adapter.

Implements ImportParserPort for JavaScript/TypeScript.
One parse of a file yields its import records, call graph, binding
usage and member accesses.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from reachcheck.domain.exceptions.parsing import ParsingError
from reachcheck.domain.model.import_record import ImportRecord
from reachcheck.domain.model.parsed_file import ParsedFile
from reachcheck.domain.ports.import_parser import ImportParserPort
from reachcheck.infrastructure.analyzers.call_graph_analyzer import CallGraphAnalyzer
from reachcheck.infrastructure.analyzers.import_analyzer import ImportAnalyzer
from reachcheck.infrastructure.analyzers.syntax import parse_tree

# Bumped whenever extraction output changes; invalidates cached parses
PARSER_VERSION = "2"


class TreeSitterImportParser(ImportParserPort):
    """Parser using tree-sitter grammars to extract imports and usage.

    Stateless between calls; safe to share between threads.
    """

    def __init__(self) -> None:
        self._import_analyzer = ImportAnalyzer()
        self._call_graph_analyzer = CallGraphAnalyzer()

    @property
    def version(self) -> str:
        """Extraction format version (cache key component)."""
        return PARSER_VERSION

    def parse(self, content: str, path: Path) -> tuple[ImportRecord, ...]:
        """Extract import records in source order.

        Args:
            content: File content
            path: File identity (selects grammar, stamped into locations)

        Returns:
            Import records, one per occurrence

        Raises:
            ParsingError: If the extension is unsupported or the parser fails
        """
        tree = parse_tree(content, path)
        return self._import_analyzer.analyze(tree.root_node, path)

    def parse_source(self, content: str, path: Path) -> ParsedFile:
        """Extract everything classification needs from one file.

        Args:
            content: File content
            path: File identity

        Returns:
            ParsedFile with records, call graph, binding usage, member accesses

        Raises:
            ParsingError: If the extension is unsupported or the parser fails
        """
        tree = parse_tree(content, path)
        root = tree.root_node
        if root.has_error:
            # Recovered parse: extraction continues on the valid parts
            logger.debug(f"Syntax errors in {path}; extracting from recovered tree")

        records = self._import_analyzer.analyze(root, path)
        call_graph = self._call_graph_analyzer.analyze(root, path)

        local_names = [name for record in records for name in record.local_bindings]
        binding_usage = self._call_graph_analyzer.classify_bindings(call_graph, local_names)

        whole_module = [
            record.local_name
            for record in records
            if record.local_name is not None and not record.is_reexport
        ]
        member_accesses = self._call_graph_analyzer.find_member_accesses(root, whole_module)

        return ParsedFile(
            path=path,
            records=records,
            call_graph=call_graph,
            binding_usage=binding_usage,
            member_accesses=member_accesses,
            has_syntax_errors=root.has_error,
        )

    def parse_file(self, path: Path) -> ParsedFile:
        """Read and parse one file.

        Args:
            path: Source file

        Returns:
            ParsedFile

        Raises:
            ParsingError: If the file cannot be read, decoded or parsed
        """
        return self.parse_source(read_source(path), path)


def read_source(path: Path) -> str:
    """Read a source file as UTF-8.

    Raises:
        ParsingError: If the file cannot be read or decoded
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ParsingError(path, "file not found") from e
    except PermissionError as e:
        raise ParsingError(path, "permission denied") from e
    except UnicodeDecodeError as e:
        raise ParsingError(path, f"encoding error: {e}") from e
    except OSError as e:
        raise ParsingError(path, f"read error: {e}") from e
