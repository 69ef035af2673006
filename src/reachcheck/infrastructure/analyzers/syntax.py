"""Tree-sitter utilities shared by the JavaScript/TypeScript analyzers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from tree_sitter_language_pack import get_parser

from reachcheck.domain.exceptions.parsing import ParsingError
from reachcheck.domain.model.location import Location

if TYPE_CHECKING:
    from pathlib import Path

    from tree_sitter import Node, Tree

# Grammar per file extension; JSX parses with the javascript grammar
GRAMMAR_BY_EXTENSION: Final = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

SNIPPET_LENGTH: Final = 100

# Returned by a visit_* handler to skip the node's subtree
SKIP_CHILDREN: Final = object()


def grammar_for(path: Path) -> str:
    """Select grammar name from file extension.

    Args:
        path: Source file path

    Returns:
        tree-sitter-language-pack grammar name

    Raises:
        ParsingError: If the extension is not JavaScript/TypeScript
    """
    grammar = GRAMMAR_BY_EXTENSION.get(path.suffix.lower())
    if grammar is None:
        raise ParsingError(path, f"unsupported file extension {path.suffix!r}")
    return grammar


def parse_tree(content: str, path: Path) -> Tree:
    """Parse content with the grammar matching path.

    tree-sitter recovers from syntax errors, so a tree is always produced
    for decodable content; callers inspect root_node.has_error.

    Args:
        content: File content
        path: File identity (selects grammar)

    Returns:
        Concrete syntax tree

    Raises:
        ParsingError: If the grammar is unavailable or parsing fails
    """
    grammar = grammar_for(path)
    try:
        # Parser objects are not shared between threads; one per parse
        parser = get_parser(grammar)
        return parser.parse(content.encode("utf-8"))
    except (LookupError, ValueError, RuntimeError) as e:
        raise ParsingError(path, f"tree-sitter {grammar} parser failed: {e}") from e


def node_text(node: Node | None) -> str:
    """Decoded source text of a node ('' for None)."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def make_location(node: Node, path: Path) -> Location:
    """Create Location from tree-sitter node.

    Args:
        node: Node with position info
        path: Source file path

    Returns:
        Location pointing to node (1-based line, 0-based column)
    """
    start_row, start_col = node.start_point[0], node.start_point[1]
    end_row, end_col = node.end_point[0], node.end_point[1]
    snippet = node_text(node)[:SNIPPET_LENGTH]
    return Location(
        file=path,
        line=start_row + 1,
        column=start_col,
        end_line=end_row + 1,
        end_column=end_col,
        snippet=snippet or None,
    )


def string_value(node: Node | None) -> str | None:
    """Literal value of a string or substitution-free template string.

    Returns:
        Unquoted value, or None when node is not a static string
    """
    if node is None:
        return None
    if node.type == "string":
        return node_text(node)[1:-1]
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.children):
            return None
        return node_text(node)[1:-1]
    return None


def first_argument(call: Node) -> Node | None:
    """First argument expression of a call/new expression."""
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return None
    for child in arguments.named_children:
        if child.type != "comment":
            return child
    return None


def unwrap_parentheses(node: Node) -> Node:
    """Strip any number of enclosing parenthesized_expression layers."""
    while node.type == "parenthesized_expression" and node.named_child_count > 0:
        node = node.named_children[0]
    return node


def is_field(node: Node, parent: Node | None, field_name: str) -> bool:
    """Check if node is the given field of parent."""
    if parent is None:
        return False
    return parent.child_by_field_name(field_name) == node


class TreeVisitor:
    """Iterative tree-sitter walker dispatching visit_<node type> methods.

    Mirrors ast.NodeVisitor: handlers are looked up by node type. A
    handler returning SKIP_CHILDREN prunes the subtree. enter()/leave()
    hooks bracket every node, which lets subclasses keep a context stack.
    Iterative, so deeply nested sources never hit the recursion limit.
    """

    def visit(self, root: Node) -> None:
        """Walk root and its descendants in source order."""
        stack: list[tuple[Node, bool]] = [(root, False)]
        while stack:
            node, leaving = stack.pop()
            if leaving:
                self.leave(node)
                continue

            self.enter(node)
            stack.append((node, True))

            handler = getattr(self, f"visit_{node.type}", None)
            if handler is not None and handler(node) is SKIP_CHILDREN:
                continue

            stack.extend((child, False) for child in reversed(node.children))

    def enter(self, node: Node) -> None:
        """Called before a node's handler and children."""

    def leave(self, node: Node) -> None:
        """Called after a node's children."""
