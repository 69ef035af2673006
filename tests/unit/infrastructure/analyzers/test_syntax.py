"""Tests for infrastructure/analyzers/syntax.py."""

from pathlib import Path

import pytest

from reachcheck.domain.exceptions.parsing import ParsingError
from reachcheck.infrastructure.analyzers.syntax import (
    SKIP_CHILDREN,
    TreeVisitor,
    grammar_for,
    make_location,
    parse_tree,
    string_value,
)

JS_FILE = Path("/test/src/index.js")


def find(node, node_type: str):
    """First descendant of node_type, depth-first."""
    if node.type == node_type:
        return node
    for child in node.children:
        found = find(child, node_type)
        if found is not None:
            return found
    return None


class TestGrammarFor:
    """Tests for grammar_for()."""

    @pytest.mark.parametrize(
        ("name", "grammar"),
        [
            ("a.js", "javascript"),
            ("a.jsx", "javascript"),
            ("a.MJS", "javascript"),
            ("a.ts", "typescript"),
            ("a.cts", "typescript"),
            ("a.tsx", "tsx"),
        ],
    )
    def test_known_extensions(self, name: str, grammar: str) -> None:
        assert grammar_for(Path(name)) == grammar

    def test_unknown_extension(self) -> None:
        with pytest.raises(ParsingError, match=r"'\.py'"):
            grammar_for(Path("a.py"))


class TestStringValue:
    """Tests for string_value()."""

    def test_quoted_string(self) -> None:
        tree = parse_tree("x('lodash');", JS_FILE)

        assert string_value(find(tree.root_node, "string")) == "lodash"

    def test_plain_template(self) -> None:
        tree = parse_tree("x(`lodash`);", JS_FILE)

        assert string_value(find(tree.root_node, "template_string")) == "lodash"

    def test_template_with_substitution(self) -> None:
        tree = parse_tree("x(`./${name}`);", JS_FILE)

        assert string_value(find(tree.root_node, "template_string")) is None

    def test_non_string(self) -> None:
        tree = parse_tree("x(name);", JS_FILE)

        assert string_value(find(tree.root_node, "arguments")) is None
        assert string_value(None) is None


class TestMakeLocation:
    """Tests for make_location()."""

    def test_positions(self) -> None:
        tree = parse_tree("\n  foo();\n", JS_FILE)

        location = make_location(find(tree.root_node, "call_expression"), JS_FILE)

        assert location.file == JS_FILE
        assert location.line == 2
        assert location.column == 2
        assert location.snippet == "foo()"


class TestTreeVisitor:
    """Tests for TreeVisitor dispatch."""

    def test_visits_in_source_order(self) -> None:
        class Names(TreeVisitor):
            def __init__(self) -> None:
                self.names: list[str] = []

            def visit_identifier(self, node) -> None:
                self.names.append(node.text.decode())

        visitor = Names()
        visitor.visit(parse_tree("a(b, c);\nd;", JS_FILE).root_node)

        assert visitor.names == ["a", "b", "c", "d"]

    def test_skip_children(self) -> None:
        class Calls(TreeVisitor):
            def __init__(self) -> None:
                self.count = 0

            def visit_call_expression(self, node) -> object:
                self.count += 1
                return SKIP_CHILDREN

        visitor = Calls()
        visitor.visit(parse_tree("outer(inner());", JS_FILE).root_node)

        assert visitor.count == 1

    def test_enter_leave_balanced(self) -> None:
        class Depth(TreeVisitor):
            def __init__(self) -> None:
                self.depth = 0
                self.max_depth = 0

            def enter(self, node) -> None:
                self.depth += 1
                self.max_depth = max(self.max_depth, self.depth)

            def leave(self, node) -> None:
                self.depth -= 1

        visitor = Depth()
        visitor.visit(parse_tree("if (a) { b(); }", JS_FILE).root_node)

        assert visitor.depth == 0
        assert visitor.max_depth > 3

    def test_deep_nesting_does_not_recurse(self) -> None:
        code = "x = " + "[" * 2000 + "]" * 2000 + ";"

        TreeVisitor().visit(parse_tree(code, JS_FILE).root_node)

